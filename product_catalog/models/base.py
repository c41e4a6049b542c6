"""
Base Model Components and Mixins

DynamoDBMixin gives any pydantic model a canonical conversion to and from the
item shape the boto3 Table resource accepts. Key layout is declared on each
model's inner ``Meta`` class (``partition_key`` and ``gsis``), which the store
adapter reads instead of hard-coding attribute names.
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel

from ..utils import from_dynamodb_types, to_dynamodb_types

logger = logging.getLogger(__name__)


class DynamoDBMixin(BaseModel):
    """
    Mixin providing DynamoDB serialization and deserialization functionality.

    DynamoDB Requirements:
    - float → Decimal (the Table resource rejects floats)
    - None values → dropped (absent attribute)
    - Decimal → int/float on the way back out
    - Other types → unchanged
    """

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Convert model to DynamoDB-compatible item.

        Returns:
            DynamoDB-compatible dictionary ready for storage

        Example:
            item = product.to_dynamodb_item()
            gateway.put_item(item)
        """
        return to_dynamodb_types(self.model_dump(exclude_none=True))

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]):
        """
        Create model instance from DynamoDB item.

        Args:
            item: DynamoDB item dictionary with DynamoDB-specific types

        Returns:
            Model instance with plain Python number types

        Raises:
            ValidationError: If item data is invalid for the model
        """
        try:
            return cls(**from_dynamodb_types(item))
        except Exception as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            from ..exceptions import ValidationError
            raise ValidationError(f"Failed to convert DynamoDB item to {cls.__name__}: {e}") from e
