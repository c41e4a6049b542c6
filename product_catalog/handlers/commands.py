"""
Product Write API

Write handlers check only that the primary key is present where an operation
requires it. Every other attribute is passed to the store unvalidated, and
store failures propagate unmodified. Each call writes or deletes at most one
item, so a failed call leaves the store as it was.
"""

import logging
import uuid
from typing import Any, Dict, Mapping, Union

from ..core import StoreAdapter
from ..exceptions import ValidationError
from ..models import Product

logger = logging.getLogger(__name__)

ProductInput = Union[Product, Mapping[str, Any]]


def generate_product_id() -> str:
    """Generate a new, caller-independent product id."""
    return str(uuid.uuid4())


class ProductWriteApi:
    """
    Write-only API for product mutations.

    All writes are unconditional puts (last write wins); update is a full
    replacement of the stored item.
    """

    def __init__(self, store: StoreAdapter):
        """Initialize write API with the store it writes to."""
        self.store = store

    def create(self, product: ProductInput) -> Product:
        """
        Create a product, assigning an id when the caller did not supply one.

        DynamoDB Operation: PutItem (unconditional)

        Args:
            product: Product attributes, with or without ``id``

        Returns:
            The stored product, including its id

        Raises:
            ValidationError: Product is not a mapping or cannot form a Product
        """
        data = _as_dict(product, "createProduct")
        if not data.get('id'):
            data['id'] = generate_product_id()

        stored = self.store.put(_build_product(data))
        logger.info(f"Created product: {stored.id}")
        return stored

    def update(self, product: ProductInput) -> Product:
        """
        Replace a product's stored attributes.

        DynamoDB Operation: PutItem (unconditional, full replace)

        Args:
            product: Complete product attributes; ``id`` is required

        Returns:
            The stored product

        Raises:
            ValidationError: ``id`` is missing; nothing is written
        """
        data = _as_dict(product, "updateProduct")
        if not data.get('id'):
            raise ValidationError("Product id is required for update", {'id': 'missing'})

        stored = self.store.put(_build_product(data))
        logger.info(f"Updated product: {stored.id}")
        return stored

    def delete(self, product_id: str) -> str:
        """
        Delete a product. Deleting an id that does not exist is not an error.

        DynamoDB Operation: DeleteItem (unconditional)

        Args:
            product_id: Product identifier

        Returns:
            The deleted id

        Raises:
            ValidationError: ``product_id`` is missing; nothing is deleted
        """
        if not product_id:
            raise ValidationError("Product id is required for delete", {'productId': 'missing'})

        self.store.delete(product_id)
        logger.info(f"Deleted product: {product_id}")
        return product_id


def _as_dict(product: Any, operation: str) -> Dict[str, Any]:
    if isinstance(product, Product):
        return product.model_dump(exclude_none=True)
    if isinstance(product, Mapping):
        return dict(product)
    raise ValidationError(
        f"{operation} expects a product object, got {type(product).__name__}",
        {'product': 'not an object'}
    )


def _build_product(data: Dict[str, Any]) -> Product:
    try:
        return Product(**data)
    except Exception as e:
        raise ValidationError(f"Invalid product data: {e}", original_error=e) from e
