"""
Product domain model and the paginated read model built on it.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import DynamoDBMixin


class Product(DynamoDBMixin, BaseModel):
    """
    The single persisted catalog entity.

    Only ``id`` and ``category`` are known to this layer. Any other attribute
    the caller sends is kept as an extra field and stored as-is.
    """

    id: str = Field(..., min_length=1, description="Unique product identifier (primary key)")
    category: Optional[str] = Field(None, description="Category, indexed by the category GSI")

    model_config = ConfigDict(extra='allow')

    class Meta:
        partition_key = 'id'
        sort_key = None
        gsis = [
            {'name': 'CategoryIndex', 'partition_key': 'category'},
        ]


class ProductPage(BaseModel):
    """One page of products plus the opaque token for the next page."""

    items: List[Product] = Field(default_factory=list, description="Products in this page")
    next_token: Optional[str] = Field(None, description="Token for the next page, None on the last page")

    @property
    def has_more(self) -> bool:
        return self.next_token is not None
