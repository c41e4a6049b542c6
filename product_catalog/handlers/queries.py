"""
Product Read API

Read handlers never mutate the store. A missing product is an absent result
(None or an empty list), never an exception. Store failures propagate as the
StoreError the adapter raised.
"""

import logging
from typing import List, Optional

from ..core import StoreAdapter
from ..models import Product, ProductPage

logger = logging.getLogger(__name__)


class ProductReadApi:
    """
    Read-only API for product queries.

    Access patterns:
    - GetItem by id
    - Full scan, drained page by page or returned one page at a time
    - Equality query on the category GSI
    """

    def __init__(self, store: StoreAdapter):
        """Initialize read API with the store it reads from."""
        self.store = store

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """
        Get a product by id.

        Args:
            product_id: Product identifier

        Returns:
            Product if found, None otherwise
        """
        return self.store.get_by_key(product_id)

    def list_all(self) -> List[Product]:
        """
        List every product in the catalog.

        Walks the store's paginated scan to the end; prefer list_page() when
        the catalog is large.

        Returns:
            List of products, unordered
        """
        products = list(self.store.scan_all().items())
        logger.debug(f"Listed {len(products)} products")
        return products

    def list_page(self, limit: Optional[int] = None, next_token: Optional[str] = None) -> ProductPage:
        """
        List one page of products.

        Args:
            limit: Maximum items in the page (store default if None)
            next_token: Token from the previous page, None for the first page

        Returns:
            ProductPage with items and the token for the next page
        """
        return self.store.scan_page(limit=limit, next_token=next_token)

    def by_category(self, category: str) -> List[Product]:
        """
        List products in a category.

        Args:
            category: Category to match exactly

        Returns:
            Products whose category equals the argument (possibly empty)
        """
        return self.store.query_by_secondary_index(category)
