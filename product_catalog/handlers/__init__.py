"""
Handler Layer for the Product Catalog

Each handler performs one CRUD or lookup action against the injected
StoreAdapter. Reads live in queries.py and writes in commands.py.

Architecture:
router -> pipeline stages -> handlers/ (this layer) -> core/ (store) -> DynamoDB
"""

from .commands import ProductWriteApi, generate_product_id
from .queries import ProductReadApi

__all__ = [
    'ProductReadApi',
    'ProductWriteApi',
    'generate_product_id',
]
