from .config import CatalogConfig

__all__ = ["CatalogConfig"]
