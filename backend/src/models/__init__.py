"""SQLAlchemy Models for QuoteFlow"""

from .base import Base
from .catalog_sku import CatalogSku
from .sku_alias import SkuAlias

__all__ = [
    "Base",
    "CatalogSku",
    "SkuAlias",
]
