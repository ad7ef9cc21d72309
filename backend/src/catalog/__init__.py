"""Catalog domain module: price master and SKU alias sources"""

from .csv_provider import CsvAliasProvider, CsvCatalogProvider
from .sql_provider import SqlAliasProvider, SqlCatalogProvider
from .import_service import CatalogImportService, parse_price_master, parse_sku_aliases
from .schemas import CatalogImportResult, PriceMasterRow, SkuAliasRow

__all__ = [
    "CsvAliasProvider",
    "CsvCatalogProvider",
    "SqlAliasProvider",
    "SqlCatalogProvider",
    "CatalogImportService",
    "parse_price_master",
    "parse_sku_aliases",
    "CatalogImportResult",
    "PriceMasterRow",
    "SkuAliasRow",
]
