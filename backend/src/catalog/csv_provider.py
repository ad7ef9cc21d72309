"""CSV-file backed catalog and alias providers."""

import logging
from pathlib import Path
from typing import Union

from matching.ports import (
    AliasEntry,
    AliasProvider,
    AliasSourceError,
    CatalogEntry,
    CatalogProvider,
    CatalogUnavailableError,
)
from .import_service import parse_price_master, parse_sku_aliases

logger = logging.getLogger(__name__)


class CsvCatalogProvider(CatalogProvider):
    """Reads the price master CSV on every call.

    Rows failing validation are skipped with a warning; a missing file,
    a missing required column, or a file with no valid rows is an error.
    """

    def __init__(self, csv_path: Union[str, Path]):
        self.csv_path = Path(csv_path)

    def get_all_catalog_entries(self) -> list[CatalogEntry]:
        try:
            file_bytes = self.csv_path.read_bytes()
        except OSError as e:
            raise CatalogUnavailableError(f"Price master not readable: {self.csv_path}") from e

        try:
            parsed = parse_price_master(file_bytes)
        except ValueError as e:
            raise CatalogUnavailableError(f"Price master {self.csv_path}: {e}") from e

        for error in parsed.result.errors:
            logger.warning(
                f"Skipping price master row {error.row} ({error.sku or '?'}): {error.error}"
            )

        if not parsed.entries:
            raise CatalogUnavailableError(f"Price master has no valid SKUs: {self.csv_path}")

        logger.info(
            f"Loaded price master from {self.csv_path}",
            extra={"sku_count": len(parsed.entries)},
        )
        return parsed.entries


class CsvAliasProvider(AliasProvider):
    """Reads the SKU alias CSV on every call."""

    def __init__(self, csv_path: Union[str, Path]):
        self.csv_path = Path(csv_path)

    def get_alias_entries(self) -> list[AliasEntry]:
        try:
            file_bytes = self.csv_path.read_bytes()
        except OSError as e:
            raise AliasSourceError(f"Alias file not readable: {self.csv_path}") from e

        try:
            parsed = parse_sku_aliases(file_bytes)
        except ValueError as e:
            raise AliasSourceError(f"Alias file {self.csv_path}: {e}") from e

        for error in parsed.result.errors:
            logger.warning(f"Skipping alias row {error.row}: {error.error}")

        return parsed.entries
