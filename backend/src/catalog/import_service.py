"""Price master and SKU alias CSV import service"""

import csv
import logging
from dataclasses import dataclass, field
from io import StringIO
from typing import Iterable, Iterator

import chardet
from pydantic import ValidationError
from sqlalchemy.orm import Session

from matching.ports import AliasEntry, CatalogEntry
from models.catalog_sku import CatalogSku
from models.sku_alias import SkuAlias
from .schemas import (
    REQUIRED_ALIAS_COLUMNS,
    REQUIRED_PRICE_MASTER_COLUMNS,
    CatalogImportError,
    CatalogImportResult,
    PriceMasterRow,
    SkuAliasRow,
)

logger = logging.getLogger(__name__)


@dataclass
class PriceMasterParseResult:
    entries: list[CatalogEntry] = field(default_factory=list)
    result: CatalogImportResult = field(default_factory=CatalogImportResult)


@dataclass
class AliasParseResult:
    entries: list[AliasEntry] = field(default_factory=list)
    result: CatalogImportResult = field(default_factory=CatalogImportResult)


def decode_csv_bytes(file_bytes: bytes) -> str:
    """Decode CSV bytes using the detected encoding

    Args:
        file_bytes: Raw CSV file bytes

    Returns:
        Decoded text with any BOM removed
    """
    # Detect encoding
    detected = chardet.detect(file_bytes)
    encoding = detected['encoding'] or 'utf-8'

    try:
        text = file_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        text = file_bytes.decode('utf-8', errors='replace')

    return text.lstrip('\ufeff')


def _read_rows(text: str, required_columns: Iterable[str]) -> Iterator[tuple[int, dict]]:
    """Yield (row_number, row) pairs with lower-cased header names.

    Raises:
        ValueError: If the header lacks a required column
    """
    reader = csv.DictReader(StringIO(text))
    fieldnames = [(name or '').strip().lower() for name in (reader.fieldnames or [])]
    missing = [column for column in required_columns if column not in fieldnames]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")
    reader.fieldnames = fieldnames

    for row_num, row in enumerate(reader, start=2):  # Start at 2 (row 1 is header)
        yield row_num, row


def _format_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'row'}: {err['msg']}"
        for err in exc.errors()
    )


def parse_price_master(file_bytes: bytes) -> PriceMasterParseResult:
    """Parse price master CSV bytes into catalog entries

    Invalid rows are skipped and reported in the result. The first row of
    a duplicated sku_code wins.

    Raises:
        ValueError: If a required column is missing
    """
    parsed = PriceMasterParseResult()
    result = parsed.result
    seen: set[str] = set()

    for row_num, row in _read_rows(decode_csv_bytes(file_bytes), REQUIRED_PRICE_MASTER_COLUMNS):
        result.total_rows += 1
        sku = (row.get('sku_code') or '').strip() or None

        try:
            entry = PriceMasterRow.model_validate(row).to_catalog_entry()
        except ValidationError as e:
            result.error_count += 1
            result.errors.append(CatalogImportError(row=row_num, sku=sku, error=_format_validation_error(e)))
            continue

        if entry.sku_code in seen:
            result.error_count += 1
            result.errors.append(CatalogImportError(row=row_num, sku=sku, error="Duplicate sku_code"))
            continue

        seen.add(entry.sku_code)
        parsed.entries.append(entry)
        result.imported_count += 1

    return parsed


def parse_sku_aliases(file_bytes: bytes) -> AliasParseResult:
    """Parse SKU alias CSV bytes into alias entries

    Rows whose alias starts with '#' are comments and are not counted.

    Raises:
        ValueError: If a required column is missing
    """
    parsed = AliasParseResult()
    result = parsed.result

    for row_num, row in _read_rows(decode_csv_bytes(file_bytes), REQUIRED_ALIAS_COLUMNS):
        alias = (row.get('alias') or '').strip()
        if alias.startswith('#'):
            continue

        result.total_rows += 1
        sku = (row.get('sku_code') or '').strip() or None

        try:
            entry = SkuAliasRow.model_validate(row).to_alias_entry()
        except ValidationError as e:
            result.error_count += 1
            result.errors.append(CatalogImportError(row=row_num, sku=sku, error=_format_validation_error(e)))
            continue

        parsed.entries.append(entry)
        result.imported_count += 1

    return parsed


class CatalogImportService:
    """Service for loading price master and alias CSVs into the database"""

    def __init__(self, db: Session):
        self.db = db

    def import_price_master(self, file_bytes: bytes) -> CatalogImportResult:
        """Upsert price master rows into catalog_sku

        Args:
            file_bytes: Raw CSV file bytes

        Returns:
            CatalogImportResult with counts and errors
        """
        parsed = parse_price_master(file_bytes)

        for entry in parsed.entries:
            self._upsert_sku(entry)

        if parsed.entries:
            self.db.commit()

        logger.info(
            "Price master imported",
            extra={"sku_count": parsed.result.imported_count},
        )
        return parsed.result

    def import_aliases(self, file_bytes: bytes) -> CatalogImportResult:
        """Replace the sku_alias table with the aliases in the CSV"""
        parsed = parse_sku_aliases(file_bytes)

        self.db.query(SkuAlias).delete()
        for entry in parsed.entries:
            self.db.add(SkuAlias(
                alias=entry.alias,
                sku_code=entry.sku_code,
                score_boost=entry.boost,
            ))
        self.db.commit()

        logger.info(f"Imported {parsed.result.imported_count} SKU aliases")
        return parsed.result

    def _upsert_sku(self, entry: CatalogEntry) -> None:
        values = {
            "product_family": entry.product_family,
            "description": entry.description,
            "uom": entry.uom,
            "material": entry.material,
            "alt_material": entry.alt_material,
            "gauge": entry.gauge,
            "size_od_mm": entry.size_od_mm,
            "tolerance_mm": entry.tolerance_mm,
            "rate": entry.rate,
            "rate_alt": entry.rate_alt,
            "lead_time_days": entry.lead_time_days,
            "moq": entry.moq,
            "hsn_code": entry.hsn_code,
            "coil_length_m": entry.coil_length_m,
            "colour": entry.colour,
            "aux_size": entry.aux_size,
            "active": True,
        }

        existing = self.db.query(CatalogSku).filter(
            CatalogSku.sku_code == entry.sku_code
        ).first()

        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
        else:
            self.db.add(CatalogSku(sku_code=entry.sku_code, **values))
