"""Database backed catalog and alias providers."""

import logging
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from matching.ports import (
    AliasEntry,
    AliasProvider,
    AliasSourceError,
    CatalogEntry,
    CatalogProvider,
    CatalogUnavailableError,
)
from models.catalog_sku import CatalogSku
from models.sku_alias import SkuAlias

logger = logging.getLogger(__name__)


def catalog_entry_from_row(row: CatalogSku) -> CatalogEntry:
    return CatalogEntry(
        sku_code=row.sku_code,
        product_family=row.product_family,
        description=row.description,
        uom=row.uom,
        material=row.material,
        alt_material=row.alt_material,
        gauge=row.gauge,
        size_od_mm=row.size_od_mm,
        tolerance_mm=row.tolerance_mm,
        rate=row.rate if row.rate is not None else 0.0,
        lead_time_days=row.lead_time_days if row.lead_time_days is not None else 7,
        moq=row.moq if row.moq is not None else 1.0,
        hsn_code=row.hsn_code or "00000000",
        coil_length_m=row.coil_length_m,
        colour=row.colour,
        aux_size=row.aux_size,
        rate_alt=row.rate_alt,
    )


class SqlCatalogProvider(CatalogProvider):
    """Reads active catalog_sku rows in insertion (id) order."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_all_catalog_entries(self) -> list[CatalogEntry]:
        try:
            with self.session_factory() as session:
                rows = session.execute(
                    select(CatalogSku)
                    .where(CatalogSku.active.is_(True))
                    .order_by(CatalogSku.id)
                ).scalars().all()
                entries = [catalog_entry_from_row(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Catalog query failed: {e}", extra={"error_type": type(e).__name__})
            raise CatalogUnavailableError("Catalog database unavailable") from e

        if not entries:
            raise CatalogUnavailableError("catalog_sku has no active SKUs")

        return entries


class SqlAliasProvider(AliasProvider):
    """Reads all sku_alias rows."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_alias_entries(self) -> list[AliasEntry]:
        try:
            with self.session_factory() as session:
                rows = session.execute(select(SkuAlias).order_by(SkuAlias.id)).scalars().all()
                return [
                    AliasEntry(
                        alias=row.alias.strip().lower(),
                        sku_code=row.sku_code,
                        boost=row.score_boost if row.score_boost else 0.3,
                    )
                    for row in rows
                ]
        except SQLAlchemyError as e:
            raise AliasSourceError("Alias table unavailable") from e
