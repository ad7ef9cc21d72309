"""Catalog SKU SQLAlchemy model (price master row)."""

from sqlalchemy import Column, Integer, Text, Float, Boolean, DateTime, Index
from sqlalchemy.sql import func

from .base import Base


class CatalogSku(Base):
    """Canonical product SKU from the price master.

    Rows are read in ``id`` order so the catalog iteration order, and therefore
    tie-breaking between equally scored candidates, is stable across loads.
    """
    __tablename__ = "catalog_sku"
    __table_args__ = (
        Index("ix_catalog_sku_family", "product_family"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sku_code = Column(Text, nullable=False, unique=True)
    product_family = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    uom = Column(Text, nullable=False)
    material = Column(Text, nullable=True)
    alt_material = Column(Text, nullable=True)
    gauge = Column(Text, nullable=True)
    size_od_mm = Column(Float, nullable=True)
    tolerance_mm = Column(Float, nullable=True)
    rate = Column(Float, nullable=False, server_default="0")
    rate_alt = Column(Float, nullable=True)
    lead_time_days = Column(Integer, nullable=False, server_default="7")
    moq = Column(Float, nullable=False, server_default="1")
    hsn_code = Column(Text, nullable=False, server_default="00000000")
    coil_length_m = Column(Float, nullable=True)
    colour = Column(Text, nullable=True)
    aux_size = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, server_default="1")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
