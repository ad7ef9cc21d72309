"""SKU alias SQLAlchemy model."""

from sqlalchemy import Column, Integer, Text, Float, DateTime, Index
from sqlalchemy.sql import func

from .base import Base


class SkuAlias(Base):
    """Free-text alias known to refer to a catalog SKU.

    Many aliases may point to one SKU. ``score_boost`` lies in (0, 1].
    """
    __tablename__ = "sku_alias"
    __table_args__ = (
        Index("ix_sku_alias_sku_code", "sku_code"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    alias = Column(Text, nullable=False)
    sku_code = Column(Text, nullable=False)
    score_boost = Column(Float, nullable=False, server_default="0.3")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
