"""Pydantic schemas for the catalog domain (price master rows, SKU aliases)"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from matching.ports import AliasEntry, CatalogEntry

DEFAULT_HSN_CODE = "00000000"
DEFAULT_ALIAS_BOOST = 0.3

REQUIRED_PRICE_MASTER_COLUMNS = ("sku_code", "product_family", "description", "uom", "material")
REQUIRED_ALIAS_COLUMNS = ("alias", "sku_code", "score_boost")


def _drop_blank_values(data: Any) -> Any:
    """Strip string cells and drop blank ones so field defaults apply."""
    if not isinstance(data, dict):
        return data
    cleaned = {}
    for key, value in data.items():
        if key is None or value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        cleaned[key] = value
    return cleaned


class PriceMasterRow(BaseModel):
    """Schema for a single price master CSV row"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sku_code: str = Field(..., min_length=1)
    product_family: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    uom: str = Field(..., min_length=1)
    material: str = Field(..., min_length=1)
    alt_material: Optional[str] = None
    gauge: Optional[str] = None
    size_od_mm: Optional[float] = Field(None, gt=0)
    tolerance_mm: Optional[float] = Field(None, gt=0)
    rate: float = Field(0.0, ge=0, validation_alias=AliasChoices("rate", "rate_inr"))
    rate_alt: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("rate_alt", "rate_alt_inr"))
    lead_time_days: int = Field(7, ge=0)
    moq: float = Field(1.0, ge=0)
    hsn_code: str = DEFAULT_HSN_CODE
    coil_length_m: Optional[float] = Field(None, gt=0)
    colour: Optional[str] = None
    aux_size: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_blank_cells(cls, data: Any) -> Any:
        return _drop_blank_values(data)

    @field_validator("material", "alt_material", "gauge")
    @classmethod
    def uppercase_codes(cls, v: Optional[str]) -> Optional[str]:
        """Material and gauge codes are compared upper-case"""
        return v.upper() if v else v

    @field_validator("lead_time_days", mode="before")
    @classmethod
    def parse_lead_time(cls, v: Any) -> Any:
        # "7.0" from spreadsheet exports
        if isinstance(v, str) and v.replace(".", "", 1).isdigit():
            return int(float(v))
        return v

    def to_catalog_entry(self) -> CatalogEntry:
        return CatalogEntry(
            sku_code=self.sku_code,
            product_family=self.product_family,
            description=self.description,
            uom=self.uom,
            material=self.material,
            alt_material=self.alt_material,
            gauge=self.gauge,
            size_od_mm=self.size_od_mm,
            tolerance_mm=self.tolerance_mm,
            rate=self.rate,
            lead_time_days=self.lead_time_days,
            moq=self.moq,
            hsn_code=self.hsn_code,
            coil_length_m=self.coil_length_m,
            colour=self.colour,
            aux_size=self.aux_size,
            rate_alt=self.rate_alt,
        )


class SkuAliasRow(BaseModel):
    """Schema for a single SKU alias CSV row"""
    model_config = ConfigDict(extra="ignore")

    alias: str = Field(..., min_length=1)
    sku_code: str = Field(..., min_length=1)
    score_boost: float = Field(DEFAULT_ALIAS_BOOST, gt=0, le=1)

    @model_validator(mode="before")
    @classmethod
    def drop_blank_cells(cls, data: Any) -> Any:
        return _drop_blank_values(data)

    @field_validator("score_boost", mode="before")
    @classmethod
    def default_unparseable_boost(cls, v: Any) -> Any:
        """Unparseable, zero or negative boosts fall back to the default boost"""
        try:
            boost = float(v)
        except (TypeError, ValueError):
            return DEFAULT_ALIAS_BOOST
        if not boost > 0:
            return DEFAULT_ALIAS_BOOST
        return boost

    @field_validator("alias")
    @classmethod
    def lowercase_alias(cls, v: str) -> str:
        return v.lower()

    def to_alias_entry(self) -> AliasEntry:
        return AliasEntry(alias=self.alias, sku_code=self.sku_code, boost=self.score_boost)


class CatalogImportError(BaseModel):
    """Schema for a rejected import row"""
    row: int
    sku: Optional[str] = None
    error: str


class CatalogImportResult(BaseModel):
    """Schema for catalog or alias import result"""
    total_rows: int = 0
    imported_count: int = 0
    error_count: int = 0
    errors: list[CatalogImportError] = Field(default_factory=list)


class CatalogSkuResponse(BaseModel):
    """Schema for a catalog SKU in API responses"""
    model_config = ConfigDict(from_attributes=True)

    sku_code: str
    product_family: str
    description: str
    uom: str
    material: Optional[str] = None
    alt_material: Optional[str] = None
    gauge: Optional[str] = None
    size_od_mm: Optional[float] = None
    tolerance_mm: Optional[float] = None
    rate: float
    lead_time_days: int
    moq: float
    hsn_code: str


class CatalogListResponse(BaseModel):
    """Paginated list of snapshot SKUs."""
    items: list[CatalogSkuResponse]
    total: int
    limit: int
    offset: int
