"""Hard-constraint filter applied before scoring.

A textually similar SKU of the wrong family, size class or material must never
reach the scorer, otherwise a high fuzzy score could mask a wrong product.
"""

from typing import Optional

from .config import MappingConfig
from .ports import CatalogEntry, RequestLine
from .rules import UNKNOWN_FAMILY, infer_product_family, is_material_compatible


class HardConstraintFilter:
    """Decide whether a SKU is an admissible candidate for a line."""

    def __init__(self, config: MappingConfig):
        self.config = config

    def tolerance_for(self, sku: CatalogEntry) -> float:
        """SKU tolerance, or the global default when the SKU has none."""
        if sku.tolerance_mm:
            return sku.tolerance_mm
        return self.config.size_tolerance_mm

    def admissible(
        self,
        line: RequestLine,
        sku: CatalogEntry,
        line_family: Optional[str] = None
    ) -> bool:
        """Check family, size and material constraints.

        Args:
            line: Normalized request line
            sku: Catalog entry
            line_family: Pre-computed family of the line (inferred if None)

        Returns:
            True if every applicable constraint holds
        """
        if line_family is None:
            line_family = infer_product_family(line.input_text)

        # Family
        if line_family != UNKNOWN_FAMILY and sku.product_family != line_family:
            return False

        # Size tolerance
        line_size = line.normalized.size_mm
        if line_size and sku.size_od_mm:
            if abs(line_size - sku.size_od_mm) > self.tolerance_for(sku):
                return False

        # Material compatibility
        line_material = line.normalized.material
        if line_material and sku.material:
            if not is_material_compatible(line_material, sku):
                return False

        return True
