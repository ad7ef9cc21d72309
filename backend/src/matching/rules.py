"""Rule tables for family inference and family-specific material handling.

The tables are plain data so new families and hierarchies can be added without
touching the filter or the scorer.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from .ports import CatalogEntry


UNKNOWN_FAMILY = "Unknown"
CORRUGATED_FLEXIBLE_PIPE = "Corrugated Flexible Pipe"
RIGID_PVC_CONDUIT = "Rigid PVC Conduit"

# Canonical material codes
MATERIAL_CODES = frozenset({"PVC", "PP", "FRPP", "FR", "MS", "NYLON", "HDPE", "LDPE"})


@dataclass(frozen=True)
class FamilyRule:
    """Infer a product family when the description carries keywords.

    Attributes:
        family: Family assigned on match
        any_of: At least one of these keywords must occur (ignored if empty)
        all_of: All of these keywords must occur (ignored if empty)
    """
    family: str
    any_of: Tuple[str, ...] = ()
    all_of: Tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if self.any_of and not any(keyword in text for keyword in self.any_of):
            return False
        return all(keyword in text for keyword in self.all_of)


# Evaluated in order, first match wins
FAMILY_RULES: Tuple[FamilyRule, ...] = (
    FamilyRule(CORRUGATED_FLEXIBLE_PIPE, any_of=("corrugated", "flexible", "cfp")),
    FamilyRule(RIGID_PVC_CONDUIT, all_of=("pvc", "conduit")),
    FamilyRule("GI Fan Box", all_of=("fan", "box")),
    FamilyRule("MS Box", any_of=("modular", "switch", "msb")),
    FamilyRule("Cable Gland", all_of=("cable", "gland")),
    FamilyRule("Cable Tie", any_of=("tie", "ties"), all_of=("cable",)),
    FamilyRule("GI Junction Box", all_of=("junction", "box")),
    FamilyRule("Accessories", any_of=("clamp", "saddle")),
)


@dataclass(frozen=True)
class MaterialCompatibilityRule:
    """Family-specific material hierarchy entry.

    A requested material is compatible with a SKU of ``family`` when the SKU's
    material is in ``materials`` or its alternate material is in
    ``alt_materials``.
    """
    family: str
    requested: str
    materials: FrozenSet[str] = frozenset()
    alt_materials: FrozenSet[str] = frozenset()

    def allows(self, sku: CatalogEntry) -> bool:
        material = (sku.material or "").upper()
        alt_material = (sku.alt_material or "").upper()
        return material in self.materials or alt_material in self.alt_materials


MATERIAL_COMPATIBILITY_RULES: Tuple[MaterialCompatibilityRule, ...] = (
    # FRPP is a refinement of PP
    MaterialCompatibilityRule(
        CORRUGATED_FLEXIBLE_PIPE, "FRPP",
        materials=frozenset({"PP"}), alt_materials=frozenset({"FRPP"}),
    ),
    MaterialCompatibilityRule(
        CORRUGATED_FLEXIBLE_PIPE, "FR",
        materials=frozenset({"PP"}), alt_materials=frozenset({"FRPP"}),
    ),
    MaterialCompatibilityRule(
        CORRUGATED_FLEXIBLE_PIPE, "PP",
        materials=frozenset({"PP"}),
    ),
)

# Families where an exact material match also requires a gauge match
GAUGE_SENSITIVE_FAMILIES: FrozenSet[str] = frozenset({RIGID_PVC_CONDUIT})


def infer_product_family(description: Optional[str]) -> str:
    """Infer the product family from description keywords.

    Args:
        description: Free text of the request line

    Returns:
        Family name, or "Unknown" if no rule matches
    """
    if not description:
        return UNKNOWN_FAMILY

    text = description.lower()
    for rule in FAMILY_RULES:
        if rule.matches(text):
            return rule.family
    return UNKNOWN_FAMILY


def is_material_compatible(requested: str, sku: CatalogEntry) -> bool:
    """Check requested material against a SKU, honoring family hierarchies.

    Args:
        requested: Canonical requested material code
        sku: Catalog entry

    Returns:
        True on exact match (material or alternate) or a hierarchy rule hit
    """
    requested = requested.upper()
    material = (sku.material or "").upper()
    alt_material = (sku.alt_material or "").upper()

    if requested == material or (alt_material and requested == alt_material):
        return True

    return any(
        rule.family == sku.product_family and rule.requested == requested and rule.allows(sku)
        for rule in MATERIAL_COMPATIBILITY_RULES
    )
