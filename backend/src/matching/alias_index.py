"""Build-once, read-only alias index keyed by SKU code."""

import logging
from collections import OrderedDict
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .ports import AliasEntry, AliasProvider, AliasSourceError

logger = logging.getLogger(__name__)

DEFAULT_ALIAS_BOOST = 0.3

# Minimal coverage used when the alias dataset is unavailable
SEED_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "NFC25": ("25mm", "25", "corrugated", "flexible"),
    "NFC32": ("32mm", "32", "corrugated", "flexible"),
    "PVC25M": ("25mm", "25", "pvc", "conduit", "medium"),
    "GFB3OCT": ("fan box", '3"', "3 inch", "octagonal"),
})

AliasBoost = Tuple[str, float]


class AliasIndex:
    """Immutable mapping of SKU code to its (alias, boost) pairs.

    Aliases keep the order in which they were loaded so scoring is
    reproducible.
    """

    def __init__(self, groups: Mapping[str, Iterable[AliasBoost]], is_seed: bool = False):
        self._groups: Mapping[str, Tuple[AliasBoost, ...]] = MappingProxyType(
            {sku_code: tuple(pairs) for sku_code, pairs in groups.items()}
        )
        self.is_seed = is_seed

    @classmethod
    def from_entries(cls, entries: Iterable[AliasEntry]) -> "AliasIndex":
        """Group alias entries by SKU code."""
        groups: Dict[str, List[AliasBoost]] = OrderedDict()
        for entry in entries:
            alias = entry.alias.strip().lower()
            if not alias or not entry.sku_code:
                continue
            groups.setdefault(entry.sku_code, []).append((alias, entry.boost))
        return cls(groups)

    @classmethod
    def seed(cls) -> "AliasIndex":
        """Index built from the built-in seed table."""
        groups = {
            sku_code: [(alias.lower(), DEFAULT_ALIAS_BOOST) for alias in aliases]
            for sku_code, aliases in SEED_ALIASES.items()
        }
        return cls(groups, is_seed=True)

    @classmethod
    def load(cls, provider: Optional[AliasProvider]) -> "AliasIndex":
        """Build the index from a provider, falling back to the seed table.

        Alias coverage only improves scores, so an unavailable or empty source
        degrades matching instead of failing it.

        Args:
            provider: Alias source (None to use the seed table)

        Returns:
            AliasIndex
        """
        if provider is None:
            logger.warning("No alias source configured, using built-in seed aliases")
            return cls.seed()

        try:
            entries = provider.get_alias_entries()
        except AliasSourceError as e:
            logger.warning(f"Failed to load SKU aliases, using built-in seed aliases: {e}")
            return cls.seed()

        index = cls.from_entries(entries)
        if not index:
            logger.warning("Alias source returned no entries, using built-in seed aliases")
            return cls.seed()

        logger.info(
            f"Loaded {index.alias_count} aliases for {len(index)} SKUs"
        )
        return index

    def boosts_for(self, sku_code: str) -> Tuple[AliasBoost, ...]:
        return self._groups.get(sku_code, ())

    @property
    def alias_count(self) -> int:
        return sum(len(pairs) for pairs in self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)
