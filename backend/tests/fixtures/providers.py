"""In-memory catalog and alias providers for tests."""

from typing import List, Optional, Sequence

from matching.ports import (
    AliasEntry,
    AliasProvider,
    AliasSourceError,
    CatalogEntry,
    CatalogProvider,
    CatalogUnavailableError,
)


class StaticCatalogProvider(CatalogProvider):
    """Returns a fixed list; ``entries`` may be swapped between loads."""

    def __init__(self, entries: Sequence[CatalogEntry], fail: bool = False):
        self.entries = list(entries)
        self.fail = fail
        self.calls = 0

    def get_all_catalog_entries(self) -> List[CatalogEntry]:
        self.calls += 1
        if self.fail:
            raise CatalogUnavailableError("catalog source offline")
        return list(self.entries)


class StaticAliasProvider(AliasProvider):
    def __init__(self, entries: Optional[Sequence[AliasEntry]] = None, fail: bool = False):
        self.entries = list(entries or [])
        self.fail = fail

    def get_alias_entries(self) -> List[AliasEntry]:
        if self.fail:
            raise AliasSourceError("alias source offline")
        return list(self.entries)
