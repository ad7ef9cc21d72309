"""Holder for the current matcher snapshot.

Reload builds a complete new matcher first and then swaps the reference, so a
run in flight keeps the snapshot it started with and never sees a partially
loaded catalog.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from observability.metrics import alias_seed_fallback, catalog_reloads_total, catalog_skus

from .alias_index import AliasIndex
from .config import MappingConfig
from .engine import DeterministicMatcher
from .ports import AliasProvider, CatalogProvider, CatalogUnavailableError

logger = logging.getLogger(__name__)


def build_matcher(
    catalog_provider: CatalogProvider,
    alias_provider: Optional[AliasProvider],
    config: MappingConfig,
    max_workers: Optional[int] = None
) -> DeterministicMatcher:
    """Load catalog and aliases and construct a matcher.

    Args:
        catalog_provider: Catalog source
        alias_provider: Alias source (seed aliases if None or unavailable)
        config: Mapping configuration
        max_workers: Thread pool size for batch mapping

    Returns:
        DeterministicMatcher over the loaded snapshot

    Raises:
        CatalogUnavailableError: If the catalog cannot be loaded or is empty
    """
    entries = catalog_provider.get_all_catalog_entries()
    if not entries:
        raise CatalogUnavailableError("Catalog provider returned no SKUs")

    alias_index = AliasIndex.load(alias_provider)
    return DeterministicMatcher(entries, alias_index, config, max_workers=max_workers)


class MatcherRegistry:
    """Thread-safe holder of the active DeterministicMatcher."""

    def __init__(
        self,
        catalog_provider: CatalogProvider,
        alias_provider: Optional[AliasProvider] = None,
        config: Optional[MappingConfig] = None,
        max_workers: Optional[int] = None
    ):
        self.catalog_provider = catalog_provider
        self.alias_provider = alias_provider
        self.max_workers = max_workers
        self._config = config or MappingConfig()
        self._matcher: Optional[DeterministicMatcher] = None
        self._loaded_at: Optional[datetime] = None
        self._lock = threading.Lock()

    def reload(self, config: Optional[MappingConfig] = None) -> DeterministicMatcher:
        """Build a new snapshot and make it current.

        Args:
            config: Replacement configuration (keeps the current one if None)

        Returns:
            The new matcher

        Raises:
            CatalogUnavailableError: If the catalog cannot be loaded; the
                previous snapshot stays active
        """
        try:
            matcher = build_matcher(
                self.catalog_provider,
                self.alias_provider,
                config or self._config,
                max_workers=self.max_workers,
            )
        except CatalogUnavailableError:
            catalog_reloads_total.labels(status="error").inc()
            logger.error("Catalog reload failed, keeping previous snapshot", exc_info=True)
            raise

        with self._lock:
            self._matcher = matcher
            self._config = matcher.config
            self._loaded_at = datetime.now(timezone.utc)

        catalog_reloads_total.labels(status="success").inc()
        catalog_skus.set(len(matcher.catalog))
        alias_seed_fallback.set(1 if matcher.alias_index.is_seed else 0)
        logger.info(f"Matcher snapshot loaded with {len(matcher.catalog)} SKUs")
        return matcher

    def current(self) -> DeterministicMatcher:
        """Return the active matcher.

        Raises:
            CatalogUnavailableError: If no snapshot has been loaded
        """
        with self._lock:
            matcher = self._matcher
        if matcher is None:
            raise CatalogUnavailableError("No catalog snapshot loaded")
        return matcher

    @property
    def config(self) -> MappingConfig:
        with self._lock:
            return self._config

    @property
    def loaded_at(self) -> Optional[datetime]:
        with self._lock:
            return self._loaded_at

    @property
    def is_loaded(self) -> bool:
        with self._lock:
            return self._matcher is not None
