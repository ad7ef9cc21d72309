"""Unit tests for matcher snapshot loading and atomic reload"""

import pytest

from matching.config import MappingConfig
from matching.ports import CatalogUnavailableError
from matching.registry import MatcherRegistry, build_matcher
from fixtures.providers import StaticAliasProvider, StaticCatalogProvider


class TestBuildMatcher:

    def test_builds_from_providers(self, catalog_provider, alias_provider, mapping_config):
        matcher = build_matcher(catalog_provider, alias_provider, mapping_config, max_workers=2)

        assert len(matcher.catalog) == 5
        assert not matcher.alias_index.is_seed
        assert matcher.max_workers == 2

    def test_empty_catalog_is_unavailable(self, alias_provider, mapping_config):
        with pytest.raises(CatalogUnavailableError):
            build_matcher(StaticCatalogProvider([]), alias_provider, mapping_config)

    def test_alias_failure_degrades_to_seed(self, catalog_provider, mapping_config):
        matcher = build_matcher(catalog_provider, StaticAliasProvider(fail=True), mapping_config)

        assert matcher.alias_index.is_seed


class TestMatcherRegistry:

    def test_current_before_load_raises(self, catalog_provider):
        registry = MatcherRegistry(catalog_provider)

        assert not registry.is_loaded
        assert registry.loaded_at is None
        with pytest.raises(CatalogUnavailableError):
            registry.current()

    def test_reload_makes_snapshot_current(self, registry):
        matcher = registry.current()

        assert registry.is_loaded
        assert registry.loaded_at is not None
        assert len(matcher.catalog) == 5

    def test_snapshot_is_immutable_after_reload(self, registry, catalog_provider, catalog_entries):
        before = registry.current()

        catalog_provider.entries = catalog_entries[:2]
        after = registry.reload()

        assert len(before.catalog) == 5
        assert len(after.catalog) == 2
        assert registry.current() is after

    def test_failed_reload_keeps_previous_snapshot(self, registry, catalog_provider):
        before = registry.current()

        catalog_provider.fail = True
        with pytest.raises(CatalogUnavailableError):
            registry.reload()

        assert registry.current() is before

    def test_empty_reload_keeps_previous_snapshot(self, registry, catalog_provider):
        before = registry.current()

        catalog_provider.entries = []
        with pytest.raises(CatalogUnavailableError):
            registry.reload()

        assert registry.current() is before

    def test_reload_with_new_config(self, registry):
        matcher = registry.reload(MappingConfig(auto_map_threshold=0.95))

        assert matcher.config.auto_map_threshold == 0.95
        assert registry.config.auto_map_threshold == 0.95

    def test_reload_without_config_keeps_current_config(self, registry):
        registry.reload(MappingConfig(size_tolerance_mm=3.0))

        assert registry.reload().config.size_tolerance_mm == 3.0

    def test_missing_alias_provider_uses_seed(self, catalog_provider):
        registry = MatcherRegistry(catalog_provider, alias_provider=None)

        assert registry.reload().alias_index.is_seed
