"""Unit tests for the alias index and its seed fallback"""

import pytest

from matching.alias_index import DEFAULT_ALIAS_BOOST, SEED_ALIASES, AliasIndex
from matching.ports import AliasEntry
from fixtures.providers import StaticAliasProvider


class TestAliasIndexBuild:

    def test_groups_entries_by_sku_in_load_order(self):
        index = AliasIndex.from_entries([
            AliasEntry(alias="25mm", sku_code="NFC25", boost=0.3),
            AliasEntry(alias="Fan Box", sku_code="GFB3OCT", boost=0.5),
            AliasEntry(alias="corrugated", sku_code="NFC25", boost=0.4),
        ])

        assert index.boosts_for("NFC25") == (("25mm", 0.3), ("corrugated", 0.4))
        assert index.boosts_for("GFB3OCT") == (("fan box", 0.5),)
        assert len(index) == 2
        assert index.alias_count == 3
        assert "NFC25" in index
        assert not index.is_seed

    def test_blank_aliases_are_dropped(self):
        index = AliasIndex.from_entries([
            AliasEntry(alias="   ", sku_code="NFC25", boost=0.3),
            AliasEntry(alias="pipe", sku_code="", boost=0.3),
        ])

        assert len(index) == 0

    def test_unknown_sku_has_no_aliases(self, alias_index):
        assert alias_index.boosts_for("DOES-NOT-EXIST") == ()

    def test_index_is_read_only(self, alias_index):
        with pytest.raises(TypeError):
            alias_index._groups["NEW"] = (("x", 0.3),)


class TestAliasIndexLoad:
    """Test provider loading with seed fallback"""

    def test_loads_from_provider(self, alias_entries):
        index = AliasIndex.load(StaticAliasProvider(alias_entries))

        assert not index.is_seed
        assert index.alias_count == len(alias_entries)

    def test_failing_provider_falls_back_to_seed(self):
        index = AliasIndex.load(StaticAliasProvider(fail=True))

        assert index.is_seed
        assert set(SEED_ALIASES) == {"NFC25", "NFC32", "PVC25M", "GFB3OCT"}
        assert ("corrugated", DEFAULT_ALIAS_BOOST) in index.boosts_for("NFC25")

    def test_empty_provider_falls_back_to_seed(self):
        assert AliasIndex.load(StaticAliasProvider([])).is_seed

    def test_no_provider_uses_seed(self):
        index = AliasIndex.load(None)

        assert index.is_seed
        assert index.boosts_for("GFB3OCT")[1] == ('3"', DEFAULT_ALIAS_BOOST)
