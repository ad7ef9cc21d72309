"""Unit tests for mapping configuration loading"""

import json

import pytest
from pydantic import ValidationError

from matching.config import MappingConfig, load_mapping_config
from matching.ports import MappingConfigError


class TestMappingConfigDefaults:

    def test_defaults(self):
        config = MappingConfig()

        assert config.auto_map_threshold == 0.85
        assert config.confidence_delta == 0.12
        assert config.size_tolerance_mm == 2.0
        assert config.fuzzy_weight == 0.6
        assert config.size_weight == 0.3
        assert config.material_weight == 0.1
        assert config.alias_weight == 0.1
        assert config.min_candidate_score == 0.1

    def test_config_is_frozen(self):
        config = MappingConfig()

        with pytest.raises(ValidationError):
            config.auto_map_threshold = 0.5

    def test_out_of_range_threshold_rejected(self):
        with pytest.raises(ValidationError):
            MappingConfig(auto_map_threshold=1.5)


class TestLoadMappingConfig:

    def test_none_path_gives_defaults(self):
        assert load_mapping_config(None) == MappingConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_mapping_config(tmp_path / "missing.json") == MappingConfig()

    def test_reads_mapping_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "mapping": {"auto_map_threshold": 0.9, "size_tolerance_mm": 3.0},
            "pricing": {"markup": 0.2},
        }))

        config = load_mapping_config(path)

        assert config.auto_map_threshold == 0.9
        assert config.size_tolerance_mm == 3.0
        assert config.confidence_delta == 0.12

    def test_reads_top_level_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"confidence_delta": 0.2}))

        assert load_mapping_config(path).confidence_delta == 0.2

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(MappingConfigError):
            load_mapping_config(path)

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"mapping": {"size_tolerance_mm": -1}}))

        with pytest.raises(MappingConfigError):
            load_mapping_config(path)

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps([1, 2, 3]))

        with pytest.raises(MappingConfigError):
            load_mapping_config(path)
