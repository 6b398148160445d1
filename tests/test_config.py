"""Tests for configuration models, loading and levels."""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from sparkplay.config import (
    BUILTIN_LEVELS,
    ClusterSize,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    JoinType,
    Level,
    SimulationConfig,
    generate_example_config_yaml,
    get_level,
    list_levels,
    load_config,
    load_levels,
    resolve_field_name,
    save_config,
)
from tests.conftest import make_level


class TestSimulationConfig:
    """Tests for the SimulationConfig model."""

    def test_defaults(self):
        cfg = SimulationConfig()
        assert cfg.cluster_size is ClusterSize.SMALL
        assert cfg.dataset_size == "Small"
        assert cfg.partition_strategy == "None"
        assert cfg.file_format == "Parquet"
        assert cfg.join_primary == "Orders"
        assert cfg.join_secondary == "Customers"
        assert cfg.join_key == "customer_id"
        assert cfg.join_type is JoinType.SHUFFLE
        assert cfg.use_cache is False
        assert cfg.aqe_enabled is False
        assert cfg.skewed is False
        assert cfg.skew_key == "region_id"

    def test_camel_case_aliases(self):
        cfg = SimulationConfig.model_validate({"clusterSize": "Large", "aqeEnabled": True})
        assert cfg.cluster_size is ClusterSize.LARGE
        assert cfg.aqe_enabled is True

    def test_field_names_accepted(self):
        cfg = SimulationConfig(cluster_size="Medium")
        assert cfg.cluster_size is ClusterSize.MEDIUM

    def test_non_string_knob_becomes_text(self):
        cfg = SimulationConfig.model_validate({"clusterSize": 5, "skewKey": None})
        assert cfg.cluster_size == "5"
        assert cfg.skew_key == ""

    def test_null_is_not_the_none_strategy(self):
        cfg = SimulationConfig.model_validate({"partitionStrategy": None})
        assert cfg.unknown_fields() == {"partition_strategy": ""}

    def test_switch_parsing(self):
        cfg = SimulationConfig.model_validate(
            {"useCache": "yes", "aqeEnabled": "off", "skewed": "maybe"}
        )
        assert cfg.use_cache is True
        assert cfg.aqe_enabled is False
        assert cfg.skewed is True

    def test_unrecognized_switch_uses_truthiness(self):
        assert SimulationConfig.model_validate({"useCache": []}).use_cache is False
        assert SimulationConfig.model_validate({"useCache": [1, 2]}).use_cache is True

    def test_unknown_value_kept(self):
        cfg = SimulationConfig(cluster_size="Huge")
        assert cfg.cluster_size == "Huge"
        assert not isinstance(cfg.cluster_size, ClusterSize)
        assert cfg.unknown_fields() == {"cluster_size": "Huge"}

    def test_no_unknown_fields_by_default(self):
        assert SimulationConfig().unknown_fields() == {}

    def test_frozen(self):
        cfg = SimulationConfig()
        with pytest.raises(ValidationError):
            cfg.cluster_size = ClusterSize.LARGE  # type: ignore[misc]

    def test_evolve_returns_new_snapshot(self):
        cfg = SimulationConfig()
        changed = cfg.evolve(joinType="Broadcast", use_cache=True)
        assert changed.join_type is JoinType.BROADCAST
        assert changed.use_cache is True
        assert cfg.join_type is JoinType.SHUFFLE
        assert cfg.use_cache is False

    def test_evolve_unknown_field(self):
        with pytest.raises(KeyError, match="Unknown configuration field"):
            SimulationConfig().evolve(workers=3)

    def test_to_wire(self):
        wire = SimulationConfig().to_wire()
        assert wire["clusterSize"] == "Small"
        assert wire["joinType"] == "Shuffle"
        assert wire["useCache"] is False
        assert len(wire) == 12

    def test_resolve_field_name(self):
        assert resolve_field_name("skewKey") == "skew_key"
        assert resolve_field_name("skew_key") == "skew_key"


class TestLevel:
    def test_from_camel_case(self):
        level = make_level(startConfig={"datasetSize": "Large"})
        assert level.max_points == 1000
        assert level.difficulty == 5
        assert level.start_config.dataset_size == "Large"

    def test_zero_difficulty_rejected(self):
        with pytest.raises(ValidationError):
            make_level(difficulty=0)

    def test_negative_max_points_rejected(self):
        with pytest.raises(ValidationError):
            make_level(maxPoints=-1)


class TestBuiltinLevels:
    def test_ordered(self):
        ids = [level.id for level in list_levels()]
        assert ids == ["shuffle-basics", "broadcast-dimension", "skew-buster"]

    def test_get_level(self):
        level = get_level("skew-buster")
        assert level.start_config.skewed is True
        assert level is BUILTIN_LEVELS["skew-buster"]

    def test_get_unknown_level(self):
        with pytest.raises(KeyError, match="Unknown level: nope"):
            get_level("nope")

    def test_get_level_from_custom_list(self):
        custom = [make_level(id="mine")]
        assert get_level("mine", custom).id == "mine"
        with pytest.raises(KeyError):
            get_level("skew-buster", custom)

    def test_start_configs_use_known_values(self):
        for level in list_levels():
            assert level.start_config.unknown_fields() == {}


class TestLoadConfig:
    """Tests for YAML configuration files."""

    def test_load_minimal(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("clusterSize: Medium\njoinType: Broadcast\n")
        cfg = load_config(path)
        assert cfg.cluster_size == "Medium"
        assert cfg.join_type == "Broadcast"
        assert cfg.file_format == "Parquet"

    def test_none_partition_is_a_string(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("partitionStrategy: None\n")
        assert load_config(path).partition_strategy == "None"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("")
        assert load_config(path) == SimulationConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("clusterSize: [Small\n")
        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("- Small\n- Large\n")
        with pytest.raises(ConfigParseError, match="Expected a mapping"):
            load_config(path)

    def test_malformed_values_degrade(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("clusterSize: 5\njoinSecondary: null\nuseCache: maybe\naqeEnabled: null\n")
        cfg = load_config(path)
        assert cfg.cluster_size == "5"
        assert cfg.join_secondary == ""
        assert cfg.use_cache is True
        assert cfg.aqe_enabled is False
        assert set(cfg.unknown_fields()) == {"cluster_size", "join_secondary"}

    def test_example_yaml_loads(self, tmp_path):
        path = tmp_path / "example.yaml"
        path.write_text(generate_example_config_yaml())
        assert load_config(path) == SimulationConfig()

    def test_save_roundtrip(self, tmp_path):
        cfg = SimulationConfig(dataset_size="Large", skewed=True, skew_key="order_id")
        path = tmp_path / "out.yaml"
        save_config(cfg, path)
        data = yaml.safe_load(path.read_text())
        assert data["datasetSize"] == "Large"
        assert data["partitionStrategy"] == "None"
        assert load_config(path) == cfg


class TestLoadLevels:
    def test_list_document(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text(
            "- id: one\n  title: One\n  maxPoints: 500\n  difficulty: 2\n"
            "  startConfig:\n    datasetSize: Medium\n"
            "- id: two\n  title: Two\n  maxPoints: 100\n  difficulty: 1\n"
        )
        levels = load_levels(path)
        assert [level.id for level in levels] == ["one", "two"]
        assert levels[0].start_config.dataset_size == "Medium"
        assert isinstance(levels[1], Level)

    def test_levels_key(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text(
            "levels:\n  - id: one\n    title: One\n    maxPoints: 10\n    difficulty: 1\n"
        )
        assert load_levels(path)[0].max_points == 10

    def test_invalid_level(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text("- id: one\n  title: One\n  maxPoints: 10\n  difficulty: 0\n")
        with pytest.raises(ConfigValidationError, match="Level #1"):
            load_levels(path)

    def test_validation_error_lists_location(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text("- id: one\n  title: One\n  maxPoints: lots\n  difficulty: 1\n")
        with pytest.raises(ConfigValidationError, match="maxPoints") as exc_info:
            load_levels(path)
        assert exc_info.value.errors

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text("just a string\n")
        with pytest.raises(ConfigParseError):
            load_levels(path)
