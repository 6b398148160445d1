"""Tests for single-knob sweeps."""

from __future__ import annotations

import pytest

from sparkplay.sweep import sweep, sweep_values
from tests.conftest import make_config


class TestSweepValues:
    def test_enum_field(self):
        assert sweep_values("clusterSize") == ["Small", "Medium", "Large"]

    def test_bool_field(self):
        assert sweep_values("use_cache") == [False, True]

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            sweep_values("workers")


class TestSweep:
    def test_cluster_size(self):
        points = sweep(make_config(), "clusterSize")
        assert [p.value for p in points] == ["Small", "Medium", "Large"]
        assert [p.metrics.time for p in points] == [119, 30, 15]
        assert all(p.field == "cluster_size" for p in points)

    def test_cache(self):
        points = sweep(make_config(), "useCache")
        assert [p.metrics.time for p in points] == [119, 107]

    def test_other_fields_held(self):
        points = sweep(make_config(file_format="CSV"), "aqe_enabled")
        assert [p.metrics.stage_mb("Read") for p in points] == [9216, 9216]
