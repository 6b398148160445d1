"""Tests for playground state and explicit re-evaluation."""

from __future__ import annotations

from sparkplay.config import get_level
from sparkplay.session import PlaygroundState, evaluate
from tests.conftest import make_config, make_level


class TestPlaygroundState:
    def test_default_state(self):
        state = PlaygroundState()
        assert state.config == make_config()
        assert state.level is None

    def test_select_level_replaces_config(self):
        level = get_level("skew-buster")
        state = PlaygroundState(config=make_config(cluster_size="Large")).select_level(level)
        assert state.level is level
        assert state.config == level.start_config

    def test_with_config_keeps_level(self, level):
        state = PlaygroundState().select_level(level).with_config(make_config(aqe_enabled=True))
        assert state.level is level
        assert state.config.aqe_enabled is True

    def test_clear_level(self, level):
        state = PlaygroundState().select_level(level).clear_level()
        assert state.level is None

    def test_changes_do_not_mutate(self, level):
        original = PlaygroundState()
        original.select_level(level)
        original.with_config(make_config(skewed=True))
        assert original == PlaygroundState()


class TestEvaluate:
    def test_no_level_no_score(self):
        result = evaluate(PlaygroundState())
        assert result.metrics.time == 119
        assert result.score is None

    def test_level_is_scored(self, level):
        result = evaluate(PlaygroundState(config=make_config(), level=level))
        assert result.score == 976

    def test_builtin_level_start(self):
        """Level 1 start: 1 worker, 100 GB CSV, no partitioning, shuffle."""
        result = evaluate(PlaygroundState().select_level(get_level("shuffle-basics")))
        assert result.metrics.time == 2010
        assert result.score == 598  # 1000 - 2010 / 5

    def test_improving_config_improves_score(self):
        state = PlaygroundState().select_level(get_level("shuffle-basics"))
        before = evaluate(state)
        better = state.with_config(
            state.config.evolve(file_format="Parquet", partition_strategy="Good", aqe_enabled=True)
        )
        after = evaluate(better)
        assert after.metrics.time < before.metrics.time
        assert after.score > before.score

    def test_to_dict(self):
        result = evaluate(PlaygroundState(level=make_level(id="x", title="X")))
        data = result.to_dict()
        assert data["metrics"]["time"] == 119
        assert data["config"]["clusterSize"] == "Small"
        assert data["level"] == {"id": "x", "title": "X", "maxPoints": 1000, "difficulty": 5}
        assert data["score"] == 976

    def test_to_dict_without_level(self):
        data = evaluate(PlaygroundState()).to_dict()
        assert data["level"] is None
        assert data["score"] is None
