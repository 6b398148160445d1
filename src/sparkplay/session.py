"""Playground state: the active configuration and challenge level.

State is an immutable value. Every change returns a new ``PlaygroundState``
and ``evaluate`` is called explicitly whenever the caller wants fresh
metrics, e.g. after each edit::

    state = PlaygroundState()
    state = state.select_level(get_level("skew-buster"))
    state = state.with_config(state.config.evolve(aqe_enabled=True))
    result = evaluate(state)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sparkplay.config.schema import Level, SimulationConfig
from sparkplay.simulator import Metrics, estimate, score


@dataclass(frozen=True)
class PlaygroundState:
    """Snapshot of what the learner has selected."""

    config: SimulationConfig = field(default_factory=SimulationConfig)
    level: Level | None = None

    def with_config(self, config: SimulationConfig) -> PlaygroundState:
        return PlaygroundState(config=config, level=self.level)

    def select_level(self, level: Level) -> PlaygroundState:
        """Activate *level*, replacing the configuration with its start config."""
        return PlaygroundState(config=level.start_config, level=level)

    def clear_level(self) -> PlaygroundState:
        return PlaygroundState(config=self.config, level=None)


@dataclass(frozen=True)
class RunResult:
    """Metrics for one state, plus the score when a level is active."""

    config: SimulationConfig
    level: Level | None
    metrics: Metrics
    score: int | None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "config": self.config.to_wire(),
            "metrics": self.metrics.to_wire(),
            "level": None,
            "score": self.score,
        }
        if self.level is not None:
            data["level"] = {
                "id": self.level.id,
                "title": self.level.title,
                "maxPoints": self.level.max_points,
                "difficulty": self.level.difficulty,
            }
        return data


def evaluate(state: PlaygroundState) -> RunResult:
    """Run the cost model for *state*, then score it if a level is active."""
    metrics = estimate(state.config)
    points = None
    if state.level is not None:
        points = score(state.config, metrics.time, state.level)
    return RunResult(config=state.config, level=state.level, metrics=metrics, score=points)
