"""Challenge scoring."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from sparkplay.config.schema import Level, SimulationConfig

from .engine import round_half_up

logger = logging.getLogger(__name__)


def _goal(level: Level | Mapping[str, Any]) -> tuple[Any, Any]:
    if isinstance(level, Level):
        return level.max_points, level.difficulty
    max_points = level.get("maxPoints", level.get("max_points"))
    return max_points, level.get("difficulty")


def score(
    config: SimulationConfig | Mapping[str, Any] | None,
    time: float,
    level: Level | Mapping[str, Any] | None,
) -> int:
    """Score a run against a challenge level.

    ``max(0, round(maxPoints - time / difficulty))``. Returns 0 when there is
    no active level or it lacks a usable ``maxPoints``/``difficulty``. There
    is no upper clamp: a fast enough run may exceed ``maxPoints``.

    *config* is accepted for signature parity with callers that pass the
    evaluated configuration; the score depends only on *time* and *level*.
    """
    if not level or not isinstance(level, (Level, Mapping)):
        return 0
    max_points, difficulty = _goal(level)
    if not max_points or not difficulty:
        return 0
    try:
        raw_score = float(max_points) - float(time) / float(difficulty)
    except (TypeError, ValueError):
        logger.debug(
            "Level goal is not numeric: maxPoints=%r difficulty=%r", max_points, difficulty
        )
        return 0
    if not math.isfinite(raw_score):
        return 0
    return max(0, round_half_up(raw_score))
