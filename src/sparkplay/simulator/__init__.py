"""Cost model engine and challenge scoring."""

from .advice import challenge_tip, config_hints, performance_tip
from .engine import estimate, round_half_up, stage_volumes
from .metrics import STAGE_ORDER, Metrics, Stage, StageTraffic, StageVolumes
from .scoring import score

__all__ = [
    "estimate",
    "stage_volumes",
    "score",
    "round_half_up",
    "Metrics",
    "Stage",
    "StageTraffic",
    "StageVolumes",
    "STAGE_ORDER",
    "performance_tip",
    "challenge_tip",
    "config_hints",
]
