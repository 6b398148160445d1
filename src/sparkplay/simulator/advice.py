"""Plain-language tips shown next to a simulation result."""

from __future__ import annotations

from sparkplay.config.schema import (
    FileFormat,
    JoinType,
    Level,
    PartitionStrategy,
    SimulationConfig,
    value_text,
)

from .metrics import StageVolumes

# A run slower than this is flagged as slow
SLOW_TIME_THRESHOLD = 50


def performance_tip(time: int) -> str:
    if time > SLOW_TIME_THRESHOLD:
        return "This is slow. Try using Parquet, enable caching, or adjust partitioning."
    return "Looks good! Feel free to tweak further or compare with a challenge."


def challenge_tip(points: int, level: Level) -> str:
    if points < level.max_points:
        return "Try enabling AQE, using Parquet, and good partitioning!"
    return "Great job! You hit all goals."


def config_hints(config: SimulationConfig, volumes: StageVolumes) -> list[str]:
    """Knob-specific observations for *config*.

    Every hint names one knob and the effect it had on this run.
    """
    hints = []
    if volumes.broadcast_fallback:
        hints.append(
            f"Broadcast needs the secondary table at or under 1 GB on disk; "
            f"{value_text(config.join_secondary)} is larger, so the join was shuffled."
        )
    elif config.join_type == JoinType.BROADCAST and volumes.broadcast_gb > 0:
        hints.append(
            f"Broadcast sent {volumes.broadcast_gb:.2f} GB to the workers and skipped the shuffle."
        )
    if config.file_format == FileFormat.CSV:
        hints.append("CSV is twice the size of Parquet on disk; reads and writes cost more.")
    if config.partition_strategy == PartitionStrategy.NONE:
        hints.append("Without partitioning half the joined data spills during compute.")
    elif config.partition_strategy == PartitionStrategy.BAD:
        hints.append("Bad partitioning spills a quarter of the joined data during compute.")
    if config.skewed and not config.aqe_enabled:
        hints.append("Skew slows the job by 20%. AQE at least shrinks the shuffle.")
    if config.join_type == JoinType.SHUFFLE and not config.aqe_enabled:
        hints.append("AQE would cut shuffle traffic by 30%.")
    return hints
