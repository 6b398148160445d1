"""Deterministic cost model for a read -> join -> compute -> write Spark job.

``estimate(config)`` maps one configuration to time, CPU%, memory% and the
network volume of each stage. It is a pure function: no clock, no random
source, no state. Values outside an enumeration never raise; they resolve
to the neutral defaults of ``sparkplay.config.tables``.

Order of operations:

1. Resolve workers, raw GB and format factor from the lookup tables.
2. Size the primary and secondary tables (raw and on-disk GB).
3. Read = both tables on disk, once each. Caching does not reduce it.
4. Join: shuffle both sides (x0.7 with AQE), or broadcast the secondary to
   every worker when it is at most 1 GB on disk. A broadcast of a larger
   table falls back to the shuffle cost.
5. Compute = spill (partition-driven, on raw GB) + broadcast traffic.
6. Write = the larger side's raw GB times the format factor.
7. Time = per-GB stage costs / workers, x1.2 if skewed, x0.9 if cached,
   rounded once at the end.
8. CPU% and memory% from their own small formulas, clamped to [5, 100].

Usage::

    from sparkplay.simulator import estimate
    metrics = estimate(SimulationConfig(join_type="Broadcast"))
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from sparkplay._constants import GB_TO_MB, PERCENT_CEILING, PERCENT_FLOOR
from sparkplay.config import tables as t
from sparkplay.config.schema import JoinType, SimulationConfig

from .metrics import Metrics, StageTraffic, StageVolumes

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Python's ``round`` rounds halves to even (118.5 -> 118); the model
    rounds them up (118.5 -> 119).
    """
    return int(math.floor(value + 0.5))


def clamp_percent(value: float) -> int:
    return int(min(PERCENT_CEILING, max(PERCENT_FLOOR, value)))


def _as_config(config: SimulationConfig | Mapping[str, Any]) -> SimulationConfig:
    if isinstance(config, SimulationConfig):
        return config
    return SimulationConfig.model_validate(config)


# ---------------------------------------------------------------------------
# Stage volumes
# ---------------------------------------------------------------------------


def _shuffle_gb(primary_on_disk: float, secondary_on_disk: float, aqe_enabled: bool) -> float:
    total = primary_on_disk + secondary_on_disk
    return total * t.AQE_SHUFFLE_FACTOR if aqe_enabled else total


def stage_volumes(config: SimulationConfig | Mapping[str, Any]) -> StageVolumes:
    """GB moved by each stage for *config*, before rounding."""
    config = _as_config(config)
    workers = t.workers_for(config.cluster_size)
    fmt = t.format_factor(config.file_format)
    primary = t.table_volumes(config.join_primary, config.dataset_size, config.file_format)
    secondary = t.table_volumes(config.join_secondary, config.dataset_size, config.file_format)

    read_gb = primary.on_disk_gb + secondary.on_disk_gb

    shuffle_gb = 0.0
    broadcast_gb = 0.0
    fallback = False
    if config.join_type == JoinType.SHUFFLE:
        shuffle_gb = _shuffle_gb(primary.on_disk_gb, secondary.on_disk_gb, config.aqe_enabled)
    elif config.join_type == JoinType.BROADCAST:
        if secondary.on_disk_gb <= t.BROADCAST_THRESHOLD_GB:
            broadcast_gb = secondary.on_disk_gb * workers
            if config.skewed and config.skew_key == t.BROADCAST_SKEW_KEY:
                broadcast_gb *= t.BROADCAST_SKEW_FACTOR
        else:
            shuffle_gb = _shuffle_gb(primary.on_disk_gb, secondary.on_disk_gb, config.aqe_enabled)
            fallback = True
            logger.debug(
                "Broadcast of %.2f GB exceeds %.1f GB threshold, costed as shuffle",
                secondary.on_disk_gb,
                t.BROADCAST_THRESHOLD_GB,
            )

    spill_gb = t.spill_ratio(config.partition_strategy) * (primary.raw_gb + secondary.raw_gb)
    write_gb = max(primary.raw_gb, secondary.raw_gb) * fmt

    return StageVolumes(
        read_gb=read_gb,
        shuffle_gb=shuffle_gb,
        broadcast_gb=broadcast_gb,
        spill_gb=spill_gb,
        write_gb=write_gb,
        broadcast_fallback=fallback,
    )


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


def _time(config: SimulationConfig, volumes: StageVolumes, workers: int) -> int:
    raw_time = (
        volumes.read_gb * t.COST_READ_PER_GB
        + volumes.shuffle_gb * t.COST_SHUFFLE_PER_GB
        + volumes.compute_gb * t.COST_COMPUTE_PER_GB
        + volumes.write_gb * t.COST_WRITE_PER_GB
    )
    # Parallelism, then skew, then cache; one rounding at the end.
    time = raw_time / workers
    if config.skewed:
        time *= t.TIME_SKEW_FACTOR
    if config.use_cache:
        time *= t.TIME_CACHE_FACTOR
    return round_half_up(time)


def _cpu(config: SimulationConfig, workers: int) -> int:
    total_raw_gb = t.raw_dataset_gb(config.dataset_size)
    cpu = t.CPU_BASE_PCT + total_raw_gb * t.CPU_PCT_PER_RAW_GB - workers * t.CPU_PCT_PER_WORKER
    if config.aqe_enabled:
        cpu -= t.CPU_AQE_DISCOUNT_PCT
    if config.skewed:
        cpu *= t.CPU_SKEW_FACTOR
    return clamp_percent(round_half_up(cpu))


def _memory(config: SimulationConfig, workers: int) -> int:
    total_memory_gb = workers * t.MEMORY_GB_PER_WORKER
    primary = t.table_volumes(config.join_primary, config.dataset_size, config.file_format)
    cached_gb = primary.on_disk_gb * t.CACHE_MEMORY_FACTOR if config.use_cache else 0.0
    overhead_gb = t.partition_count(config.partition_strategy) * t.PARTITION_OVERHEAD_GB
    used_gb = cached_gb + overhead_gb
    if config.skewed:
        used_gb *= t.MEMORY_SKEW_FACTOR
    return clamp_percent(round_half_up(used_gb / total_memory_gb * 100))


def estimate(config: SimulationConfig | Mapping[str, Any]) -> Metrics:
    """Estimate time, CPU%, memory% and per-stage network MB for *config*.

    Accepts a ``SimulationConfig`` or a camelCase/snake_case mapping, which
    is validated into one first. Identical input always gives identical
    output.
    """
    config = _as_config(config)
    workers = t.workers_for(config.cluster_size)
    volumes = stage_volumes(config)

    timeline = tuple(
        StageTraffic(stage=stage, network_mb=round_half_up(gb * GB_TO_MB))
        for stage, gb in volumes.by_stage().items()
    )

    metrics = Metrics(
        time=_time(config, volumes, workers),
        cpu=_cpu(config, workers),
        memory=_memory(config, workers),
        network_timeline=timeline,
    )
    unknown = config.unknown_fields()
    logger.debug(
        "estimate workers=%d time=%d cpu=%d%% memory=%d%% network=%dMB%s",
        workers,
        metrics.time,
        metrics.cpu,
        metrics.memory,
        metrics.total_network_mb,
        f" unknown={unknown}" if unknown else "",
    )
    return metrics
