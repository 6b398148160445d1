"""Lookup tables that parameterize the cost model.

Every enumerated knob maps to a number through one of the tables below.
Each table covers its whole enumeration (checked at import time) and has an
explicit default used for values outside it:

    workers            Small 1,  Medium 4,   Large 8      default 1
    raw dataset GB     Small 10, Medium 100, Large 1000   default 0
    table share        Orders 0.6, Customers 0.3, Products 0.1   default 0
    format factor      Parquet 0.5, CSV 1.0               default 1.0
    spill ratio        None 0.5, Bad 0.25, Good 0         default 0
    partition count    None 1, Bad 10, Good 200           default 1

Example::

    table_volumes("Orders", "Small", "Parquet")
    # TableVolumes(raw_gb=6.0, on_disk_gb=3.0)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from .schema import (
    ClusterSize,
    DatasetSize,
    FileFormat,
    PartitionStrategy,
    SkewKey,
    TableName,
)

_T = TypeVar("_T")

# ---------------------------------------------------------------------------
# Enum -> number tables
# ---------------------------------------------------------------------------

WORKERS_BY_CLUSTER: dict[ClusterSize, int] = {
    ClusterSize.SMALL: 1,
    ClusterSize.MEDIUM: 4,
    ClusterSize.LARGE: 8,
}
DEFAULT_WORKERS = 1

RAW_GB_BY_DATASET: dict[DatasetSize, float] = {
    DatasetSize.SMALL: 10,
    DatasetSize.MEDIUM: 100,
    DatasetSize.LARGE: 1000,
}
DEFAULT_RAW_GB = 0.0

TABLE_SHARE: dict[TableName, float] = {
    TableName.ORDERS: 0.6,
    TableName.CUSTOMERS: 0.3,
    TableName.PRODUCTS: 0.1,
}
DEFAULT_TABLE_SHARE = 0.0

FORMAT_FACTOR: dict[FileFormat, float] = {
    FileFormat.PARQUET: 0.5,
    FileFormat.CSV: 1.0,
}
DEFAULT_FORMAT_FACTOR = 1.0

# Fraction of (primary + secondary) raw GB that spills during compute
SPILL_RATIO: dict[PartitionStrategy, float] = {
    PartitionStrategy.NONE: 0.5,
    PartitionStrategy.BAD: 0.25,
    PartitionStrategy.GOOD: 0.0,
}
DEFAULT_SPILL_RATIO = 0.0

# Partition count for the memory model only
PARTITION_COUNT: dict[PartitionStrategy, int] = {
    PartitionStrategy.NONE: 1,
    PartitionStrategy.BAD: 10,
    PartitionStrategy.GOOD: 200,
}
DEFAULT_PARTITION_COUNT = 1

# ---------------------------------------------------------------------------
# Scalar model constants
# ---------------------------------------------------------------------------

# Time units per GB moved in each stage
COST_READ_PER_GB = 5
COST_SHUFFLE_PER_GB = 10
COST_COMPUTE_PER_GB = 8
COST_WRITE_PER_GB = 5

BROADCAST_THRESHOLD_GB = 1.0
AQE_SHUFFLE_FACTOR = 0.7
BROADCAST_SKEW_FACTOR = 1.2
# Only skew on this key inflates broadcast traffic
BROADCAST_SKEW_KEY = SkewKey.ORDER_ID

TIME_SKEW_FACTOR = 1.2
TIME_CACHE_FACTOR = 0.9

CPU_BASE_PCT = 20
CPU_PCT_PER_RAW_GB = 2
CPU_PCT_PER_WORKER = 1
CPU_AQE_DISCOUNT_PCT = 5
CPU_SKEW_FACTOR = 1.1

MEMORY_GB_PER_WORKER = 10
CACHE_MEMORY_FACTOR = 1.5
PARTITION_OVERHEAD_GB = 0.01
MEMORY_SKEW_FACTOR = 1.1


def _check_covers(table: Mapping[Enum, object], enum_cls: type[Enum]) -> None:
    missing = [m.value for m in enum_cls if m not in table]
    if missing:
        raise RuntimeError(f"Lookup table for {enum_cls.__name__} misses: {', '.join(missing)}")


_check_covers(WORKERS_BY_CLUSTER, ClusterSize)
_check_covers(RAW_GB_BY_DATASET, DatasetSize)
_check_covers(TABLE_SHARE, TableName)
_check_covers(FORMAT_FACTOR, FileFormat)
_check_covers(SPILL_RATIO, PartitionStrategy)
_check_covers(PARTITION_COUNT, PartitionStrategy)


def lookup(table: Mapping[Enum, _T], key: object, default: _T) -> _T:
    """Look up *key* in an enum-keyed table, returning *default* when absent.

    Members of a ``str`` enum hash like their value, so both ``ClusterSize.SMALL``
    and ``"Small"`` resolve. Anything unhashable falls back to *default*.
    """
    try:
        return table.get(key, default)  # type: ignore[call-overload]
    except TypeError:
        return default


# ---------------------------------------------------------------------------
# Derived table volumes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TableVolumes:
    """Raw and on-disk size of one logical table, in GB."""

    raw_gb: float
    on_disk_gb: float


def workers_for(cluster_size: object) -> int:
    """Worker count for a cluster size (one worker if unknown)."""
    return lookup(WORKERS_BY_CLUSTER, cluster_size, DEFAULT_WORKERS)


def raw_dataset_gb(dataset_size: object) -> float:
    """Total raw GB for a dataset size (zero if unknown)."""
    return lookup(RAW_GB_BY_DATASET, dataset_size, DEFAULT_RAW_GB)


def format_factor(file_format: object) -> float:
    """On-disk / raw size ratio for a file format."""
    return lookup(FORMAT_FACTOR, file_format, DEFAULT_FORMAT_FACTOR)


def table_volumes(table: object, dataset_size: object, file_format: object) -> TableVolumes:
    """Raw and on-disk GB of *table* for a dataset size and file format.

    Unknown table names resolve to zero volume.
    """
    raw_gb = raw_dataset_gb(dataset_size) * lookup(TABLE_SHARE, table, DEFAULT_TABLE_SHARE)
    return TableVolumes(raw_gb=raw_gb, on_disk_gb=raw_gb * format_factor(file_format))


def spill_ratio(partition_strategy: object) -> float:
    return lookup(SPILL_RATIO, partition_strategy, DEFAULT_SPILL_RATIO)


def partition_count(partition_strategy: object) -> int:
    return lookup(PARTITION_COUNT, partition_strategy, DEFAULT_PARTITION_COUNT)
