"""Pydantic models for the playground configuration and challenge levels.

A ``SimulationConfig`` is one snapshot of every knob the learner can turn.
Field names are snake_case in Python and camelCase on the wire
(``clusterSize``, ``joinType``, ...), matching the editor that produces them.

Enumerated knobs accept any string: values outside the enumeration are kept
verbatim and the cost model falls back to a neutral default for them. Other
values (numbers, null) are stringified the same way, and switches that are
not recognizable booleans fall back to their truthiness, so any mapping
yields a configuration.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

# =============================================================================
# Enums
# =============================================================================


class ClusterSize(str, Enum):
    """Cluster size preset (maps to a worker count)."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class DatasetSize(str, Enum):
    """Dataset size preset (maps to total raw GB)."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class PartitionStrategy(str, Enum):
    """Partitioning quality of the input tables."""

    NONE = "None"
    GOOD = "Good"
    BAD = "Bad"


class FileFormat(str, Enum):
    """On-disk serialization format."""

    PARQUET = "Parquet"
    CSV = "CSV"


class TableName(str, Enum):
    """Logical tables of the sample dataset."""

    ORDERS = "Orders"
    CUSTOMERS = "Customers"
    PRODUCTS = "Products"


class JoinKey(str, Enum):
    """Join column. Display only, the cost model ignores it."""

    CUSTOMER_ID = "customer_id"
    PRODUCT_ID = "product_id"
    ORDER_ID = "order_id"


class JoinType(str, Enum):
    """Join execution strategy."""

    BROADCAST = "Broadcast"
    SHUFFLE = "Shuffle"


class SkewKey(str, Enum):
    """Column the simulated skew is keyed on."""

    REGION_ID = "region_id"
    CUSTOMER_ID = "customer_id"
    PRODUCT_ID = "product_id"
    ORDER_ID = "order_id"


# Enumerated fields of SimulationConfig and the enum that defines their domain
ENUM_FIELDS: dict[str, type[Enum]] = {
    "cluster_size": ClusterSize,
    "dataset_size": DatasetSize,
    "partition_strategy": PartitionStrategy,
    "file_format": FileFormat,
    "join_primary": TableName,
    "join_secondary": TableName,
    "join_key": JoinKey,
    "join_type": JoinType,
    "skew_key": SkewKey,
}

BOOL_FIELDS: tuple[str, ...] = ("use_cache", "aqe_enabled", "skewed")

_BOOL = TypeAdapter(bool)


def _knob(default: Enum) -> Any:
    # Try the enum first, keep any other string as-is.
    return Field(default=default, union_mode="left_to_right")


# =============================================================================
# Configuration
# =============================================================================


class SimulationConfig(BaseModel):
    """Complete, immutable configuration of one simulated job."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    cluster_size: ClusterSize | str = _knob(ClusterSize.SMALL)
    dataset_size: DatasetSize | str = _knob(DatasetSize.SMALL)
    partition_strategy: PartitionStrategy | str = _knob(PartitionStrategy.NONE)
    file_format: FileFormat | str = _knob(FileFormat.PARQUET)
    join_primary: TableName | str = _knob(TableName.ORDERS)
    join_secondary: TableName | str = _knob(TableName.CUSTOMERS)
    join_key: JoinKey | str = _knob(JoinKey.CUSTOMER_ID)
    join_type: JoinType | str = _knob(JoinType.SHUFFLE)
    use_cache: bool = False
    aqe_enabled: bool = False
    skewed: bool = False
    skew_key: SkewKey | str = _knob(SkewKey.REGION_ID)

    @field_validator(*ENUM_FIELDS, mode="before")
    @classmethod
    def _knob_text(cls, v: Any) -> Any:
        """Non-string knob values become unknown strings rather than errors."""
        if v is None:
            return ""
        if isinstance(v, (Enum, str)):
            return v
        return str(v)

    @field_validator(*BOOL_FIELDS, mode="before")
    @classmethod
    def _switch(cls, v: Any) -> bool:
        """Parse booleans the pydantic way, falling back to truthiness."""
        try:
            return _BOOL.validate_python(v)
        except ValidationError:
            return bool(v)

    def evolve(self, **changes: Any) -> SimulationConfig:
        """Return a new validated snapshot with *changes* applied.

        Keys may be field names or their camelCase aliases.
        """
        data = self.model_dump()
        for key, value in changes.items():
            data[resolve_field_name(key)] = value
        return SimulationConfig.model_validate(data)

    def unknown_fields(self) -> dict[str, str]:
        """Map of enumerated fields whose value lies outside the enumeration."""
        unknown = {}
        for name, enum_cls in ENUM_FIELDS.items():
            value = getattr(self, name)
            if not isinstance(value, enum_cls):
                unknown[name] = str(value)
        return unknown

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys and plain string values."""
        return self.model_dump(mode="json", by_alias=True)


def value_text(value: object) -> str:
    """Plain string of a knob value (enum member or raw string)."""
    return value.value if isinstance(value, Enum) else str(value)


def resolve_field_name(key: str) -> str:
    """Resolve a field name or its camelCase alias to the Python field name."""
    if key in SimulationConfig.model_fields:
        return key
    for name, info in SimulationConfig.model_fields.items():
        if info.alias == key:
            return name
    raise KeyError(f"Unknown configuration field: {key}")


# =============================================================================
# Challenge levels
# =============================================================================


class Level(BaseModel):
    """A challenge: a starting configuration plus the scoring goal."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    title: str
    description: str = ""
    max_points: float = Field(ge=0)
    difficulty: float = Field(gt=0)
    start_config: SimulationConfig = Field(default_factory=SimulationConfig)
