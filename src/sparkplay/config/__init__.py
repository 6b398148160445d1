"""Sparkplay configuration module."""

from .levels import BUILTIN_LEVELS, get_level, list_levels
from .loader import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    generate_example_config_yaml,
    load_config,
    load_levels,
    save_config,
)
from .schema import (
    BOOL_FIELDS,
    ENUM_FIELDS,
    ClusterSize,
    DatasetSize,
    FileFormat,
    JoinKey,
    JoinType,
    Level,
    PartitionStrategy,
    SimulationConfig,
    SkewKey,
    TableName,
    resolve_field_name,
    value_text,
)
from .tables import TableVolumes, table_volumes, workers_for

__all__ = [
    # Config classes
    "SimulationConfig",
    "Level",
    # Enums
    "ClusterSize",
    "DatasetSize",
    "FileFormat",
    "JoinKey",
    "JoinType",
    "PartitionStrategy",
    "SkewKey",
    "TableName",
    "ENUM_FIELDS",
    "BOOL_FIELDS",
    "resolve_field_name",
    "value_text",
    # Tables
    "TableVolumes",
    "table_volumes",
    "workers_for",
    # Levels
    "BUILTIN_LEVELS",
    "get_level",
    "list_levels",
    # Loader functions
    "load_config",
    "load_levels",
    "save_config",
    "generate_example_config_yaml",
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]
