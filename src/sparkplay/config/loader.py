"""Configuration and level file loader for sparkplay."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from .schema import Level, SimulationConfig


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when a configuration file is not found."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a configuration file cannot be parsed."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


def load_yaml(path: Path) -> Any:
    """Load a YAML file.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse YAML: {e}")  # noqa: B904


def _validation_error(e: ValidationError, what: str) -> ConfigValidationError:
    error_messages = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err["loc"])
        error_messages.append(f"  - {loc}: {err['msg']}")
    return ConfigValidationError(
        f"{what} validation failed:\n" + "\n".join(error_messages),
        errors=[dict(err) for err in e.errors()],  # type: ignore[call-overload]
    )


def load_config(path: str | Path) -> SimulationConfig:
    """Load and validate a simulation configuration from a YAML file.

    Missing fields take their defaults. Enumerated fields holding values
    outside their enumeration are kept; see ``SimulationConfig.unknown_fields``.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails or the document is not a mapping
    """
    path = Path(path)
    data = load_yaml(path) or {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"Expected a mapping at the top of {path}")

    return SimulationConfig.model_validate(data)


def load_levels(path: str | Path) -> list[Level]:
    """Load challenge levels from a YAML file.

    The file holds either a list of levels or a mapping with a ``levels`` key.
    Order is preserved.
    """
    path = Path(path)
    data = load_yaml(path) or []
    if isinstance(data, dict):
        data = data.get("levels", [])
    if not isinstance(data, list):
        raise ConfigParseError(f"Expected a list of levels in {path}")

    levels = []
    for i, item in enumerate(data):
        try:
            levels.append(Level.model_validate(item))
        except ValidationError as e:
            raise _validation_error(e, f"Level #{i + 1}")  # noqa: B904
    return levels


def save_config(config: BaseModel, path: str | Path) -> None:
    """Save a configuration (or level) to a YAML file with camelCase keys."""
    path = Path(path)
    data = config.model_dump(mode="json", by_alias=True)

    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)


def generate_example_config_yaml() -> str:
    """Generate a starter configuration with every knob and its choices.

    Returns:
        String containing commented YAML configuration
    """
    return """# Spark Playground configuration
# ===============================
# Each knob below is shown with its default. Edit and run:
#   sparkplay simulate sparkplay.yaml

# Cluster size: Small (1 worker), Medium (4 workers), Large (8 workers)
clusterSize: Small

# Dataset size: Small (10 GB), Medium (100 GB), Large (1000 GB) of raw data
datasetSize: Small

# Partitioning: None, Good, Bad
partitionStrategy: None

# File format: Parquet (half the raw size on disk), CSV
fileFormat: Parquet

# Tables to join: Orders (60%), Customers (30%), Products (10%)
joinPrimary: Orders
joinSecondary: Customers

# Join key: customer_id, product_id, order_id (display only)
joinKey: customer_id

# Join strategy: Shuffle, Broadcast (secondary must be <= 1 GB on disk)
joinType: Shuffle

# Cache the primary table in memory
useCache: false

# Adaptive query execution
aqeEnabled: false

# Simulate data skew, keyed on: region_id, customer_id, product_id, order_id
skewed: false
skewKey: region_id
"""
