"""Shared constants for sparkplay."""

# Config file picked up by the CLI when no path is given
DEFAULT_CONFIG = "sparkplay.yaml"

# 1 GB = 1024 MB for the network timeline
GB_TO_MB = 1024

# Percentage outputs are always clamped into this range
PERCENT_FLOOR = 5
PERCENT_CEILING = 100
