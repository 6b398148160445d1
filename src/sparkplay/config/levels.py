"""Built-in challenge levels.

Each level starts the learner from a deliberately slow configuration. The
score for a run is ``maxPoints - time / difficulty``, so a higher difficulty
forgives more time units per lost point.

Levels are ordered; ``list_levels()`` returns them in the order they are
meant to be played.
"""

from __future__ import annotations

from typing import Any

from .schema import Level

# ---------------------------------------------------------------------------
# Level data
# ---------------------------------------------------------------------------
# Kept as plain dicts (the same shape as a levels YAML file) and validated
# once at import time.

_LEVEL_DATA: list[dict[str, Any]] = [
    {
        "id": "shuffle-basics",
        "title": "Level 1: Tame the Shuffle",
        "description": (
            "A CSV dataset joined without partitioning on a single worker. "
            "Cut the runtime without changing the tables being joined."
        ),
        "maxPoints": 1000,
        "difficulty": 5,
        "startConfig": {
            "clusterSize": "Small",
            "datasetSize": "Medium",
            "partitionStrategy": "None",
            "fileFormat": "CSV",
            "joinPrimary": "Orders",
            "joinSecondary": "Customers",
            "joinKey": "customer_id",
            "joinType": "Shuffle",
            "useCache": False,
            "aqeEnabled": False,
            "skewed": False,
            "skewKey": "region_id",
        },
    },
    {
        "id": "broadcast-dimension",
        "title": "Level 2: Broadcast the Dimension",
        "description": (
            "Orders joined with the small Products table. "
            "Find the join strategy that avoids shuffling the large side."
        ),
        "maxPoints": 1000,
        "difficulty": 2,
        "startConfig": {
            "clusterSize": "Medium",
            "datasetSize": "Small",
            "partitionStrategy": "Bad",
            "fileFormat": "CSV",
            "joinPrimary": "Orders",
            "joinSecondary": "Products",
            "joinKey": "product_id",
            "joinType": "Shuffle",
            "useCache": False,
            "aqeEnabled": False,
            "skewed": False,
            "skewKey": "region_id",
        },
    },
    {
        "id": "skew-buster",
        "title": "Level 3: Skew Buster",
        "description": (
            "A large, skewed dataset on a small cluster. "
            "Use every knob you have learned about."
        ),
        "maxPoints": 1000,
        "difficulty": 20,
        "startConfig": {
            "clusterSize": "Small",
            "datasetSize": "Large",
            "partitionStrategy": "None",
            "fileFormat": "CSV",
            "joinPrimary": "Orders",
            "joinSecondary": "Customers",
            "joinKey": "order_id",
            "joinType": "Shuffle",
            "useCache": False,
            "aqeEnabled": False,
            "skewed": True,
            "skewKey": "order_id",
        },
    },
]

BUILTIN_LEVELS: dict[str, Level] = {
    level.id: level for level in (Level.model_validate(d) for d in _LEVEL_DATA)
}


def list_levels() -> list[Level]:
    """Built-in levels in play order."""
    return list(BUILTIN_LEVELS.values())


def get_level(level_id: str, levels: list[Level] | None = None) -> Level:
    """Find a level by id among *levels* (default: the built-in levels).

    Raises:
        KeyError: If no level has that id
    """
    candidates = levels if levels is not None else list_levels()
    for level in candidates:
        if level.id == level_id:
            return level
    valid = ", ".join(level.id for level in candidates)
    raise KeyError(f"Unknown level: {level_id}. Valid: {valid}")
