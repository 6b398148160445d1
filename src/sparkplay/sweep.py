"""What-if comparison: vary one knob, hold the rest fixed."""

from __future__ import annotations

from dataclasses import dataclass

from sparkplay.config.schema import BOOL_FIELDS, ENUM_FIELDS, SimulationConfig, resolve_field_name
from sparkplay.simulator import Metrics, estimate


@dataclass(frozen=True)
class SweepPoint:
    field: str
    value: str | bool
    metrics: Metrics


def sweep_values(field_name: str) -> list[str | bool]:
    """Every value a field can take, in declaration order.

    Raises:
        KeyError: If the field is unknown
    """
    name = resolve_field_name(field_name)
    if name in BOOL_FIELDS:
        return [False, True]
    enum_cls = ENUM_FIELDS[name]
    return [member.value for member in enum_cls]


def sweep(config: SimulationConfig, field_name: str) -> list[SweepPoint]:
    """Estimate *config* once per value of *field_name*.

    *field_name* may be the Python name or the camelCase alias.
    """
    name = resolve_field_name(field_name)
    return [
        SweepPoint(field=name, value=value, metrics=estimate(config.evolve(**{name: value})))
        for value in sweep_values(name)
    ]
