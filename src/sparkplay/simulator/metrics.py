"""Result types of the cost model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Stage(str, Enum):
    """Pipeline stages, in execution order."""

    READ = "Read"
    SHUFFLE = "Shuffle"
    COMPUTE = "Compute"
    WRITE = "Write"


STAGE_ORDER: tuple[Stage, ...] = (Stage.READ, Stage.SHUFFLE, Stage.COMPUTE, Stage.WRITE)


@dataclass(frozen=True)
class StageVolumes:
    """Data moved by each stage, in GB, before any rounding.

    ``compute_gb`` is spill plus broadcast traffic. ``broadcast_fallback`` is
    set when a broadcast join was requested but the secondary table was too
    large, so the join was costed as a shuffle.
    """

    read_gb: float
    shuffle_gb: float
    broadcast_gb: float
    spill_gb: float
    write_gb: float
    broadcast_fallback: bool = False

    @property
    def compute_gb(self) -> float:
        return self.spill_gb + self.broadcast_gb

    def by_stage(self) -> dict[Stage, float]:
        """GB per stage in ``STAGE_ORDER``."""
        return {
            Stage.READ: self.read_gb,
            Stage.SHUFFLE: self.shuffle_gb,
            Stage.COMPUTE: self.compute_gb,
            Stage.WRITE: self.write_gb,
        }


class StageTraffic(BaseModel):
    """Network volume of one stage."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    stage: Stage
    network_mb: int = Field(ge=0, alias="networkMB")


class Metrics(BaseModel):
    """Output of one estimate: time, utilization and per-stage traffic.

    ``time`` is in abstract time units. ``cpu`` and ``memory`` are
    percentages clamped to [5, 100]. ``network_timeline`` always holds the
    four stages in ``STAGE_ORDER``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    time: int
    cpu: int
    memory: int
    network_timeline: tuple[StageTraffic, ...]

    @property
    def total_network_mb(self) -> int:
        return sum(s.network_mb for s in self.network_timeline)

    def stage_mb(self, stage: Stage | str) -> int:
        """Network MB of a single stage (0 if absent)."""
        for s in self.network_timeline:
            if s.stage == stage:
                return s.network_mb
        return 0

    def to_wire(self) -> dict[str, Any]:
        """``{time, cpu, memory, networkTimeline: [{stage, networkMB}, ...]}``."""
        return self.model_dump(mode="json", by_alias=True)
