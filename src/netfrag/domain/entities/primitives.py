# netfrag/domain/entities/primitives.py
from dataclasses import dataclass, field

DECIMICRO = 10_000_000  # 1e-7 degree per unit


def to_decimicro(degrees: float) -> int:
    return int(round(float(degrees) * DECIMICRO))


def from_decimicro(value: int) -> float:
    return value / DECIMICRO


# Raw records as handed out by a PrimitiveSource
@dataclass(frozen=True)
class PointPrimitive:
    id: int
    decimicro_lat: int
    decimicro_lon: int
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SequencePrimitive:
    id: int
    point_ids: tuple[int, ...]
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OtherPrimitive:
    """Any record kind the graph does not use (relations, changesets, ...)."""

    kind: str
    id: int | None = None


Primitive = PointPrimitive | SequencePrimitive | OtherPrimitive
