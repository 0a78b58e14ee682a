from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol, runtime_checkable

from netfrag.domain.entities.network import Graph, Point, Sequence
from netfrag.domain.entities.primitives import Primitive


# ------------- Inputs --------------------
@runtime_checkable
class PrimitiveSource(Protocol):
    """
    Responsibilities:
    • Yield decoded records (points, sequences, anything else) front to back.
    • Restart from the very first record on `rewind()`.
    Iterating may raise DecodeError for any single record; rewinding may raise
    RewindError. Both are fatal to a load.
    """

    def iterate(self) -> Iterator[Primitive]: ...
    def rewind(self) -> None: ...


@runtime_checkable
class SequenceFilter(Protocol):
    """Pure predicate over a sequence's tags. Must answer identically on every pass."""

    def accepts(self, tags: Mapping[str, str]) -> bool: ...


# ------------- Graph building --------------------
@runtime_checkable
class AdjacencyModel(Protocol):
    """
    Responsibilities:
      • Record adjacency for one accepted sequence while the graph is built.
      • Enumerate the neighbors of a point once the graph is frozen.
    """

    kind: str

    def link(self, points: Mapping[int, Point], seq: Sequence) -> None: ...
    def neighbors(self, graph: Graph, point: Point) -> Iterable[int]: ...


# ------------- Outputs --------------------
@runtime_checkable
class Reporter(Protocol):
    def emit(self, report) -> None: ...
