# netfrag/domain/adjacency.py
from collections.abc import Iterable, Mapping

from netfrag.app.protocols import AdjacencyModel
from netfrag.domain.entities.network import Graph, Point, Sequence
from netfrag.domain.errors import DanglingReferenceError


def _resolve(points: Mapping[int, Point], seq: Sequence) -> list[Point]:
    out = []
    for pid in seq.point_ids:
        p = points.get(pid)
        if p is None:
            raise DanglingReferenceError(seq.id, pid)
        out.append(p)
    return out


class WayIndexedModel(AdjacencyModel):
    """
    Points remember the sequences they belong to.

    Expansion treats every point of a shared sequence as a neighbor, not only
    the consecutive ones, so a sequence is a single hop end to end.
    """

    kind = "way"

    def link(self, points: Mapping[int, Point], seq: Sequence) -> None:
        for p in _resolve(points, seq):
            p.adjacency.append(seq.id)

    def neighbors(self, graph: Graph, point: Point) -> Iterable[int]:
        sequences = graph.sequences
        for sid in point.adjacency:
            yield from sequences[sid].point_ids


class EdgeIndexedModel(AdjacencyModel):
    """Points hold their direct neighbors along sequences (undirected)."""

    kind = "edge"

    def link(self, points: Mapping[int, Point], seq: Sequence) -> None:
        resolved = _resolve(points, seq)
        for a, b in zip(resolved, resolved[1:]):
            if b.id not in a.adjacency:
                a.adjacency.append(b.id)
            if a.id not in b.adjacency:
                b.adjacency.append(a.id)

    def neighbors(self, graph: Graph, point: Point) -> Iterable[int]:
        return point.adjacency
