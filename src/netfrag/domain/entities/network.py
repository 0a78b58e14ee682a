# netfrag/domain/entities/network.py
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

MAX_LINE_COUNT = 500_000


@dataclass(slots=True)
class Point:
    id: int
    tags: dict[str, str]
    decimicro_lat: int  # 1e-7 degrees
    decimicro_lon: int
    # way-indexed: ids of sequences containing this point
    # edge-indexed: ids of directly adjacent points
    adjacency: list[int] | tuple[int, ...] = field(default_factory=list)

    @property
    def isolated(self) -> bool:
        return not self.adjacency


@dataclass(frozen=True, slots=True)
class Sequence:
    id: int
    tags: dict[str, str]
    point_ids: tuple[int, ...]  # order defines the path

    def pairs(self) -> Iterator[tuple[int, int]]:
        ids = self.point_ids
        for i in range(len(ids) - 1):
            yield ids[i], ids[i + 1]


@dataclass(frozen=True)
class GraphStats:
    points: int
    sequences: int
    isolated_points: int
    adjacency_entries: int


class Graph:
    """
    Read-only network produced by the loader.

    `points` and `sequences` are exposed as mapping proxies; adjacency is
    frozen to tuples by `GraphBuilder.freeze()`. The graph is safe to share
    with readers (analyzer, renderers) once built.
    """

    __slots__ = ("_points", "_sequences", "model")

    def __init__(
        self,
        points: dict[int, Point],
        sequences: dict[int, Sequence],
        *,
        model: str,
    ):
        self._points = MappingProxyType(points)
        self._sequences = MappingProxyType(sequences)
        self.model = model  # adjacency model kind, "way" or "edge"

    @property
    def points(self) -> Mapping[int, Point]:
        return self._points

    @property
    def sequences(self) -> Mapping[int, Sequence]:
        return self._sequences

    def __len__(self) -> int:
        return len(self._points)

    def iter_segments(self, limit: int | None = MAX_LINE_COUNT) -> Iterator[tuple[Point, Point]]:
        """Yield (from, to) point pairs along stored sequences, capped at `limit` sequences."""
        for n, seq in enumerate(self._sequences.values()):
            if limit is not None and n >= limit:
                break
            for a, b in seq.pairs():
                yield self._points[a], self._points[b]

    def bounds(self) -> tuple[int, int, int, int] | None:
        """(min_lat, min_lon, max_lat, max_lon) in decimicro degrees."""
        if not self._points:
            return None
        lats = [p.decimicro_lat for p in self._points.values()]
        lons = [p.decimicro_lon for p in self._points.values()]
        return min(lats), min(lons), max(lats), max(lons)

    def stats(self) -> GraphStats:
        isolated = 0
        entries = 0
        for p in self._points.values():
            if not p.adjacency:
                isolated += 1
            entries += len(p.adjacency)
        return GraphStats(
            points=len(self._points),
            sequences=len(self._sequences),
            isolated_points=isolated,
            adjacency_entries=entries,
        )
