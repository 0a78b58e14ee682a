# netfrag/services/loader.py
"""
Three-pass streaming loader.

The source is read front to back three times, rewinding in between:

1. collect the ids of every point referenced by an accepted sequence,
2. materialize only those points,
3. store accepted sequences and fill point adjacency.

Points that no accepted sequence touches are never held in memory, which is
what keeps country-sized extracts loadable. Any LoadError aborts the whole
load; no partial graph is returned.
"""

import time

from netfrag.app.protocols import AdjacencyModel, PrimitiveSource, SequenceFilter
from netfrag.domain.entities.network import Graph
from netfrag.domain.entities.primitives import PointPrimitive, SequencePrimitive
from netfrag.domain.errors import LoadError
from netfrag.domain.graph_builder import GraphBuilder
from netfrag.runtime.hooks import NoopHooks, PipelineHooks


def collect_used_ids(source: PrimitiveSource, accept: SequenceFilter) -> tuple[set[int], int]:
    """Pass 1. Returns (used point ids, records scanned)."""
    used: set[int] = set()
    scanned = 0
    for rec in source.iterate():
        scanned += 1
        if isinstance(rec, SequencePrimitive) and accept.accepts(rec.tags):
            used.update(rec.point_ids)
    return used, scanned


def materialize_points(
    source: PrimitiveSource, used: set[int], builder: GraphBuilder
) -> tuple[int, int]:
    """Pass 2. Returns (records scanned, points kept)."""
    scanned = kept = 0
    for rec in source.iterate():
        scanned += 1
        if isinstance(rec, PointPrimitive) and rec.id in used:
            builder.add_point(rec)
            kept += 1
    return scanned, kept


def build_adjacency(
    source: PrimitiveSource, accept: SequenceFilter, builder: GraphBuilder
) -> tuple[int, int]:
    """Pass 3. Returns (records scanned, sequences kept)."""
    scanned = kept = 0
    for rec in source.iterate():
        scanned += 1
        if isinstance(rec, SequencePrimitive) and accept.accepts(rec.tags):
            builder.add_sequence(rec)
            kept += 1
    return scanned, kept


def load_graph(
    source: PrimitiveSource,
    *,
    accept: SequenceFilter,
    model: AdjacencyModel,
    hooks: PipelineHooks | None = None,
    source_name: str = "",
) -> Graph:
    hooks = hooks or NoopHooks()
    t0 = time.perf_counter()
    hooks.load_start(source=source_name or type(source).__name__, model=model.kind)
    builder = GraphBuilder(model)
    stage = "used_ids"
    try:
        t1 = time.perf_counter()
        hooks.pass_start(number=1, name=stage)
        used, scanned = collect_used_ids(source, accept)
        hooks.pass_end(
            number=1, name=stage, scanned=scanned, kept=len(used), ms=_ms_since(t1)
        )

        stage = "rewind"
        source.rewind()

        stage = "points"
        t1 = time.perf_counter()
        hooks.pass_start(number=2, name=stage)
        scanned, kept = materialize_points(source, used, builder)
        del used
        hooks.pass_end(number=2, name=stage, scanned=scanned, kept=kept, ms=_ms_since(t1))

        stage = "rewind"
        source.rewind()

        stage = "adjacency"
        t1 = time.perf_counter()
        hooks.pass_start(number=3, name=stage)
        scanned, kept = build_adjacency(source, accept, builder)
        hooks.pass_end(number=3, name=stage, scanned=scanned, kept=kept, ms=_ms_since(t1))
    except LoadError as exc:
        hooks.error(exc, stage=stage)
        raise

    graph = builder.freeze()
    hooks.load_end(points=len(graph.points), sequences=len(graph.sequences), ms=_ms_since(t0))
    return graph


def _ms_since(t: float) -> float:
    return (time.perf_counter() - t) * 1000
