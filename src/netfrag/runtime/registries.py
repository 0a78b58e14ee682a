# runtime/registries.py
from collections.abc import Callable

from netfrag.app.protocols import AdjacencyModel, PrimitiveSource, SequenceFilter
from netfrag.config.models import (
    AdjacencyEdgeModel,
    AdjacencyUnion,
    AdjacencyWayModel,
    FilterAllModel,
    FilterTagModel,
    FilterUnion,
    JsonlSourceModel,
    PbfSourceModel,
    SourceUnion,
)
from netfrag.domain.adjacency import EdgeIndexedModel, WayIndexedModel
from netfrag.policy.filters import AcceptAllFilter, TagFilter

FilterFactory = Callable[[FilterUnion], SequenceFilter]
AdjacencyFactory = Callable[[AdjacencyUnion], AdjacencyModel]
SourceFactory = Callable[[SourceUnion], PrimitiveSource]

_filter_registry: dict[str, FilterFactory] = {}
_adjacency_registry: dict[str, AdjacencyFactory] = {}
_source_registry: dict[str, SourceFactory] = {}


def _lookup(registry: dict, kind: str, what: str):
    try:
        return registry[kind]
    except KeyError:
        raise ValueError(f"Unknown {what} kind {kind!r}") from None


# ------------------- Filters ---------------------------


def register_filter(kind: str):
    def deco(fn: FilterFactory):
        _filter_registry[kind] = fn
        return fn

    return deco


def make_filter(cfg: FilterUnion) -> SequenceFilter:
    return _lookup(_filter_registry, cfg.kind, "filter")(cfg)


@register_filter("all")
def _make_accept_all(cfg: FilterAllModel):
    return AcceptAllFilter()


@register_filter("tag")
def _make_tag(cfg: FilterTagModel):
    return TagFilter(cfg.key, cfg.values)


# ------------------- Adjacency models ---------------------------


def register_adjacency(kind: str):
    def deco(fn: AdjacencyFactory):
        _adjacency_registry[kind] = fn
        return fn

    return deco


def make_adjacency(cfg: AdjacencyUnion) -> AdjacencyModel:
    return _lookup(_adjacency_registry, cfg.kind, "adjacency")(cfg)


@register_adjacency("way")
def _make_way(cfg: AdjacencyWayModel):
    return WayIndexedModel()


@register_adjacency("edge")
def _make_edge(cfg: AdjacencyEdgeModel):
    return EdgeIndexedModel()


# ------------------- Sources ---------------------------


def register_source(kind: str):
    def deco(fn: SourceFactory):
        _source_registry[kind] = fn
        return fn

    return deco


def make_source(cfg: SourceUnion) -> PrimitiveSource:
    return _lookup(_source_registry, cfg.kind, "source")(cfg)


@register_source("jsonl")
def _make_jsonl(cfg: JsonlSourceModel):
    from netfrag.io.sources import JsonlSource

    return JsonlSource(cfg.path)


@register_source("pbf")
def _make_pbf(cfg: PbfSourceModel):
    # osmium is only imported when a PBF extract is actually read
    from netfrag.io.pbf_source import PbfSource

    return PbfSource(cfg.path, with_relations=cfg.with_relations)
