# netfrag/io/pbf_source.py
import os
from collections.abc import Iterator

import osmium

from netfrag.domain.entities.primitives import (
    OtherPrimitive,
    PointPrimitive,
    Primitive,
    SequencePrimitive,
)
from netfrag.domain.errors import DecodeError, RewindError


def _tags(obj) -> dict[str, str]:
    return {t.k: t.v for t in obj.tags}


def convert(obj) -> Primitive:
    """Copy an osmium object out of the reader buffer into a primitive record."""
    if obj.is_node():
        loc = obj.location
        if not loc.valid():
            raise DecodeError(f"node {obj.id} has no valid location")
        # osmium stores coordinates as 1e-7 degree fixed-point already
        return PointPrimitive(
            id=obj.id, decimicro_lat=loc.y, decimicro_lon=loc.x, tags=_tags(obj)
        )
    if obj.is_way():
        return SequencePrimitive(
            id=obj.id, point_ids=tuple(n.ref for n in obj.nodes), tags=_tags(obj)
        )
    if obj.is_relation():
        return OtherPrimitive(kind="relation", id=obj.id)
    return OtherPrimitive(kind=type(obj).__name__.lower(), id=getattr(obj, "id", None))


class PbfSource:
    """
    PrimitiveSource over an OSM extract (.osm.pbf, .osm, ...) read with pyosmium.

    Each pass re-opens the file; `rewind()` only succeeds while the file is
    still readable.
    """

    def __init__(self, path: str | os.PathLike, *, with_relations: bool = False):
        self.path = os.fspath(path)
        self.name = self.path
        self.entities = osmium.osm.NODE | osmium.osm.WAY
        if with_relations:
            self.entities |= osmium.osm.RELATION
        self._at_start = True

    def iterate(self) -> Iterator[Primitive]:
        if not self._at_start:
            return
        self._at_start = False
        n = 0
        try:
            for obj in osmium.FileProcessor(self.path, self.entities):
                n += 1
                yield convert(obj)
        except RuntimeError as exc:
            raise DecodeError(f"{self.path}: {exc}", position=n + 1) from exc

    def rewind(self) -> None:
        if not os.access(self.path, os.R_OK):
            raise RewindError(f"cannot reopen {self.path}")
        self._at_start = True
