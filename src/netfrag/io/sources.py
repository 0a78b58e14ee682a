# netfrag/io/sources.py
"""
JSON-lines primitive source.

One record per line:

    {"type": "point", "id": 1, "lat": 35.9, "lon": 14.5, "tags": {...}}
    {"type": "sequence", "id": 10, "nodes": [1, 2, 3], "tags": {...}}

Coordinates are degrees and are stored as decimicro-degree integers. Any
other "type" becomes an OtherPrimitive. Blank lines are skipped.
"""

import io
import json
import math
import os
from collections.abc import Iterator
from pathlib import Path
from typing import IO

from netfrag.domain.entities.primitives import (
    OtherPrimitive,
    PointPrimitive,
    Primitive,
    SequencePrimitive,
    to_decimicro,
)
from netfrag.domain.errors import DecodeError, RewindError


def _tags(obj: dict, lineno: int) -> dict[str, str]:
    tags = obj.get("tags") or {}
    if not isinstance(tags, dict):
        raise DecodeError("tags must be an object", position=lineno)
    return {str(k): str(v) for k, v in tags.items()}


def _int(obj: dict, key: str, lineno: int) -> int:
    v = obj.get(key)
    if isinstance(v, bool) or not isinstance(v, int):
        raise DecodeError(f"{key!r} must be an integer, got {v!r}", position=lineno)
    return v


def _coord(obj: dict, key: str, lineno: int) -> int:
    v = obj.get(key)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise DecodeError(f"{key!r} must be a number, got {v!r}", position=lineno)
    try:
        degrees = float(v)
    except OverflowError:
        degrees = math.inf
    if not math.isfinite(degrees):
        raise DecodeError(f"{key!r} must be finite, got {v!r}", position=lineno)
    return to_decimicro(degrees)


def decode_record(line: str, lineno: int = 0) -> Primitive:
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc.msg}", position=lineno) from exc
    if not isinstance(obj, dict):
        raise DecodeError("record must be a JSON object", position=lineno)

    kind = obj.get("type")
    if kind == "point":
        return PointPrimitive(
            id=_int(obj, "id", lineno),
            decimicro_lat=_coord(obj, "lat", lineno),
            decimicro_lon=_coord(obj, "lon", lineno),
            tags=_tags(obj, lineno),
        )
    if kind == "sequence":
        nodes = obj.get("nodes")
        if not isinstance(nodes, list) or any(
            isinstance(n, bool) or not isinstance(n, int) for n in nodes
        ):
            raise DecodeError("'nodes' must be a list of integers", position=lineno)
        return SequencePrimitive(
            id=_int(obj, "id", lineno), point_ids=tuple(nodes), tags=_tags(obj, lineno)
        )
    if not isinstance(kind, str):
        raise DecodeError("record has no 'type'", position=lineno)
    rid = obj.get("id")
    return OtherPrimitive(kind=kind, id=rid if isinstance(rid, int) else None)


class JsonlSource:
    """PrimitiveSource over a JSON-lines file or an already opened text stream."""

    def __init__(self, src: str | os.PathLike | IO[str]):
        if isinstance(src, (str, os.PathLike)):
            self.name = str(src)
            self._fp: IO[str] = open(Path(src), encoding="utf-8", errors="strict")
            self._owned = True
        else:
            self.name = getattr(src, "name", type(src).__name__)
            self._fp = src
            self._owned = False

    def iterate(self) -> Iterator[Primitive]:
        lineno = 0
        try:
            for lineno, line in enumerate(self._fp, start=1):
                if not line.strip():
                    continue
                yield decode_record(line, lineno)
        except UnicodeDecodeError as exc:
            # text streams decode ahead in chunks; the line is approximate
            raise DecodeError(
                f"invalid UTF-8 in {self.name}: {exc.reason}", position=lineno + 1
            ) from exc

    def rewind(self) -> None:
        try:
            self._fp.seek(0)
        except (OSError, io.UnsupportedOperation, ValueError) as exc:
            raise RewindError(f"cannot rewind {self.name}: {exc}") from exc

    def close(self) -> None:
        if self._owned:
            self._fp.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
