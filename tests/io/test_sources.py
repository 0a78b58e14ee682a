import io
import json

import pytest

from netfrag.domain.entities.primitives import OtherPrimitive, PointPrimitive, SequencePrimitive
from netfrag.domain.errors import DecodeError, RewindError
from netfrag.io.sources import JsonlSource, decode_record

LINES = [
    {"type": "point", "id": 1, "lat": 35.8989818, "lon": 14.5145528, "tags": {"amenity": "bench"}},
    {"type": "point", "id": 2, "lat": 35.9, "lon": 14.51},
    {"type": "sequence", "id": 10, "nodes": [1, 2], "tags": {"highway": "service"}},
    {"type": "relation", "id": 99},
]


def _text(records):
    return "\n".join(json.dumps(r) for r in records) + "\n"


def test_decodes_every_record_kind():
    recs = list(JsonlSource(io.StringIO(_text(LINES))).iterate())
    assert recs[0] == PointPrimitive(
        id=1, decimicro_lat=358_989_818, decimicro_lon=145_145_528, tags={"amenity": "bench"}
    )
    assert recs[1].tags == {}
    assert recs[2] == SequencePrimitive(id=10, point_ids=(1, 2), tags={"highway": "service"})
    assert recs[3] == OtherPrimitive(kind="relation", id=99)


def test_rewind_restarts_from_first_record(tmp_path):
    path = tmp_path / "net.jsonl"
    path.write_text(_text(LINES) + "\n\n", encoding="utf-8")
    with JsonlSource(path) as src:
        first = list(src.iterate())
        assert list(src.iterate()) == []
        src.rewind()
        assert list(src.iterate()) == first
    assert len(first) == 4


@pytest.mark.parametrize(
    "line",
    [
        "{not json",
        "[1, 2]",
        '{"id": 1}',
        '{"type": "point", "id": "1", "lat": 1.0, "lon": 2.0}',
        '{"type": "point", "id": 1, "lat": "north", "lon": 2.0}',
        '{"type": "sequence", "id": 3, "nodes": [1, "x"]}',
        '{"type": "sequence", "id": 3}',
        '{"type": "sequence", "id": 3, "nodes": [1], "tags": ["a"]}',
    ],
)
def test_malformed_records_raise_decode_error(line):
    with pytest.raises(DecodeError):
        decode_record(line, 7)


def test_decode_error_carries_line_number():
    text = _text(LINES[:2]) + "garbage\n"
    src = JsonlSource(io.StringIO(text))
    with pytest.raises(DecodeError) as ei:
        list(src.iterate())
    assert ei.value.position == 3


class _Pipe(io.StringIO):
    def seekable(self):
        return False

    def seek(self, *a):
        raise io.UnsupportedOperation("pipe")


def test_unseekable_stream_cannot_rewind():
    src = JsonlSource(_Pipe(_text(LINES)))
    list(src.iterate())
    with pytest.raises(RewindError):
        src.rewind()


def test_invalid_utf8_is_a_decode_error(tmp_path):
    path = tmp_path / "latin1.jsonl"
    path.write_bytes(
        b'{"type": "point", "id": 1, "lat": 0, "lon": 0}\n'
        b'{"type": "point", "id": 2, "lat": 0, "lon": 0, "tags": {"n": "\xff"}}\n'
    )
    with JsonlSource(path) as src:
        with pytest.raises(DecodeError):
            list(src.iterate())


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "1e400", "1" + "0" * 400])
def test_non_finite_coordinates_are_decode_errors(value):
    line = '{"type": "point", "id": 1, "lat": %s, "lon": 14.5}' % value
    with pytest.raises(DecodeError) as ei:
        decode_record(line, 4)
    assert ei.value.position == 4
