import osmium
import pytest

from netfrag.domain.adjacency import EdgeIndexedModel
from netfrag.domain.entities.primitives import PointPrimitive, SequencePrimitive
from netfrag.domain.errors import RewindError
from netfrag.io.pbf_source import PbfSource
from netfrag.policy.filters import TagFilter
from netfrag.services.loader import load_graph


@pytest.fixture
def extract(tmp_path):
    path = tmp_path / "tiny.osm"
    w = osmium.SimpleWriter(str(path))
    try:
        w.add_node(osmium.osm.mutable.Node(id=1, location=(14.5, 35.9), tags={"highway": "crossing"}))
        w.add_node(osmium.osm.mutable.Node(id=2, location=(14.6, 35.8)))
        w.add_node(osmium.osm.mutable.Node(id=3, location=(14.7, 35.7)))
        w.add_node(osmium.osm.mutable.Node(id=4, location=(14.8, 35.6)))
        w.add_way(osmium.osm.mutable.Way(id=10, nodes=[1, 2, 3], tags={"highway": "primary"}))
        w.add_way(osmium.osm.mutable.Way(id=11, nodes=[3, 4], tags={"building": "yes"}))
    finally:
        w.close()
    return path


def test_nodes_and_ways_become_primitives(extract):
    recs = list(PbfSource(extract).iterate())
    points = [r for r in recs if isinstance(r, PointPrimitive)]
    seqs = [r for r in recs if isinstance(r, SequencePrimitive)]
    assert [p.id for p in points] == [1, 2, 3, 4]
    assert (points[0].decimicro_lat, points[0].decimicro_lon) == (359_000_000, 145_000_000)
    assert points[0].tags == {"highway": "crossing"}
    assert seqs[0] == SequencePrimitive(id=10, point_ids=(1, 2, 3), tags={"highway": "primary"})


def test_loads_filtered_graph_from_extract(extract):
    g = load_graph(PbfSource(extract), accept=TagFilter("highway"), model=EdgeIndexedModel())
    assert set(g.points) == {1, 2, 3}
    assert set(g.sequences) == {10}


def test_rewind_fails_once_the_file_is_gone(extract):
    src = PbfSource(extract)
    list(src.iterate())
    assert list(src.iterate()) == []
    extract.unlink()
    with pytest.raises(RewindError):
        src.rewind()
