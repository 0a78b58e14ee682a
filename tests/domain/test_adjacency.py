import pytest

from netfrag.domain.adjacency import EdgeIndexedModel, WayIndexedModel
from netfrag.domain.entities.primitives import PointPrimitive, SequencePrimitive
from netfrag.domain.errors import DanglingReferenceError
from netfrag.domain.graph_builder import GraphBuilder


def _builder(model, ids):
    b = GraphBuilder(model)
    for i in ids:
        b.add_point(PointPrimitive(id=i, decimicro_lat=i, decimicro_lon=-i))
    return b


def test_edge_model_links_consecutive_pairs_both_ways():
    b = _builder(EdgeIndexedModel(), [1, 2, 3, 4])
    b.add_sequence(SequencePrimitive(id=10, point_ids=(1, 2, 3, 4)))
    g = b.freeze()

    for a, c in [(1, 2), (2, 3), (3, 4)]:
        assert c in g.points[a].adjacency
        assert a in g.points[c].adjacency
    # only geometric neighbors, no shortcut 1 -> 3
    assert 3 not in g.points[1].adjacency
    assert sorted(g.points[2].adjacency) == [1, 3]


def test_edge_model_deduplicates_repeated_pairs():
    b = _builder(EdgeIndexedModel(), [1, 2])
    b.add_sequence(SequencePrimitive(id=10, point_ids=(1, 2, 1, 2)))
    b.add_sequence(SequencePrimitive(id=11, point_ids=(2, 1)))
    g = b.freeze()
    assert g.points[1].adjacency == (2,)
    assert g.points[2].adjacency == (1,)


def test_edge_model_single_point_sequence_leaves_point_isolated():
    b = _builder(EdgeIndexedModel(), [1])
    b.add_sequence(SequencePrimitive(id=10, point_ids=(1,)))
    g = b.freeze()
    assert g.points[1].isolated
    assert 10 in g.sequences


def test_way_model_records_membership_with_duplicates():
    b = _builder(WayIndexedModel(), [1, 2, 3])
    b.add_sequence(SequencePrimitive(id=10, point_ids=(1, 2, 3, 1)))
    b.add_sequence(SequencePrimitive(id=11, point_ids=(3, 2)))
    g = b.freeze()
    assert g.points[1].adjacency == (10, 10)
    assert sorted(g.points[3].adjacency) == [10, 11]


def test_way_model_neighbors_span_the_whole_sequence():
    model = WayIndexedModel()
    b = _builder(model, [1, 2, 3])
    b.add_sequence(SequencePrimitive(id=10, point_ids=(1, 2, 3)))
    g = b.freeze()
    assert set(model.neighbors(g, g.points[1])) == {1, 2, 3}


@pytest.mark.parametrize("model", [WayIndexedModel(), EdgeIndexedModel()])
def test_missing_point_is_a_dangling_reference(model):
    b = _builder(model, [1, 2])
    with pytest.raises(DanglingReferenceError) as ei:
        b.add_sequence(SequencePrimitive(id=7, point_ids=(1, 2, 99)))
    assert ei.value.sequence_id == 7
    assert ei.value.point_id == 99
    assert 7 not in b.sequences
