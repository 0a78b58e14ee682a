# netfrag/domain/graph_builder.py
from netfrag.app.protocols import AdjacencyModel
from netfrag.domain.entities.network import Graph, Point, Sequence
from netfrag.domain.entities.primitives import PointPrimitive, SequencePrimitive


class GraphBuilder:
    """Mutable staging area for the loader; `freeze()` hands out the read-only Graph."""

    def __init__(self, model: AdjacencyModel):
        self.model = model
        self.points: dict[int, Point] = {}
        self.sequences: dict[int, Sequence] = {}
        self._frozen = False

    def add_point(self, prim: PointPrimitive) -> Point:
        self._check_open()
        p = Point(
            id=prim.id,
            tags=dict(prim.tags),
            decimicro_lat=prim.decimicro_lat,
            decimicro_lon=prim.decimicro_lon,
            adjacency=[],
        )
        self.points[p.id] = p
        return p

    def add_sequence(self, prim: SequencePrimitive) -> Sequence:
        self._check_open()
        seq = Sequence(id=prim.id, tags=dict(prim.tags), point_ids=tuple(prim.point_ids))
        # raises DanglingReferenceError before the sequence is stored
        self.model.link(self.points, seq)
        self.sequences[seq.id] = seq
        return seq

    def freeze(self) -> Graph:
        self._check_open()
        for p in self.points.values():
            p.adjacency = tuple(p.adjacency)
        self._frozen = True
        graph = Graph(self.points, self.sequences, model=self.model.kind)
        self.points, self.sequences = {}, {}
        return graph

    def _check_open(self):
        if self._frozen:
            raise RuntimeError("graph already frozen")
