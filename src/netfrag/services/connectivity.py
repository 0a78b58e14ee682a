# netfrag/services/connectivity.py
import time
from collections import deque
from collections.abc import Iterable
from typing import Literal

import numpy as np

from netfrag.app.protocols import AdjacencyModel, Reporter
from netfrag.domain.entities.network import Graph
from netfrag.io.reports import OversizedComponent
from netfrag.runtime.hooks import NoopHooks, PipelineHooks

OVERSIZED_THRESHOLD = 500

RootOrder = Literal["unordered", "sorted", "shuffled"]
SizeConvention = Literal["nodes", "legacy"]


class ConnectivityAnalyzer:
    """
    Breadth-first component counting over a frozen Graph.

    Points without adjacency are never roots and belong to no component.
    A component larger than `threshold` is reported to `reporter` as an
    OversizedComponent, in discovery order; the return value of
    `count_components` is only the number of components.

    size_convention:
      "nodes"  -> size is the number of points in the component
      "legacy" -> 1 + number of dequeued points (node count + 1)
    """

    def __init__(
        self,
        model: AdjacencyModel,
        *,
        threshold: int = OVERSIZED_THRESHOLD,
        reporter: Reporter | None = None,
        hooks: PipelineHooks | None = None,
        root_order: RootOrder = "unordered",
        rng: np.random.Generator | None = None,
        size_convention: SizeConvention = "nodes",
        run_id: str = "local",
    ):
        if root_order == "shuffled" and rng is None:
            raise ValueError("root_order='shuffled' needs an rng")
        self.model = model
        self.threshold = threshold
        self.reporter = reporter
        self.hooks = hooks or NoopHooks()
        self.root_order = root_order
        self.rng = rng
        self.size_convention = size_convention
        self.run_id = run_id

    def roots(self, graph: Graph) -> Iterable[int]:
        if self.root_order == "sorted":
            return sorted(graph.points)
        if self.root_order == "shuffled":
            ids = np.fromiter(graph.points.keys(), dtype=np.int64, count=len(graph.points))
            return self.rng.permutation(ids).tolist()
        return graph.points.keys()

    def count_components(self, graph: Graph) -> int:
        if graph.model != self.model.kind:
            raise ValueError(
                f"graph built with {graph.model!r} adjacency, analyzer uses {self.model.kind!r}"
            )
        t0 = time.perf_counter()
        points = graph.points
        neighbors = self.model.neighbors
        visited: set[int] = set()
        queue: deque[int] = deque()
        components = 0
        oversized = 0

        for root in self.roots(graph):
            if root in visited or not points[root].adjacency:
                continue
            components += 1
            visited.add(root)
            queue.append(root)
            size = 1 if self.size_convention == "legacy" else 0

            while queue:
                pid = queue.popleft()
                size += 1
                for nb in neighbors(graph, points[pid]):
                    if nb not in visited:
                        visited.add(nb)
                        queue.append(nb)

            self.hooks.component(index=components, root=root, size=size)
            if size > self.threshold:
                oversized += 1
                if self.reporter is not None:
                    self.reporter.emit(
                        OversizedComponent(
                            run_id=self.run_id,
                            name="oversized_component",
                            index=components,
                            root_id=root,
                            size=size,
                        )
                    )

        self.hooks.analysis_end(
            components=components,
            oversized=oversized,
            ms=(time.perf_counter() - t0) * 1000,
        )
        return components


def check_connectivity(graph: Graph, model: AdjacencyModel, **kw) -> int:
    return ConnectivityAnalyzer(model, **kw).count_components(graph)
