# netfrag/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from netfrag.app.protocols import AdjacencyModel, PrimitiveSource, Reporter, SequenceFilter
from netfrag.config.models import RunModel
from netfrag.domain.entities.network import Graph
from netfrag.io.pipeline_logging import PipelineLogging  # JSON logs
from netfrag.io.recorder import JsonlSink, Recorder
from netfrag.io.reports import ConnectivitySummary
from netfrag.runtime.hooks import NoopHooks, PipelineHooks
from netfrag.runtime.registries import make_adjacency, make_filter, make_source
from netfrag.runtime.rng import RNGRegistry
from netfrag.services.connectivity import ConnectivityAnalyzer
from netfrag.services.loader import load_graph


@dataclass
class RunResult:
    components: int
    graph: Graph
    oversized_sizes: list[int] = field(default_factory=list)


@dataclass
class App:
    model: RunModel
    source: PrimitiveSource
    accept: SequenceFilter
    adjacency: AdjacencyModel
    hooks: PipelineHooks
    reporter: Reporter
    analyzer: ConnectivityAnalyzer

    def load(self) -> Graph:
        return load_graph(
            self.source,
            accept=self.accept,
            model=self.adjacency,
            hooks=self.hooks,
            source_name=getattr(self.source, "name", ""),
        )

    def run(self) -> RunResult:
        graph = self.load()
        # collect oversized sizes on the side, in discovery order
        sizes: list[int] = []
        reporter = self.analyzer.reporter
        self.analyzer.reporter = _Tee(reporter, sizes)
        try:
            components = self.analyzer.count_components(graph)
        finally:
            self.analyzer.reporter = reporter
        stats = graph.stats()
        self.reporter.emit(
            ConnectivitySummary(
                run_id=self.model.run_id,
                name="connectivity_summary",
                components=components,
                oversized=len(sizes),
                points=stats.points,
                sequences=stats.sequences,
                isolated_points=stats.isolated_points,
            )
        )
        return RunResult(components=components, graph=graph, oversized_sizes=sizes)


class _Tee:
    def __init__(self, reporter: Reporter, sizes: list[int]):
        self.reporter, self.sizes = reporter, sizes

    def emit(self, report) -> None:
        self.sizes.append(report.size)
        self.reporter.emit(report)


def build(
    cfg: RunModel | Mapping,
    *,
    source: PrimitiveSource | None = None,
    reporter: Reporter | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, RunModel) else RunModel.model_validate(cfg)

    # 1) Source
    if source is None:
        if model.source is None:
            raise ValueError("No source configured")
        source = make_source(model.source)

    # 2) Graph building strategy
    accept = make_filter(model.filter)
    adjacency = make_adjacency(model.adjacency)

    # 3) Hooks & reporting
    hooks = (
        PipelineLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    reporter = reporter or Recorder(JsonlSink())

    # 4) Analyzer
    rng = None
    if model.analysis.root_order == "shuffled":
        rng = RNGRegistry(model.analysis.seed, run=model.name).stream("roots")
    analyzer = ConnectivityAnalyzer(
        adjacency,
        threshold=model.analysis.threshold,
        reporter=reporter,
        hooks=hooks,
        root_order=model.analysis.root_order,
        rng=rng,
        size_convention=model.analysis.size_convention,
        run_id=model.run_id,
    )

    return App(model, source, accept, adjacency, hooks, reporter, analyzer)
