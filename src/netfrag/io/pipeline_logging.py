# io/pipeline_logging.py
import json
import logging
import sys

from netfrag.runtime.hooks import NoopHooks


def _default_json_logger(name="netfrag", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class PipelineLogging(NoopHooks):
    """
    Structured logs for the load passes and the component analysis.
    Per-component lines are DEBUG only and sampled every `sample_every` components.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(
            getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}}
        )

    # --------------- load -----------------------------

    def load_start(self, *, source: str, model: str):
        self._emit("INFO", "load_start", source=source, model=model)

    def pass_start(self, *, number: int, name: str):
        if self.debug:
            self._emit("DEBUG", "pass_start", number=number, name=name)

    def pass_end(self, *, number: int, name: str, scanned: int, kept: int, ms: float):
        self._emit("INFO", "pass_end", number=number, name=name, scanned=scanned, kept=kept, ms=ms)

    def load_end(self, *, points: int, sequences: int, ms: float):
        self._emit("INFO", "load_end", points=points, sequences=sequences, ms=ms)

    def error(self, exc: BaseException, *, stage: str, **kw):
        kind = getattr(exc, "kind", type(exc).__name__)
        self._emit("ERROR", "load_error", kind=kind, stage=stage, error=str(exc), **kw)

    # --------------- analysis -----------------------------

    def component(self, *, index: int, root: int, size: int):
        if self.debug and (index % self.sample_every) == 0:
            self._emit("DEBUG", "component", index=index, root=root, size=size)

    def analysis_end(self, *, components: int, oversized: int, ms: float):
        self._emit("INFO", "analysis_end", components=components, oversized=oversized, ms=ms)
