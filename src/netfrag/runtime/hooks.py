# runtime/hooks.py
from typing import Protocol


class PipelineHooks(Protocol):
    def load_start(self, *, source: str, model: str): ...
    def pass_start(self, *, number: int, name: str): ...
    def pass_end(self, *, number: int, name: str, scanned: int, kept: int, ms: float): ...
    def load_end(self, *, points: int, sequences: int, ms: float): ...
    def error(self, exc: BaseException, *, stage: str, **kw): ...
    def component(self, *, index: int, root: int, size: int): ...
    def analysis_end(self, *, components: int, oversized: int, ms: float): ...


class NoopHooks:
    def load_start(self, **_):
        pass

    def pass_start(self, **_):
        pass

    def pass_end(self, **_):
        pass

    def load_end(self, **_):
        pass

    def error(self, *_, **__):
        pass

    def component(self, **_):
        pass

    def analysis_end(self, **_):
        pass
