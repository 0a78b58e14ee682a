# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol

log = logging.getLogger("netfrag.recorder")


class Sink(Protocol):
    def write(self, report) -> None: ...


class JsonlSink:
    def __init__(self, fp=None):
        self.fp = fp or sys.stdout

    def write(self, report) -> None:
        self.fp.write(json.dumps(asdict(report)) + "\n")


class MemorySink:
    def __init__(self):
        self.reports: list = []

    def write(self, report) -> None:
        self.reports.append(report)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, report):
        for s in self.sinks:
            try:
                s.write(report)
            except OSError:
                # a broken sink must not abort the analysis
                log.exception("sink %s failed", type(s).__name__)
