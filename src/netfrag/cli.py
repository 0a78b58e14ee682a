# netfrag/cli.py
"""
Command line entry point.

    netfrag data/malta-latest.osm.pbf --model edge --filter-key highway

Reports (JSON lines) and logs go to stdout. Exit status is non-zero when the
graph could not be loaded; the code tells which kind of failure it was.
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from netfrag.app.build import App, build
from netfrag.config.models import RunModel
from netfrag.domain.errors import DanglingReferenceError, DecodeError, LoadError, RewindError
from netfrag.io.pipeline_logging import _default_json_logger

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_DECODE = 3
EXIT_REWIND = 4
EXIT_DANGLING = 5

_EXIT_BY_ERROR = {
    DecodeError: EXIT_DECODE,
    RewindError: EXIT_REWIND,
    DanglingReferenceError: EXIT_DANGLING,
}


def _guess_format(path: str) -> str:
    return "jsonl" if path.endswith((".jsonl", ".ndjson")) else "pbf"


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="netfrag", description="Count connected components of a map network extract."
    )
    ap.add_argument("path", nargs="?", help="Extract to read (.osm.pbf or .jsonl).")
    ap.add_argument("--config", help="JSON run configuration; flags override it.")
    ap.add_argument("--format", choices=["jsonl", "pbf"], help="Default: from file extension.")
    ap.add_argument("--model", choices=["way", "edge"], help="Adjacency model (default: way).")
    ap.add_argument("--filter-key", help="Only keep sequences carrying this tag key.")
    ap.add_argument(
        "--filter-value",
        action="append",
        default=None,
        help="Restrict --filter-key to these values (repeatable).",
    )
    ap.add_argument("--threshold", type=int, help="Oversized component threshold (default 500).")
    ap.add_argument("--root-order", choices=["unordered", "sorted", "shuffled"])
    ap.add_argument("--seed", type=int)
    ap.add_argument("--run-id")
    ap.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)
    if args.filter_value and not args.filter_key:
        ap.error("--filter-value needs --filter-key")
    return args


def config_from_args(args: argparse.Namespace) -> dict:
    cfg: dict = {}
    if args.config:
        cfg = json.loads(Path(args.config).read_text(encoding="utf-8"))
        if not isinstance(cfg, dict):
            raise ValueError(f"{args.config}: configuration must be a JSON object")

    if args.path:
        cfg["source"] = {"kind": args.format or _guess_format(args.path), "path": args.path}
    if args.model:
        cfg["adjacency"] = {"kind": args.model}
    if args.filter_key:
        cfg["filter"] = {"kind": "tag", "key": args.filter_key, "values": args.filter_value}
    analysis = cfg.setdefault("analysis", {})
    if args.threshold is not None:
        analysis["threshold"] = args.threshold
    if args.root_order:
        analysis["root_order"] = args.root_order
    if args.seed is not None:
        analysis["seed"] = args.seed
    if args.run_id:
        cfg["run_id"] = args.run_id
    if args.log_level:
        cfg.setdefault("log", {})["level"] = args.log_level
    return cfg


def run_app(app: App) -> int:
    """Load and analyze; map a failed load to the exit code of its kind."""
    try:
        app.run()
    except LoadError as exc:
        # already logged by the pipeline hooks with its stage
        return _EXIT_BY_ERROR.get(type(exc), EXIT_USAGE)
    finally:
        close = getattr(app.source, "close", None)
        if close is not None:
            close()
    return EXIT_OK


def main(argv=None) -> int:
    args = parse_args(argv)
    log = _default_json_logger()

    try:
        model = RunModel.model_validate(config_from_args(args))
        if model.source is None:
            raise ValueError("no extract given: pass PATH or a config with 'source'")
        app = build(model)
    except (ValidationError, ValueError, OSError) as exc:
        log.error("invalid configuration: %s", exc)
        return EXIT_USAGE

    return run_app(app)


if __name__ == "__main__":
    sys.exit(main())
