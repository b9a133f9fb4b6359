from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path


def _configure_cli_logging(level: int = logging.INFO) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="borgmoea", description="Run the Borg MOEA from a YAML/JSON run file.")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Optimize the problem described in a run file")
    run.add_argument("config", type=Path, help="YAML or JSON run file")
    run.add_argument("--seed", type=int, default=None, help="Override the run file seed")
    run.add_argument("--output", type=Path, default=None, help="Override the output directory")
    run.add_argument("--trace-interval", type=int, default=None, help="Log the optimizer state every N steps")
    verbosity = run.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")

    sub.add_parser("problems", help="List the named benchmark problems")
    return parser


def _run(args: argparse.Namespace) -> int:
    from borgmoea.experiment.config_loader import load_config, run_spec

    spec = load_config(args.config)
    if args.seed is not None:
        spec["seed"] = args.seed
    if args.output is not None:
        spec["output"] = str(args.output)
    if args.trace_interval is not None:
        spec["trace_interval"] = args.trace_interval
    result = run_spec(spec)
    print(result.summary_text())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.command == "problems":
        from borgmoea.foundation.problem import available_problem_names

        for name in available_problem_names():
            print(name)
        return 0

    level = logging.WARNING if args.quiet else logging.DEBUG if args.verbose else logging.INFO
    _configure_cli_logging(level)
    return _run(args)


if __name__ == "__main__":
    raise SystemExit(main())
