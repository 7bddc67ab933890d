"""Command-line entry point: generate a random tree and print it."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import AppSettings, OutputFormat, build_config, load_settings
from .errors import InvalidConfiguration, UnsupportedFormat
from .formatters import formatters_for, render
from .generator import GenerationResult, generate
from .logging_config import configure_logging
from .validator import log_report, validate_tree

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_CONFIGURATION = 2
EXIT_UNSUPPORTED_FORMAT = 3
EXIT_OUTPUT_ERROR = 4
EXIT_VALIDATION_FAILED = 5


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    defaults = settings.generation
    ap = argparse.ArgumentParser(
        prog="treegen",
        description="Generate a random tree and render it as Mermaid or DOT.",
    )
    ap.add_argument(
        "--deepth", "--depth", dest="depth", type=int, default=None,
        help=f"Tree depth, levels below the root (default: {defaults.depth})",
    )
    ap.add_argument(
        "--width-mean", type=float, default=None,
        help=f"Target nodes per level, mean (default: {defaults.width_mean})",
    )
    ap.add_argument(
        "--width-std", type=float, default=None,
        help=f"Target nodes per level, std. dev (default: {defaults.width_std})",
    )
    ap.add_argument(
        "--child-mean", type=float, default=None,
        help=f"Children per node, mean (default: {defaults.child_mean})",
    )
    ap.add_argument(
        "--child-dev", type=float, default=None,
        help=f"Children per node, std. dev (default: {defaults.child_dev})",
    )
    ap.add_argument(
        "--format", default=None,
        help=f"Output grammar: dot, mermaid or both (default: {settings.output.format.value})",
    )
    ap.add_argument(
        "--seed", type=int, default=None,
        help="64-bit RNG seed; a random one is chosen and echoed when omitted",
    )
    ap.add_argument("--name", default=None, help="Display label of the root node")
    ap.add_argument(
        "--output", "-o", type=Path, default=None,
        help="Write to this file instead of stdout (with 'both': PATH.dot and PATH.mmd)",
    )
    ap.add_argument(
        "--validate", action="store_true",
        help="Check the generated tree's invariants and log a summary",
    )
    ap.add_argument(
        "--log-level", default=None,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help=f"Logging level (default: {settings.logging.level})",
    )
    return ap


def _config_params(args: argparse.Namespace, settings: AppSettings) -> Dict[str, Any]:
    params = settings.generation.model_dump()
    for key in ("depth", "width_mean", "width_std", "child_mean", "child_dev", "seed", "name"):
        value = getattr(args, key)
        if value is not None:
            params[key] = value
    return params


def write_output(result: GenerationResult, fmt: OutputFormat, output: Optional[Path]) -> List[Path]:
    """
    Emit the rendered tree. Returns the files written (empty for stdout).

    Raises OSError when a file cannot be written; files already written by
    this call are removed before the error propagates.
    """
    if output is None:
        sys.stdout.write(render(result.tree, fmt))
        sys.stdout.flush()
        return []

    formatters = formatters_for(fmt)
    if len(formatters) == 1:
        targets = [(output, formatters[0])]
    else:
        targets = [(Path(f"{output}.{f.extension}"), f) for f in formatters]
    documents = [(path, formatter, formatter.render(result.tree)) for path, formatter in targets]

    written: List[Path] = []
    try:
        for path, formatter, text in documents:
            path.write_text(text, encoding="utf-8")
            logger.info("Wrote %s output to %s", formatter.name, path)
            written.append(path)
    except OSError:
        # A failed run leaves no partial set of files behind.
        for path in written:
            path.unlink(missing_ok=True)
        raise
    return written


def _report(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = load_settings()
        args = build_parser(settings).parse_args(argv)
        configure_logging(settings.logging, level=args.log_level)
        fmt = OutputFormat.parse(args.format if args.format is not None else settings.output.format)
        config = build_config(**_config_params(args, settings))
    except UnsupportedFormat as exc:
        _report(str(exc))
        return EXIT_UNSUPPORTED_FORMAT
    except InvalidConfiguration as exc:
        _report(str(exc))
        return EXIT_INVALID_CONFIGURATION

    result = generate(config)
    if result.seed_was_derived:
        print(f"seed: {result.seed}", file=sys.stderr)

    if args.validate:
        report = validate_tree(result.tree, config)
        log_report(report)
        if not report.ok:
            _report("generated tree failed validation")
            return EXIT_VALIDATION_FAILED

    try:
        write_output(result, fmt, args.output)
    except OSError as exc:
        _report(f"cannot write output: {exc}")
        return EXIT_OUTPUT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
