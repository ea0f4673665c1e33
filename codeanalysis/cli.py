"""CLI entrypoints for codeanalysis commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .action import action
from .capabilities import (
    AstCallback,
    AstCfg,
    CapabilityError,
    CommentCallback,
    CommentCfg,
    FunctionCallback,
    FunctionCfg,
    MetricsCallback,
    MetricsCfg,
    comment_dialect,
)
from .config import ConfigError, load_config
from .guess import guess_language
from .logging import configure_logging, get_logger
from .models import INVALID_LANGUAGE

logger = get_logger("cli")

CAPABILITIES = ("ast", "comment", "metrics", "function")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeanalysis",
        description="Analyse source code: syntax trees, comments, metrics and functions.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument(
        "--config",
        default=None,
        help="Path to .codeanalysis.yml or its directory (defaults to current directory).",
    )
    serve_parser.add_argument("--host", default=None, help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")
    serve_parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=None,
        help="Number of analysis worker threads.",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Run one analysis on a local file and print the result.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument("capability", choices=CAPABILITIES)
    analyze_parser.add_argument("path", help="Source file to analyse.")
    analyze_parser.add_argument(
        "--comment",
        action="store_true",
        help="Keep comment nodes in the syntax tree (ast only).",
    )
    analyze_parser.add_argument(
        "--span",
        action="store_true",
        help="Include source spans in the syntax tree (ast only).",
    )
    analyze_parser.add_argument(
        "--unit",
        action="store_true",
        help="Report only the compilation unit (metrics only).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codeanalysis commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        _serve(parser, args)
    elif args.command == "analyze":
        configure_logging(verbose=bool(args.verbose))
        _analyze(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _serve(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    config_path = Path(args.config) if args.config else Path.cwd()
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(
        verbose=bool(args.verbose) or config.logging.verbose,
        log_file=config.logging.file,
    )
    if args.port is not None and args.port <= 0:
        parser.exit(1, "--port must be a positive integer\n")
    if args.workers is not None and args.workers <= 0:
        parser.exit(1, "--workers must be a positive integer\n")
    server = config.server.with_overrides(
        host=args.host, port=args.port, workers=args.workers
    )

    from .service import run_service

    run_service(server)


def _analyze(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    path = Path(args.path)
    try:
        code = path.read_bytes()
    except OSError as exc:
        parser.exit(1, f"{exc}\n")

    lang, name = guess_language(code, path)
    if lang is None:
        logger.debug("No supported language for %s", path)
        parser.exit(1, f"error: {INVALID_LANGUAGE}\n")

    source_id = str(path)
    try:
        if args.capability == "comment":
            result = action(
                CommentCallback, comment_dialect(lang), code, path, None, CommentCfg(id=source_id)
            )
            sys.stdout.flush()
            sys.stdout.buffer.write(result.code if result.code is not None else code)
            sys.stdout.buffer.flush()
            return
        output: Any
        if args.capability == "ast":
            cfg = AstCfg(id=source_id, comment=args.comment, span=args.span)
            output = action(AstCallback, lang, code, path, None, cfg)
        elif args.capability == "metrics":
            metrics_cfg = MetricsCfg(id=source_id, path=path, unit=args.unit, language=name)
            output = action(MetricsCallback, lang, code, path, None, metrics_cfg)
        else:
            output = action(FunctionCallback, lang, code, path, None, FunctionCfg(id=source_id))
    except CapabilityError as exc:
        parser.exit(1, f"codeanalysis analyze failed: {exc}\nRun with --verbose for more details.\n")

    print(json.dumps(output.to_dict(), indent=2))


if __name__ == "__main__":
    main(sys.argv[1:])
