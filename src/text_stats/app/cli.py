from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from broker_kernel.observability.domain.logging import LogMessage
from text_stats.adapters.summary_sink import StdoutSummarySink
from text_stats.adapters.text_source import FileTextSource
from text_stats.config.loader import load_config
from text_stats.usecases.config_models import AppConfig
from text_stats.usecases.pipeline import run_pipeline
from text_stats.usecases.wiring import build_broker_topology, build_log_sink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="text-stats", description="Word and character statistics for a text file")
    parser.add_argument("path", nargs="?", help="Input text file (defaults to input.default_path)")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--topology", choices=["broker", "pipeline"], help="Override topology")
    parser.add_argument("--log-format", choices=["text", "json"], help="Override status output format")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], help="Override log level")
    parser.add_argument("--log-path", help="Also append status records as JSONL to this file")
    parser.add_argument("--quiet", action="store_true", help="Only report errors on the status stream")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config.
    if args.topology is not None:
        config.topology = args.topology
    if args.log_format is not None:
        config.logging.format = args.log_format
    if args.log_level is not None:
        config.logging.level = args.log_level
    if args.log_path is not None:
        config.logging.path = args.log_path
    if args.quiet:
        config.logging.level = "error"


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config = load_config(Path(args.config) if args.config else None)
    apply_cli_overrides(config, args)

    locator = args.path or config.input.default_path
    source = FileTextSource(encoding=config.input.encoding)
    summary_sink = StdoutSummarySink()
    log_sink = build_log_sink(config.logging)
    try:
        if config.topology == "pipeline":
            log_sink.emit(LogMessage(level="info", message="Starting pipeline..."))
            run_pipeline(locator, config=config, source=source, summary_sink=summary_sink, log_sink=log_sink)
        else:
            topology = build_broker_topology(
                config=config, source=source, summary_sink=summary_sink, log_sink=log_sink
            )
            log_sink.emit(LogMessage(level="info", message="Starting event-driven processing..."))
            topology.reader.read(locator)
    finally:
        log_sink.close()
    return 0
