"""Command-line entry point for job description maintenance."""

import argparse
import signal
import sys
import threading
import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from jobdesc.config.environment import EnvironmentConfig
from jobdesc.config.exceptions import ConfigurationError
from jobdesc.config.loader import load_config, validate_config_file
from jobdesc.config.models import PipelineConfig
from jobdesc.errors import MalformedInputError
from jobdesc.formatting import ensure_text, sanitize, sanitize_and_format
from jobdesc.logging import get_logger
from jobdesc.logging.config import configure_logging
from jobdesc.persistence import PersistenceError, SqlDocumentStore, close_database, init_database
from jobdesc.pipeline import BatchOptions, MaintenancePipeline, MaintenanceRunResult
from jobdesc.reporting import ReportRenderer
from jobdesc.scheduler import MaintenanceJob, SchedulerService
from jobdesc.scoring import ai_score, explain

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PARTIAL = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[PipelineConfig, EnvironmentConfig]:
    """
    Load configuration and resolve logging settings.

    Log level priority is CLI flag, then LOG_LEVEL, then the config file.
    Log format priority is LOG_FORMAT, then the config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    pipeline_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = pipeline_config.logging.level

    if not env_config.log_format:
        env_config.log_format = pipeline_config.logging.format

    return pipeline_config, env_config


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    batch = argparse.ArgumentParser(add_help=False)
    batch.add_argument("--dry-run", action="store_true", help="Report changes without saving them")
    batch.add_argument("--limit", type=int, default=None, help="Maximum documents to fetch")
    batch.add_argument("--source", default=None, help="Only process documents from this source")
    batch.add_argument("--concurrency", type=int, default=None, help="Worker threads")
    batch.add_argument("--quiet", action="store_true", help="Omit before/after excerpts")

    parser = argparse.ArgumentParser(
        prog="jobdesc",
        description="Normalize, score and humanize stored job descriptions",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    format_cmd = commands.add_parser(
        "format", parents=[common, batch], help="Format descriptions that need it"
    )
    format_cmd.add_argument(
        "--force", action="store_true", help="Re-format every description, from its raw copy"
    )

    humanize_cmd = commands.add_parser(
        "humanize", parents=[common, batch], help="Humanize descriptions above the AI-score threshold"
    )
    humanize_cmd.add_argument("--threshold", type=int, default=None, help="AI-score gate (0-100)")

    score_cmd = commands.add_parser(
        "score", parents=[common], help="Print the AI-score distribution of stored descriptions"
    )
    score_cmd.add_argument("--limit", type=int, default=None, help="Maximum documents to score")
    score_cmd.add_argument("--source", default=None, help="Only score documents from this source")
    score_cmd.add_argument("--threshold", type=int, default=None, help="Threshold shown in the report")

    preview_cmd = commands.add_parser(
        "preview", parents=[common], help="Format a file (or stdin) without touching storage"
    )
    preview_cmd.add_argument("path", nargs="?", default="-", help="File to preview, '-' for stdin")
    preview_cmd.add_argument("--force", action="store_true", help="Format even clean text")

    schedule_cmd = commands.add_parser(
        "schedule", parents=[common], help="Run maintenance on the configured interval"
    )
    schedule_cmd.add_argument("--dry-run", action="store_true", help="Report changes without saving them")

    validate_cmd = commands.add_parser("validate-config", help="Validate a configuration file")
    validate_cmd.add_argument("path", type=Path, nargs="?", default=Path("config.yaml"))

    return parser


def build_batch_options(args: argparse.Namespace, config: PipelineConfig) -> BatchOptions:
    """Merge CLI flags over the configured batch defaults."""
    limit = getattr(args, "limit", None)
    threshold = getattr(args, "threshold", None)
    concurrency = getattr(args, "concurrency", None)
    return BatchOptions(
        dry_run=getattr(args, "dry_run", False),
        force=getattr(args, "force", False),
        limit=limit if limit is not None else config.batch.limit,
        threshold=threshold if threshold is not None else config.scoring.threshold,
        source_filter=getattr(args, "source", None) or config.batch.source_filter,
        concurrency=concurrency if concurrency is not None else config.batch.concurrency,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 on success, 1 on configuration or database failure,
        2 when a run finished with failed documents
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.command == "validate-config":
        return EXIT_OK if validate_config_file(args.path) else EXIT_FAILURE

    try:
        pipeline_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )
        options = build_batch_options(args, pipeline_config)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except ValueError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        return EXIT_FAILURE

    renderer = ReportRenderer()

    if args.command == "preview":
        return _preview(args, pipeline_config, renderer)

    try:
        init_database(env_config.database_url)
    except PersistenceError as e:
        print(f"Database Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        pipeline = MaintenancePipeline(SqlDocumentStore(), pipeline_config)
        if args.command == "format":
            return _report(renderer, pipeline.run_formatting(options), args.quiet)
        if args.command == "humanize":
            return _report(renderer, pipeline.run_humanization(options), args.quiet)
        if args.command == "score":
            return _score(options, pipeline_config, renderer)
        return _schedule(pipeline, pipeline_config, options)
    except PersistenceError as e:
        print(f"Database Error: {e}", file=sys.stderr)
        logger.error(f"Database error: {e}", extra={"event": "cli.database_error"})
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return EXIT_OK
    finally:
        close_database()


def _report(renderer: ReportRenderer, result: MaintenanceRunResult, quiet: bool = False) -> int:
    print(renderer.render_run(result, show_excerpts=not quiet), end="")
    return EXIT_PARTIAL if result.had_errors else EXIT_OK


def _score(options: BatchOptions, config: PipelineConfig, renderer: ReportRenderer) -> int:
    documents = SqlDocumentStore().fetch_for_humanization(
        limit=options.limit, source=options.source_filter
    )
    scores = []
    failed = 0
    for document in documents:
        try:
            scores.append(ai_score(document.description, config.scoring.weights))
        except MalformedInputError as e:
            failed += 1
            logger.warning(
                f"Cannot score document {document.id}: {e}",
                extra={"event": "score.document.failed", "document_id": document.id, "reason": e.reason},
            )
    print(renderer.render_scores(scores, options.threshold), end="")
    return EXIT_PARTIAL if failed else EXIT_OK


def _preview(args: argparse.Namespace, config: PipelineConfig, renderer: ReportRenderer) -> int:
    try:
        if args.path == "-":
            raw = sys.stdin.buffer.read()
        else:
            raw = Path(args.path).read_bytes()
        text = ensure_text(raw)
    except OSError as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except MalformedInputError as e:
        print(f"Cannot preview {args.path}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    result = sanitize_and_format(
        text,
        force=args.force,
        words_per_minute=config.formatting.words_per_minute,
        header_max_length=config.formatting.header_max_length,
        max_length=config.formatting.max_length,
        highlight_salary=config.formatting.highlight_salary,
    )
    breakdown = explain(sanitize(text), config.scoring.weights)
    print(
        renderer.render_preview(
            result.formatted_text, result.metadata, breakdown, result.changed, result.sections
        ),
        end="",
    )
    return EXIT_OK


def _schedule(pipeline: MaintenancePipeline, config: PipelineConfig, options: BatchOptions) -> int:
    start_time = time.time()
    schedule = config.schedule
    if schedule.dry_run and not options.dry_run:
        options = replace(options, dry_run=True)

    shutdown_event = threading.Event()
    scheduler_service = SchedulerService(
        job=MaintenanceJob(pipeline, schedule.operations, options),
        interval_seconds=schedule.interval_seconds,
        shutdown_event=shutdown_event,
    )

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, shutting down",
            extra={"event": "service.signal_received", "signal": signum},
        )
        pipeline.cancel()
        scheduler_service.shutdown(wait=False)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    scheduler_service.start()
    logger.info(
        "Scheduler started. Press Ctrl+C to stop",
        extra={
            "event": "service.daemon_mode.started",
            "operations": [operation.value for operation in schedule.operations],
        },
    )

    try:
        shutdown_event.wait()
    except KeyboardInterrupt:
        pipeline.cancel()
        scheduler_service.shutdown(wait=False)

    logger.info(
        "Maintenance scheduler stopped",
        extra={"event": "service.stopping", "uptime_seconds": round(time.time() - start_time, 2)},
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
