"""Typer application exposing the normalisation pipeline on the command line."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any

import pandas as pd
import typer
from structlog.stdlib import BoundLogger

from penguinetl.config import (
    BatchPolicy,
    DatePolicy,
    LoggingConfig,
    load_config,
    parse_set_overrides,
)
from penguinetl.core.errors import ConfigError, NormalizationError
from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import LogConfig, LogFormat, UnifiedLogger
from penguinetl.io import read_source, split_by_group, write_frame_atomic
from penguinetl.pipeline import BatchReport, normalize_source, run_batch

__all__ = ["app", "run"]

EXIT_OK = 0
EXIT_NORMALIZATION_FAILED = 1
EXIT_USAGE = 2

app = typer.Typer(
    name="penguinetl",
    help="Normalise raw penguin observation tables and combine them across files.",
    add_completion=False,
)


def _configure_logging(config: LoggingConfig, *, verbose: bool) -> BoundLogger:
    level = "DEBUG" if verbose else config.level
    UnifiedLogger.configure(LogConfig(level=level, format=LogFormat(config.format)))
    UnifiedLogger.reset()
    UnifiedLogger.bind(run_id=str(uuid.uuid4()))
    return UnifiedLogger.get(__name__)


def _emit(frame: pd.DataFrame, output: Path | None, *, na_rep: str = "") -> None:
    """Write ``frame`` to ``output`` or, without one, as CSV on stdout."""

    if output is None:
        typer.echo(frame.to_csv(index=False, na_rep=na_rep, lineterminator="\n"), nl=False)
        return
    write_frame_atomic(frame, output, na_rep=na_rep)
    typer.echo(f"Wrote {frame.shape[0]} rows to {output}", err=True)


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=code)


def _report_lines(report: BatchReport) -> list[str]:
    lines: list[str] = []
    for row in report.summary().itertuples(index=False):
        if row.status == "ok":
            lines.append(f"ok      {row.source}  rows={row.rows}")
        else:
            lines.append(f"failed  {row.source}  {row.error_code}: {row.error}")
    return lines


@app.command("normalize")
def normalize_command(
    source: Path = typer.Argument(..., help="Raw CSV file to normalise."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Destination CSV; stdout when omitted."
    ),
    date_policy: DatePolicy = typer.Option(
        DatePolicy.COERCE,
        "--date-policy",
        help="'coerce' leaves an unparseable date's year missing, 'strict' fails.",
    ),
    encoding: str = typer.Option("utf-8", "--encoding", help="Text encoding of the source."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Normalise a single raw table into the eight canonical columns."""

    log = _configure_logging(LoggingConfig(), verbose=verbose)
    with UnifiedLogger.stage("cli"):
        log.info(LogEvents.CLI_RUN_START, command="normalize", source=str(source))
        try:
            frame = normalize_source(source, date_policy=date_policy, encoding=encoding)
        except NormalizationError as exc:
            log.error(LogEvents.CLI_RUN_ERROR, code=exc.code, error=str(exc))
            raise _fail(str(exc), EXIT_NORMALIZATION_FAILED) from exc
        _emit(frame, output)
        log.info(LogEvents.CLI_RUN_FINISH, rows=int(frame.shape[0]))


@app.command("combine")
def combine_command(
    sources: list[Path] | None = typer.Argument(
        None, help="Source files, processed in the given order."
    ),
    directory: Path | None = typer.Option(
        None, "--directory", "-d", help="Scan this directory instead of listing files."
    ),
    pattern: str | None = typer.Option(
        None, "--pattern", "-p", help="Glob used with --directory (default *.csv)."
    ),
    policy: BatchPolicy | None = typer.Option(
        None, "--policy", help="fail_fast aborts on the first failure; fault_tolerant reports each source."
    ),
    workers: int | None = typer.Option(
        None, "--workers", min=1, help="Threads for the fault_tolerant policy."
    ),
    date_policy: DatePolicy | None = typer.Option(None, "--date-policy"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML configuration file."),
    set_overrides: list[str] | None = typer.Option(
        None, "--set", "-s", help="Override configuration values (KEY=VALUE)."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Destination CSV; stdout when omitted."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Normalise many sources and combine them into one table."""

    try:
        overrides: dict[str, Any] = dict(parse_set_overrides(set_overrides or []))
    except ConfigError as exc:
        raise _fail(str(exc), EXIT_USAGE) from exc
    if sources:
        overrides["sources.paths"] = [str(path) for path in sources]
        overrides["sources.directory"] = None
    if directory is not None:
        overrides["sources.directory"] = str(directory)
        overrides["sources.paths"] = []
    if pattern is not None:
        overrides["sources.pattern"] = pattern
    if policy is not None:
        overrides["policy"] = policy.value
    if workers is not None:
        overrides["workers"] = workers
    if date_policy is not None:
        overrides["normalization.date_policy"] = date_policy.value

    try:
        pipeline_config = load_config(config, cli_overrides=overrides)
    except ConfigError as exc:
        raise _fail(str(exc), EXIT_USAGE) from exc

    log = _configure_logging(pipeline_config.logging, verbose=verbose)
    destination = output or pipeline_config.output.path
    with UnifiedLogger.stage("cli"):
        log.info(LogEvents.CLI_RUN_START, command="combine", policy=pipeline_config.policy.value)
        try:
            result = run_batch(pipeline_config)
        except ConfigError as exc:
            raise _fail(str(exc), EXIT_USAGE) from exc
        except ValueError as exc:
            raise _fail(str(exc), EXIT_USAGE) from exc
        except NormalizationError as exc:
            log.error(LogEvents.CLI_RUN_ERROR, code=exc.code, error=str(exc))
            raise _fail(f"batch aborted: {exc}", EXIT_NORMALIZATION_FAILED) from exc

        exit_code = EXIT_OK
        if isinstance(result, BatchReport):
            for line in _report_lines(result):
                typer.echo(line, err=True)
            frame = result.combined()
            if not result.ok:
                exit_code = EXIT_NORMALIZATION_FAILED
        else:
            frame = result

        _emit(frame, destination, na_rep=pipeline_config.output.na_rep)
        log.info(LogEvents.CLI_RUN_FINISH, rows=int(frame.shape[0]), exit_code=exit_code)
    if exit_code != EXIT_OK:
        raise typer.Exit(code=exit_code)


@app.command("split")
def split_command(
    input_file: Path = typer.Argument(..., help="Raw CSV file holding every group."),
    output_dir: Path = typer.Option(..., "--output-dir", "-o", help="Directory for per-group files."),
    by: str = typer.Option("island", "--by", "-b", help="Grouping column (raw or canonical name)."),
    encoding: str = typer.Option("utf-8", "--encoding"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Write one raw CSV per distinct value of a grouping column."""

    log = _configure_logging(LoggingConfig(), verbose=verbose)
    with UnifiedLogger.stage("cli"):
        log.info(LogEvents.CLI_RUN_START, command="split", source=str(input_file), by=by)
        try:
            frame = read_source(input_file, encoding=encoding)
        except NormalizationError as exc:
            raise _fail(str(exc), EXIT_NORMALIZATION_FAILED) from exc
        try:
            written = split_by_group(frame, by, output_dir, encoding=encoding)
        except KeyError as exc:
            raise _fail(str(exc.args[0]), EXIT_USAGE) from exc
        except ValueError as exc:
            raise _fail(str(exc), EXIT_USAGE) from exc
        for group, path in written.items():
            typer.echo(f"{group}\t{path}")
        log.info(LogEvents.CLI_RUN_FINISH, groups=len(written))


def run() -> None:
    """Console-script entry point."""

    app()
