"""Typer-based command line interface for vault-scrub."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import structlog
import typer

from ..config import AppConfig, load_config
from ..documents import (
    default_output_path,
    read_document,
    read_stream,
    write_document,
    write_text,
)
from ..exceptions import ConfigError, InputError, OutputError, ScrubError
from ..export.normalize import normalize_document
from ..export.totp import extract_totps, render_uris
from ..logging import configure_logging
from ..models import JSONValue
from ..redactor import RedactionEngine
from ..rules import RuleSet, load_rules

app = typer.Typer(help="Redact sensitive data from password-manager JSON exports")
logger = structlog.get_logger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    settings: Optional[Path] = typer.Option(None, "--settings", metavar="PATH", help="Settings file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    failure: Optional[ConfigError] = None
    try:
        ctx.obj = load_config(settings)
    except ConfigError as exc:
        failure = exc
        ctx.obj = AppConfig()
    configure_logging(log_level or ctx.obj.logging.normalized_level())
    if failure is not None:
        logger.error("settings.load_failed", error=str(failure))


def _effective_rules(settings: AppConfig, config: Optional[Path], preserve_keys: bool) -> RuleSet:
    return load_rules(
        config or settings.redaction.rules_file,
        preserve_keys=preserve_keys or settings.redaction.preserve_keys,
    )


def _fail(exc: ScrubError) -> typer.Exit:
    logger.error("command.failed", error=str(exc))
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def _load(path: Path) -> JSONValue:
    try:
        return read_document(path)
    except InputError as exc:
        raise _fail(exc) from exc


def _save(writer: Callable[[Path, Any], None], path: Path, payload: Any) -> None:
    try:
        writer(path, payload)
    except OutputError as exc:
        raise _fail(exc) from exc


def _redact(engine: RedactionEngine, document: JSONValue) -> JSONValue:
    try:
        return engine.redact(document)
    except RecursionError as exc:
        raise _fail(InputError("Document is nested too deeply to redact")) from exc


@app.command()
def redact(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., metavar="INPUT", help="JSON export to redact"),
    output: Optional[Path] = typer.Argument(
        None, metavar="[OUTPUT]", help="Defaults to <input>.redacted.json beside the input"
    ),
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH", help="Rule overrides (JSON or YAML)"),
    preserve_keys: bool = typer.Option(
        False, "--preserve-keys", help="Keep sensitive keys and replace only their values"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be redacted without writing"),
) -> None:
    settings: AppConfig = ctx.obj
    rule_set = _effective_rules(settings, config, preserve_keys)
    output_path = output or default_output_path(input_path)
    engine = RedactionEngine(rule_set)
    document = _load(input_path)

    if dry_run:
        typer.echo("DRY RUN MODE - No files will be modified")
        typer.echo(f"Input file: {input_path}")
        typer.echo(f"Output file would be: {output_path}")
        typer.echo(f"Configuration: {config or settings.redaction.rules_file or 'default'}")
        typer.echo(f"Preserve keys: {str(rule_set.preserve_keys).lower()}")
        typer.echo("")
        typer.echo("Sample of what would be redacted:")
        try:
            entries = engine.preview(document)
        except RecursionError as exc:
            raise _fail(InputError("Document is nested too deeply to redact")) from exc
        for entry in entries:
            typer.echo(f"  {entry.path}: {entry.value}")
        return

    redacted = _redact(engine, document)
    _save(write_document, output_path, redacted)
    logger.info("redact.done", input=str(input_path), output=str(output_path))
    typer.echo(f"Redacted data written to {output_path}")


@app.command()
def rules(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH", help="Rule overrides (JSON or YAML)"),
    preserve_keys: bool = typer.Option(False, "--preserve-keys"),
) -> None:
    """Print the effective rule set."""
    typer.echo(json.dumps(_effective_rules(ctx.obj, config, preserve_keys).describe(), indent=2))


@app.command()
def totp(
    input_path: Path = typer.Argument(Path("export.data"), metavar="INPUT"),
    output: Path = typer.Option(Path("output.txt"), "-o", "--output", help="Write otpauth URIs here"),
) -> None:
    """Extract one-time-password seeds as otpauth:// URIs."""
    entries = extract_totps(_load(input_path))
    if not entries:
        typer.echo("No TOTP entries found in the export data.")
        return
    _save(write_text, output, render_uris(entries))
    typer.echo(f"Wrote {len(entries)} TOTP URIs to {output}")


@app.command()
def normalize(
    input_path: Optional[Path] = typer.Argument(None, metavar="[INPUT]", help="Reads stdin when omitted"),
    output: Path = typer.Option(Path("output.json"), "-o", "--output"),
) -> None:
    """Keep only login, note and identity items and blank their TOTP fields."""
    if input_path is None:
        try:
            document = read_stream(sys.stdin)
        except InputError as exc:
            raise _fail(exc) from exc
    else:
        document = _load(input_path)
    _save(write_document, output, normalize_document(document))
    typer.echo(f"Normalized data successfully written to {output}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(f"vault-scrub {__version__}")


if __name__ == "__main__":  # pragma: no cover
    app()
