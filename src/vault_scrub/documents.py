"""Reading and writing JSON documents at the command-line boundary."""
from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from .exceptions import InputError, OutputError
from .models import JSONValue


def parse_document(text: str, *, source: str = "<input>") -> JSONValue:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {source}: {exc}") from exc
    except RecursionError as exc:
        raise InputError(f"JSON in {source} is nested too deeply") from exc


def read_document(path: Path) -> JSONValue:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InputError(f"Input file does not exist: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Error reading file {path}: {exc}") from exc
    return parse_document(text, source=str(path))


def read_stream(stream: TextIO) -> JSONValue:
    return parse_document(stream.read(), source="stdin")


def dumps_document(document: JSONValue) -> str:
    return json.dumps(document, ensure_ascii=False, indent=2)


def write_text(path: Path, payload: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Error writing file {path}: {exc}") from exc


def write_document(path: Path, document: JSONValue) -> None:
    # Serialise before touching the target so a failure leaves no partial file.
    write_text(path, dumps_document(document))



def default_output_path(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}.redacted{input_path.suffix}")


__all__ = [
    "default_output_path",
    "dumps_document",
    "parse_document",
    "read_document",
    "read_stream",
    "write_document",
    "write_text",
]
