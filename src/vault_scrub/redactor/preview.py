"""Dry-run listing of the values a redaction pass replaced."""
from __future__ import annotations

from itertools import islice
from typing import Any, Iterator, Optional

from ..models import RedactedEntry


def preview_redactions(
    redacted: Any, marker: str, *, limit: Optional[int] = 10
) -> Iterator[RedactedEntry]:
    """Yield leaf values equal to ``marker`` in an already redacted document.

    Paths are dotted, with array indices as plain segments (``items.0.code``).
    Keys omitted by the redaction pass leave nothing behind and are not listed.
    """

    entries = _walk(redacted, marker, "")
    if limit is None:
        return entries
    return islice(entries, limit)


def _walk(node: Any, marker: str, path: str) -> Iterator[RedactedEntry]:
    if isinstance(node, dict):
        children = ((str(key), value) for key, value in node.items())
    elif isinstance(node, list):
        children = ((str(index), value) for index, value in enumerate(node))
    else:
        return
    for key, value in children:
        current = f"{path}.{key}" if path else key
        if isinstance(value, (dict, list)):
            yield from _walk(value, marker, current)
        elif isinstance(value, str) and value == marker:
            yield RedactedEntry(path=current, value=value)


__all__ = ["preview_redactions"]
