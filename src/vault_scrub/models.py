"""Shared value types used across vault-scrub."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


@dataclass(slots=True)
class RedactedEntry:
    path: str
    value: str


@dataclass(slots=True)
class TotpEntry:
    issuer: str
    account: str
    secret: str
    notes: Optional[str] = None
