"""Redaction package exports."""
from .classify import is_sensitive_key, is_sensitive_value
from .engine import RedactionEngine, redact
from .preview import preview_redactions

__all__ = [
    "RedactionEngine",
    "redact",
    "is_sensitive_key",
    "is_sensitive_value",
    "preview_redactions",
]
