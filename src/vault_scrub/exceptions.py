"""Central exception hierarchy"""
from __future__ import annotations


class ScrubError(Exception):
    """Base exception for all vault-scrub failures"""


class ConfigError(ScrubError):
    """Raised when a rule override source or settings file cannot be used"""


class InputError(ScrubError):
    """Raised when the document to process is missing or not valid JSON"""


class OutputError(ScrubError):
    """Raised when a result cannot be written to its destination"""


__all__ = ["ScrubError", "ConfigError", "InputError", "OutputError"]
