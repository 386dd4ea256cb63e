"""Helpers for reshaping password-manager exports."""
from .normalize import ALLOWED_ITEM_TYPES, normalize_document
from .totp import extract_totps, to_otpauth_uri

__all__ = ["ALLOWED_ITEM_TYPES", "normalize_document", "extract_totps", "to_otpauth_uri"]
