"""Extraction of one-time-password seeds from 1Password exports.

The export nests entries as
``accounts[].vaults[].items[].details.sections[].fields[]``; a field titled
``one-time password`` carries either a raw secret or an ``otpauth://`` URI.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import parse_qs, quote, unquote, urlsplit

import regex
import structlog

from ..models import TotpEntry

logger = structlog.get_logger(__name__)

OTP_FIELD_TITLE = "one-time password"
DEFAULT_ISSUER = "Unknown"
DEFAULT_ACCOUNT = "user"

_EMAIL_PATTERN = regex.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_URI_COMPONENT_SAFE = "!'()*"
_DEFAULT_PARAMS = (("algorithm", "SHA1", "Algorithm"), ("digits", "6", "Digits"), ("period", "30", "Period"))


def _list(container: Any, key: str) -> List[Any]:
    if not isinstance(container, dict):
        return []
    value = container.get(key)
    return value if isinstance(value, list) else []


def _child(container: Any, key: str) -> Dict[str, Any]:
    if not isinstance(container, dict):
        return {}
    value = container.get(key)
    return value if isinstance(value, dict) else {}


def _iter_items(document: Any) -> Iterator[Dict[str, Any]]:
    for account in _list(document, "accounts"):
        for vault in _list(account, "vaults"):
            for item in _list(vault, "items"):
                if isinstance(item, dict):
                    yield item


def _otp_value(field: Dict[str, Any]) -> Optional[str]:
    value = field.get("value")
    if isinstance(value, dict):
        value = value.get("totp")
    if isinstance(value, str) and value:
        return value
    return None


def _find_account(item: Dict[str, Any]) -> str:
    match = _EMAIL_PATTERN.search(json.dumps(item, ensure_ascii=False))
    return match.group() if match else DEFAULT_ACCOUNT


def _entry_from_uri(uri: str, issuer: str, account: str) -> TotpEntry:
    try:
        parts = urlsplit(uri)
    except ValueError as exc:
        logger.warning("totp.uri_unparseable", issuer=issuer, error=str(exc))
        return TotpEntry(issuer=issuer, account=account, secret=uri)
    params = {key: values[0] for key, values in parse_qs(parts.query).items() if values}
    label = unquote(parts.path.lstrip("/"))
    label_issuer, _, label_account = label.rpartition(":")

    if not issuer or issuer == DEFAULT_ISSUER:
        issuer = params.get("issuer") or label_issuer or DEFAULT_ISSUER
    if not account or account == DEFAULT_ACCOUNT:
        account = label_account or DEFAULT_ISSUER

    notes = [
        f"{title}: {params[name]}"
        for name, default, title in _DEFAULT_PARAMS
        if params.get(name, default) != default
    ]
    return TotpEntry(
        issuer=issuer,
        account=account,
        secret=params.get("secret") or uri,
        notes=", ".join(notes) or None,
    )


def extract_totps(document: Any) -> List[TotpEntry]:
    entries: List[TotpEntry] = []
    for item in _iter_items(document):
        issuer = _child(item, "overview").get("title") or DEFAULT_ISSUER
        for section in _list(_child(item, "details"), "sections"):
            for field in _list(section, "fields"):
                if not isinstance(field, dict) or field.get("title") != OTP_FIELD_TITLE:
                    continue
                value = _otp_value(field)
                if value is None:
                    continue
                account = _find_account(item)
                if value.startswith("otpauth://"):
                    entries.append(_entry_from_uri(value, issuer, account))
                else:
                    entries.append(TotpEntry(issuer=issuer, account=account, secret=value))
                logger.debug("totp.found", issuer=issuer)
    logger.info("totp.extracted", count=len(entries))
    return entries


def to_otpauth_uri(entry: TotpEntry) -> str:
    issuer = quote(entry.issuer, safe=_URI_COMPONENT_SAFE)
    account = quote(entry.account, safe=_URI_COMPONENT_SAFE)
    return f"otpauth://totp/{issuer}:{account}?secret={entry.secret}&issuer={issuer}"


def render_uris(entries: List[TotpEntry]) -> str:
    return "\n".join(to_otpauth_uri(entry) for entry in entries)


__all__ = ["extract_totps", "render_uris", "to_otpauth_uri"]
