"""Normalization of vault exports down to the item types worth keeping."""
from __future__ import annotations

from typing import Any, Dict, Optional

ALLOWED_ITEM_TYPES = frozenset({"login", "note", "identity"})


def normalize_item(item: Any) -> Optional[Dict[str, Any]]:
    """Return a normalized copy of ``item``, or ``None`` when it should be dropped."""
    if not isinstance(item, dict):
        return None
    data = item.get("data")
    if not isinstance(data, dict) or data.get("type") not in ALLOWED_ITEM_TYPES:
        return None
    normalized_data = {**data, "extraFields": []}
    content = data.get("content")
    if isinstance(content, dict):
        normalized_data["content"] = {**content, "totpUri": ""}
    return {**item, "data": normalized_data}


def normalize_vault(vault: Any) -> Any:
    if not isinstance(vault, dict) or not isinstance(vault.get("items"), list):
        return vault
    items = [normalize_item(item) for item in vault["items"]]
    return {**vault, "items": [item for item in items if item is not None]}


def normalize_document(data: Any) -> Any:
    if not isinstance(data, dict) or not isinstance(data.get("vaults"), dict):
        return data
    vaults = {vault_id: normalize_vault(vault) for vault_id, vault in data["vaults"].items()}
    return {**data, "vaults": vaults}


__all__ = ["ALLOWED_ITEM_TYPES", "normalize_document", "normalize_item", "normalize_vault"]
