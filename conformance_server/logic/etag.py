"""ETag computation helpers for widgets.

Provides the version token stored alongside each widget and the
comparison used for If-Match / If-None-Match preconditions.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Optional

__all__ = [
    "compute_widget_etag",
    "normalize_etag",
    "etag_matches",
]

logger = logging.getLogger(__name__)


def compute_widget_etag(widget: dict[str, Any]) -> str:
    """Compute a strong ETag for a widget.

    Token: canonical JSON (sorted keys, compact separators) -> SHA1 -> "…".
    Deterministic across identical widget state.
    """
    token = json.dumps(widget, sort_keys=True, separators=(",", ":"), default=str).encode("utf-8")
    return f'"{hashlib.sha1(token).hexdigest()}"'


def _split_tags(value: str) -> list[str]:
    """Split a header value on commas that are not inside quotes."""
    in_quote = False
    buf: list[str] = []
    parts: list[str] = []
    for ch in value:
        if ch == '"':
            in_quote = not in_quote
            buf.append(ch)
        elif ch == "," and not in_quote:
            parts.append("".join(buf).strip())
            buf.clear()
        else:
            buf.append(ch)
    parts.append("".join(buf).strip())
    return [p for p in parts if p]


def normalize_etag(value: Optional[str]) -> str:
    """Return the opaque tag without weak prefix or quotes ("" when empty).

    Unquoted tags are accepted as-is so hand-written fixtures like
    ``If-Match: abc`` still compare against ``"abc"``.
    """
    if value is None:
        return ""
    t = value.strip()
    if len(t) >= 2 and t[:2].upper() == "W/":
        t = t[2:].lstrip()
    if len(t) >= 2 and t.startswith('"') and t.endswith('"'):
        t = t[1:-1]
    return t


def etag_matches(current: Optional[str], header: Optional[str]) -> bool:
    """Return True when any entity-tag in ``header`` matches ``current``.

    Weak validators compare equal to strong ones; ``*`` matches any
    existing representation. A missing or blank header never matches.
    """
    if header is None or not header.strip():
        return False
    if header.strip() == "*":
        return current is not None
    current_norm = normalize_etag(current)
    if not current_norm:
        return False
    matched = any(normalize_etag(tag) == current_norm for tag in _split_tags(header))
    logger.debug("etag.compare", extra={"current_norm": current_norm, "matched": matched})
    return matched
