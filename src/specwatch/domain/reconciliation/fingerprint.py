"""Content-addressed change detection."""

from __future__ import annotations

import hashlib


def fingerprint(data: bytes | str) -> str:
    """Return the hex SHA-256 digest of ``data`` (text is hashed as UTF-8)."""

    raw = data.encode("utf-8") if isinstance(data, str) else data
    return hashlib.sha256(raw).hexdigest()


def content_changed(previous: str | None, current: str) -> bool:
    """A missing previous digest counts as a change (first observation)."""

    if not previous:
        return True
    return previous != current
