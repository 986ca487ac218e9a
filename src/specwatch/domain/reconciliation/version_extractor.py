"""Locate the ``version`` field of an API specification without parsing it.

The scanner understands just enough of two textual shapes:

* flow style (JSON and friends): ``"version": "1.2.3",`` anywhere on a line;
* block style (YAML): ``version: 1.2.3`` indented under a top-level ``info:``.

It makes one forward pass over the lines and the first match wins. Anything
more elaborate (anchors, multi-line scalars, nested flow mappings spanning
lines) is not supported.
"""

from __future__ import annotations

import re

_FLOW_VERSION = re.compile(
    r"""["']version["']\s*:\s*(?P<value>"[^"]*"|'[^']*'|[^,}\]\s{\[][^,}\]]*)"""
)
_BLOCK_VERSION = re.compile(r"^version\s*:(?P<value>.*)$")


def _unquote(value: str) -> str:
    value = value.strip().rstrip(",").strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]
    return value.strip()


def _is_indented(line: str) -> bool:
    return line[:1] in {" ", "\t"}


def _is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def extract_version(text: str) -> str | None:
    """Return the embedded version of a specification, or ``None`` if absent."""

    in_info = False
    info_seen = False

    for line in text.splitlines():
        flow = _FLOW_VERSION.search(line)
        if flow is not None:
            value = _unquote(flow.group("value"))
            if value:
                return value

        if not in_info:
            if not info_seen and line.rstrip() == "info:":
                in_info = True
                info_seen = True
            continue

        if _is_blank_or_comment(line):
            continue
        if not _is_indented(line):
            in_info = False
            continue

        block = _BLOCK_VERSION.match(line.strip())
        if block is not None:
            value = _unquote(block.group("value"))
            if value:
                return value

    return None


__all__ = ["extract_version"]
