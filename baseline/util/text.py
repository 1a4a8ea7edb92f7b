"""Text utility helpers."""

from __future__ import annotations

import os
import re

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def normalize_whitespace(value: str) -> str:
    """Collapse repeated whitespace and trim ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def split_lines(value: str) -> list[str]:
    """Split on CRLF, CR or LF only, the line breaks editors count."""
    return _LINE_BREAK_RE.split(value)


def ellipsize(value: str, width: int) -> str:
    """Shorten long strings while preserving suffix visibility."""
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 1:
        return "…"
    return f"{value[: width - 1]}…"


def query_tokens(query: str) -> list[str]:
    """Split a search query into lowercase tokens."""
    return [token for token in normalize_whitespace(query).lower().split(" ") if token]


def escape_leading_angle(value: str) -> str:
    """Escape a leading '<' so markdown renderers do not treat it as a tag."""
    if value.startswith("<"):
        return f"&lt;{value[1:]}"
    return value


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get("PYBASELINE_DEBUG", "").strip() == "1"
