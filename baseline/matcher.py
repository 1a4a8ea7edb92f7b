"""Recognition of Baseline feature ids embedded in source text."""

from __future__ import annotations

import re

from .model import Reference, SyntaxKind

# Alternatives are tried at each position left to right, so the leftmost
# reference on the line wins regardless of its syntax.
_REFERENCE_RE = re.compile(
    r"\bbaseline/(?P<phrase>[a-z-]+)\b"
    r"|<baseline-status[^>]*featureId=['\"]?(?P<attribute>[a-z-]+)['\"]?",
    re.IGNORECASE,
)
_GROUP_KINDS: tuple[tuple[str, SyntaxKind], ...] = (
    ("phrase", "hot-phrase"),
    ("attribute", "attribute"),
)
_TODO_RE = re.compile(r"TODO\(baseline/\b([A-Za-z0-9-]+)\b\)")


def find_first_reference(line_text: str, line: int = 0) -> Reference | None:
    """Return the first feature reference on a line, or None.

    Only one reference per line is reported.
    """
    match = _REFERENCE_RE.search(line_text)
    if match is None:
        return None

    for group, kind in _GROUP_KINDS:
        feature_id = match.group(group)
        if feature_id is None:
            continue
        # The two syntaxes have different prefix lengths before the id.
        start = match.start(group)
        return Reference(
            line=line,
            start_column=start,
            end_column=start + len(feature_id),
            feature_id=feature_id.lower(),
            syntax_kind=kind,
        )
    return None


def find_todo_feature_id(line_text: str) -> str | None:
    """Return the feature id of a ``TODO(baseline/<id>)`` marker, verbatim."""
    match = _TODO_RE.search(line_text)
    if match is None:
        return None
    return match.group(1)
