"""Detection of caret positions where a feature id can be inserted."""

from __future__ import annotations

import re

from .model import Insertion, InsertionTrigger, Position

_HOT_PHRASE = "baseline/"
_ATTRIBUTE_PREFIX_RE = re.compile(r"<baseline-status[^>]*featureId=['\"]?$", re.IGNORECASE)


def find_insertion_trigger(line_text: str, position: Position) -> InsertionTrigger | None:
    """Return a trigger when the text right before the caret asks for a feature id."""
    prefix = line_text[: position.character]
    if prefix.lower().endswith(_HOT_PHRASE):
        return InsertionTrigger(position.line, position.character, "hot-phrase")
    if _ATTRIBUTE_PREFIX_RE.search(prefix):
        return InsertionTrigger(position.line, position.character, "attribute")
    return None


def insertion_for(trigger: InsertionTrigger, feature_id: str) -> Insertion:
    """Describe the edit that inserts the chosen id at the trigger position."""
    return Insertion(line=trigger.line, column=trigger.column, text=feature_id)
