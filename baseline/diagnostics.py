"""Document validation against the feature registry."""

from __future__ import annotations

import logging

from .constants import UNRECOGNIZED_FEATURE_MESSAGE
from .matcher import find_first_reference
from .model import Diagnostic, TextDocument
from .registry import FeatureRegistry

LOGGER = logging.getLogger(__name__)


def validate(document: TextDocument, registry: FeatureRegistry) -> list[Diagnostic]:
    """Flag every referenced feature id that the registry does not know."""
    if not registry.is_loaded:
        return []

    diagnostics: list[Diagnostic] = []
    for line_number, line_text in enumerate(document.lines):
        reference = find_first_reference(line_text, line_number)
        if reference is None or registry.has(reference.feature_id):
            continue
        diagnostics.append(
            Diagnostic(
                range=reference.range,
                message=UNRECOGNIZED_FEATURE_MESSAGE.format(feature_id=reference.feature_id),
            )
        )
    return diagnostics


class DiagnosticCollection:
    """Diagnostics sink keyed by document uri.

    Each publish replaces the previous set for that document. Results computed
    from an older document version than the one already published are dropped.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[int, list[Diagnostic]]] = {}

    def publish(self, document: TextDocument, diagnostics: list[Diagnostic]) -> bool:
        current = self._entries.get(document.uri)
        if current is not None and current[0] > document.version:
            LOGGER.debug(
                "Dropping stale diagnostics for %s (v%d < v%d)",
                document.uri,
                document.version,
                current[0],
            )
            return False
        self._entries[document.uri] = (document.version, list(diagnostics))
        return True

    def get(self, uri: str) -> list[Diagnostic]:
        entry = self._entries.get(uri)
        return list(entry[1]) if entry is not None else []

    def delete(self, uri: str) -> None:
        self._entries.pop(uri, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, uri: object) -> bool:
        return uri in self._entries


class DocumentValidator:
    """Re-validates documents on open, change, save and registry reload."""

    def __init__(
        self, registry: FeatureRegistry, collection: DiagnosticCollection | None = None
    ) -> None:
        self.registry = registry
        self.collection = collection if collection is not None else DiagnosticCollection()
        self._documents: dict[str, TextDocument] = {}

    def _run(self, document: TextDocument) -> list[Diagnostic]:
        latest = self._documents.get(document.uri)
        if latest is None or latest.version <= document.version:
            self._documents[document.uri] = document
        else:
            # A newer snapshot already arrived; validate that one instead.
            document = latest
        diagnostics = validate(document, self.registry)
        self.collection.publish(document, diagnostics)
        return diagnostics

    def did_open(self, document: TextDocument) -> list[Diagnostic]:
        return self._run(document)

    def did_change(self, document: TextDocument) -> list[Diagnostic]:
        return self._run(document)

    def did_save(self, document: TextDocument) -> list[Diagnostic]:
        return self._run(document)

    def did_close(self, uri: str) -> None:
        self._documents.pop(uri, None)
        self.collection.delete(uri)

    def reload(self, registry: FeatureRegistry) -> None:
        """Swap in a freshly loaded registry and re-validate all open documents."""
        self.registry = registry
        self.collection.clear()
        for document in list(self._documents.values()):
            self.collection.publish(document, validate(document, registry))
