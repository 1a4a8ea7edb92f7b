"""Feature and browser registry built from the web-features dataset."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
import logging
from pathlib import Path
from typing import Any

from .constants import DATA_URL, UNKNOWN_RELEASE_DATE
from .exceptions import BaselineError, RegistryLoadError
from .http import fetch_feature_data
from .model import Browser, Feature, FeatureCandidate, FeatureStatus, Release
from .status import classify
from .util.text import query_tokens

LOGGER = logging.getLogger(__name__)


def _as_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def _parse_status(raw: Any) -> FeatureStatus:
    if not isinstance(raw, Mapping):
        return FeatureStatus(baseline=None)

    baseline = raw.get("baseline")
    support: dict[str, str] = {}
    raw_support = raw.get("support")
    if isinstance(raw_support, Mapping):
        for browser_id, version in raw_support.items():
            if isinstance(browser_id, str) and isinstance(version, str) and version:
                support[browser_id] = version

    return FeatureStatus(
        baseline=baseline if isinstance(baseline, str) else None,
        baseline_low_date=_as_str(raw.get("baseline_low_date")),
        baseline_high_date=_as_str(raw.get("baseline_high_date")),
        support=support,
    )


def _parse_feature(feature_id: str, raw: Mapping[str, Any]) -> Feature:
    description = _as_str(raw.get("description")) or ""
    return Feature(
        id=feature_id,
        name=_as_str(raw.get("name")) or feature_id,
        description=description,
        description_html=_as_str(raw.get("description_html")) or description,
        status=_parse_status(raw.get("status")),
    )


def _parse_browser(browser_id: str, raw: Any) -> Browser:
    if not isinstance(raw, Mapping):
        return Browser(id=browser_id, name=browser_id)

    releases: list[Release] = []
    raw_releases = raw.get("releases")
    if isinstance(raw_releases, list):
        for entry in raw_releases:
            if not isinstance(entry, Mapping):
                continue
            version = _as_str(entry.get("version"))
            if not version:
                continue
            releases.append(Release(version=version, date=_as_str(entry.get("date")) or ""))

    return Browser(
        id=browser_id,
        name=_as_str(raw.get("name")) or browser_id,
        releases=tuple(releases),
    )


class FeatureRegistry:
    """Read-only index of features and browsers.

    Instances are never mutated after construction; a reload builds a new
    registry and callers swap the reference.
    """

    def __init__(
        self,
        features: Mapping[str, Feature],
        browsers: Mapping[str, Browser],
        *,
        loaded: bool = True,
    ) -> None:
        self._features = dict(features)
        self._browsers = dict(browsers)
        self._release_dates = {
            browser_id: {release.version: release.date for release in browser.releases}
            for browser_id, browser in self._browsers.items()
        }
        self._loaded = loaded

    @classmethod
    def empty(cls) -> FeatureRegistry:
        """Registry used when the data source could not be loaded."""
        return cls({}, {}, loaded=False)

    @classmethod
    def load(cls, raw: Any, *, source: str = "data") -> FeatureRegistry:
        """Build a registry from a decoded web-features payload."""
        if not isinstance(raw, Mapping):
            raise RegistryLoadError(source, cause="payload is not an object")
        raw_features = raw.get("features")
        raw_browsers = raw.get("browsers")
        if not isinstance(raw_features, Mapping):
            raise RegistryLoadError(source, cause="missing 'features'")
        if not isinstance(raw_browsers, Mapping):
            raise RegistryLoadError(source, cause="missing 'browsers'")

        features: dict[str, Feature] = {}
        for raw_id, entry in raw_features.items():
            if not isinstance(raw_id, str) or not isinstance(entry, Mapping):
                continue
            # Newer datasets keep redirect entries for moved and split features.
            kind = entry.get("kind")
            if kind is not None and kind != "feature":
                continue
            feature_id = raw_id.strip().lower()
            if feature_id and feature_id not in features:
                features[feature_id] = _parse_feature(feature_id, entry)

        browsers = {
            browser_id: _parse_browser(browser_id, entry)
            for browser_id, entry in raw_browsers.items()
            if isinstance(browser_id, str)
        }
        return cls(features, browsers)

    @classmethod
    def from_json(cls, raw_text: str, *, source: str = "data") -> FeatureRegistry:
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise RegistryLoadError(source, cause="invalid JSON") from exc
        return cls.load(payload, source=source)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._features)

    def has(self, feature_id: str) -> bool:
        return feature_id in self._features

    def get(self, feature_id: str) -> Feature | None:
        return self._features.get(feature_id)

    def browser(self, browser_id: str) -> Browser | None:
        return self._browsers.get(browser_id)

    def browser_name(self, browser_id: str) -> str:
        browser = self._browsers.get(browser_id)
        return browser.name if browser is not None else browser_id

    def release_date(self, browser_id: str, version: str) -> str:
        """Return the release date of a browser version, or the unknown sentinel."""
        dates = self._release_dates.get(browser_id)
        if not dates:
            return UNKNOWN_RELEASE_DATE
        return dates.get(version) or UNKNOWN_RELEASE_DATE

    def candidates(self) -> list[FeatureCandidate]:
        """Pick-list entries for every feature, in registry order."""
        output: list[FeatureCandidate] = []
        for feature in self._features.values():
            status = classify(feature.status)
            output.append(
                FeatureCandidate(
                    id=feature.id,
                    name=feature.name,
                    description=feature.description,
                    description_html=feature.description_html,
                    status_label=status.label,
                    icon_key=status.icon_key,
                )
            )
        return output

    def search(self, query: str) -> list[FeatureCandidate]:
        return search_candidates(self.candidates(), query)


def search_candidates(
    candidates: Iterable[FeatureCandidate], query: str
) -> list[FeatureCandidate]:
    """Match candidates whose id, name or description contains every query token.

    Exact id matches come first, then id or name prefix matches, then the rest.
    An empty query matches nothing.
    """
    tokens = query_tokens(query)
    if not tokens:
        return []

    normalized_query = " ".join(tokens)
    exact: list[FeatureCandidate] = []
    prefixed: list[FeatureCandidate] = []
    rest: list[FeatureCandidate] = []
    for candidate in candidates:
        haystack = f"{candidate.id} {candidate.name} {candidate.description}".lower()
        if not all(token in haystack for token in tokens):
            continue
        if candidate.id == normalized_query:
            exact.append(candidate)
        elif candidate.id.startswith(tokens[0]) or candidate.name.lower().startswith(
            normalized_query
        ):
            prefixed.append(candidate)
        else:
            rest.append(candidate)
    return exact + prefixed + rest


def load_registry(data_path: str | Path | None = None, *, url: str = DATA_URL) -> FeatureRegistry:
    """Load the registry from a local file or the network, degrading to empty on failure."""
    source = str(data_path) if data_path is not None else url
    try:
        if data_path is not None:
            try:
                raw_text = Path(data_path).read_text(encoding="utf-8")
            except OSError as exc:
                raise RegistryLoadError(source, cause=exc.__class__.__name__) from exc
            registry = FeatureRegistry.from_json(raw_text, source=source)
        else:
            registry = FeatureRegistry.load(fetch_feature_data(url), source=source)
    except BaselineError as exc:
        LOGGER.warning("%s; Baseline lookups will find no matches", exc)
        return FeatureRegistry.empty()

    LOGGER.debug("Loaded %d features from %s", len(registry), source)
    return registry
