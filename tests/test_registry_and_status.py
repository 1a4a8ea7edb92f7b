from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from baseline import registry as registry_module
from baseline.exceptions import NetworkError, RegistryLoadError
from baseline.model import FeatureCandidate, FeatureStatus
from baseline.registry import FeatureRegistry, load_registry, search_candidates
from baseline.status import classify


def test_load_indexes_features_and_skips_redirects(registry: FeatureRegistry) -> None:
    assert registry.is_loaded is True
    assert len(registry) == 4
    assert registry.has("grid")
    assert not registry.has("grid-old")
    assert not registry.has("Grid")

    grid = registry.get("grid")
    assert grid is not None
    assert grid.name == "Grid"
    assert grid.status.baseline == "high"
    assert grid.status.support["safari"] == "10.1"
    assert registry.get("nope") is None


def test_load_normalizes_status_shapes(registry: FeatureRegistry) -> None:
    anchor = registry.get("anchor-positioning")
    assert anchor is not None
    assert anchor.status.baseline is None
    assert anchor.status.support == {"chrome": "125"}

    dialog = registry.get("dialog")
    assert dialog is not None
    assert dialog.status.support == {}


def test_load_lowercases_ids_and_falls_back_on_missing_fields() -> None:
    loaded = FeatureRegistry.load(
        {
            "browsers": {"chrome": "not-a-mapping"},
            "features": {"Has-Caps": {}, "bad": "x"},
        }
    )
    feature = loaded.get("has-caps")
    assert feature is not None
    assert feature.name == "has-caps"
    assert feature.description_html == ""
    assert feature.status == FeatureStatus(baseline=None)
    assert not loaded.has("bad")
    assert loaded.browser_name("chrome") == "chrome"


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"browsers": {}},
        {"features": {}},
        {"features": [], "browsers": {}},
    ],
)
def test_load_rejects_malformed_payloads(raw: Any) -> None:
    with pytest.raises(RegistryLoadError):
        FeatureRegistry.load(raw)


def test_from_json_rejects_invalid_json() -> None:
    with pytest.raises(RegistryLoadError) as excinfo:
        FeatureRegistry.from_json("{", source="data.json")
    assert "data.json" in str(excinfo.value)
    assert "invalid JSON" in str(excinfo.value)


def test_release_date_lookup_and_sentinels(registry: FeatureRegistry) -> None:
    assert registry.release_date("chrome", "57") == "2017-03-09"
    assert registry.release_date("chrome", "1") == "Unknown"
    assert registry.release_date("netscape", "4") == "Unknown"
    assert registry.browser_name("firefox_android") == "Firefox for Android"
    assert registry.browser_name("opera") == "opera"


def test_empty_registry_yields_no_matches() -> None:
    empty = FeatureRegistry.empty()
    assert empty.is_loaded is False
    assert not empty.has("grid")
    assert empty.candidates() == []
    assert empty.search("grid") == []
    assert empty.release_date("chrome", "57") == "Unknown"


def test_candidates_carry_status_labels(registry: FeatureRegistry) -> None:
    candidates = {candidate.id: candidate for candidate in registry.candidates()}
    assert list(candidates) == ["grid", "popover", "anchor-positioning", "dialog"]
    assert candidates["grid"].status_label == "Widely available since 2017-03-14"
    assert candidates["grid"].icon_key == "widely"
    assert candidates["popover"].status_label == "Newly available since 2024-04-16"
    assert candidates["anchor-positioning"].icon_key == "limited"
    assert candidates["popover"].description_html.startswith("The <code>popover</code>")


def test_search_ranks_exact_then_prefix_then_rest(registry: FeatureRegistry) -> None:
    assert [c.id for c in registry.search("grid")] == ["grid"]
    assert [c.id for c in registry.search("  GRID ")] == ["grid"]
    assert [c.id for c in registry.search("element")] == [
        "popover",
        "anchor-positioning",
        "dialog",
    ]
    assert [c.id for c in registry.search("dia")] == ["dialog"]
    assert [c.id for c in registry.search("layout system")] == ["grid"]
    assert registry.search("") == []
    assert registry.search("zzz") == []


def test_search_candidates_prefers_exact_id_over_earlier_entries() -> None:
    candidates = [
        FeatureCandidate("grid-animation", "Grid animation", "grid tracks", "", "x"),
        FeatureCandidate("subgrid", "Subgrid", "nested grid", "", "x"),
        FeatureCandidate("grid", "Grid", "layout", "", "x"),
    ]
    assert [c.id for c in search_candidates(candidates, "grid")] == [
        "grid",
        "grid-animation",
        "subgrid",
    ]


def test_load_registry_from_file(data_file: Path) -> None:
    loaded = load_registry(data_file)
    assert loaded.is_loaded is True
    assert loaded.has("popover")


def test_load_registry_degrades_on_bad_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    bad = tmp_path / "data.json"
    bad.write_text(json.dumps({"features": {}}), encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="baseline.registry"):
        loaded = load_registry(bad)

    assert loaded.is_loaded is False
    assert len(loaded) == 0
    assert len(caplog.records) == 1
    assert "missing 'browsers'" in caplog.records[0].getMessage()


def test_load_registry_degrades_on_missing_file(tmp_path: Path) -> None:
    loaded = load_registry(tmp_path / "missing.json")
    assert loaded.is_loaded is False


def test_load_registry_over_network(
    monkeypatch: pytest.MonkeyPatch, sample_payload: dict[str, Any]
) -> None:
    seen: list[str] = []

    def _fetch(url: str) -> dict[str, Any]:
        seen.append(url)
        return sample_payload

    monkeypatch.setattr(registry_module, "fetch_feature_data", _fetch)
    loaded = load_registry(url="https://example.com/data.json")

    assert seen == ["https://example.com/data.json"]
    assert loaded.has("grid")


def test_load_registry_network_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fetch(url: str) -> dict[str, Any]:
        raise NetworkError(url, cause="ConnectError")

    monkeypatch.setattr(registry_module, "fetch_feature_data", _fetch)
    assert load_registry().is_loaded is False


@pytest.mark.parametrize(
    ("status", "label", "icon_key"),
    [
        (
            FeatureStatus(baseline="high", baseline_high_date="2017-03-14"),
            "Widely available since 2017-03-14",
            "widely",
        ),
        (
            FeatureStatus(baseline="low", baseline_low_date="2024-04-16"),
            "Newly available since 2024-04-16",
            "newly",
        ),
        (FeatureStatus(baseline="high"), "Widely available", "widely"),
        (FeatureStatus(baseline="low", baseline_low_date=""), "Newly available", "newly"),
        (FeatureStatus(baseline=None), "Limited availability across major browsers", "limited"),
        (FeatureStatus(baseline="HIGH"), "Limited availability across major browsers", "limited"),
        (None, "Limited availability across major browsers", "limited"),
    ],
)
def test_classify_is_total(status: FeatureStatus | None, label: str, icon_key: str) -> None:
    result = classify(status)
    assert result.label == label
    assert result.icon_key == icon_key


def test_classify_grid_scenario(registry: FeatureRegistry) -> None:
    grid = registry.get("grid")
    assert grid is not None
    assert classify(grid.status).label == "Widely available since 2017-03-14"
