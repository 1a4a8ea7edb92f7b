from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from baseline.registry import FeatureRegistry


def _sample_payload() -> dict[str, Any]:
    return {
        "browsers": {
            "chrome": {
                "name": "Chrome",
                "releases": [
                    {"version": "57", "date": "2017-03-09"},
                    {"version": "114", "date": "2023-05-30"},
                    {"version": "125", "date": "2024-05-14"},
                ],
            },
            "chrome_android": {
                "name": "Chrome Android",
                "releases": [{"version": "57", "date": "2017-03-16"}],
            },
            "edge": {
                "name": "Edge",
                "releases": [{"version": "16", "date": "2017-10-17"}],
            },
            "firefox": {
                "name": "Firefox",
                "releases": [{"version": "52", "date": "2017-03-07"}],
            },
            "firefox_android": {
                "name": "Firefox for Android",
                "releases": [{"version": "52", "date": "2017-03-07"}],
            },
            "safari": {
                "name": "Safari",
                "releases": [{"version": "10.1", "date": "2017-03-27"}],
            },
            "safari_ios": {
                "name": "Safari on iOS",
                "releases": [{"version": "10.3", "date": "2017-03-27"}],
            },
        },
        "features": {
            "grid": {
                "name": "Grid",
                "description": "CSS grid is a two-dimensional layout system.",
                "description_html": "CSS grid is a two-dimensional layout system.",
                "status": {
                    "baseline": "high",
                    "baseline_low_date": "2017-10-17",
                    "baseline_high_date": "2017-03-14",
                    "support": {
                        "chrome": "57",
                        "chrome_android": "57",
                        "edge": "16",
                        "firefox": "52",
                        "firefox_android": "52",
                        "safari": "10.1",
                        "safari_ios": "10.3",
                    },
                },
            },
            "popover": {
                "name": "Popover",
                "description": "The popover attribute turns an element into a popover.",
                "description_html": "The <code>popover</code> attribute makes a popover.",
                "status": {
                    "baseline": "low",
                    "baseline_low_date": "2024-04-16",
                    "support": {"chrome": "114", "edge": "114"},
                },
            },
            "anchor-positioning": {
                "name": "Anchor positioning",
                "description": "Anchor positioning places an element relative to another.",
                "description_html": "Anchor positioning places an element relative to another.",
                "status": {"baseline": False, "support": {"chrome": "125"}},
            },
            "dialog": {
                "name": "<dialog>",
                "description": "The dialog element is a modal or non-modal dialog box.",
                "description_html": "The <code>&lt;dialog&gt;</code> element is a dialog box.",
                "status": {"baseline": "high", "baseline_high_date": "2024-09-14"},
            },
            "grid-old": {"kind": "moved", "redirect_target": "grid"},
        },
    }


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return _sample_payload()


@pytest.fixture
def registry() -> FeatureRegistry:
    return FeatureRegistry.load(_sample_payload())


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(_sample_payload()), encoding="utf-8")
    return path
