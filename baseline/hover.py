"""Hover rendering for feature references."""

from __future__ import annotations

from .constants import (
    BASELINE_ICON_MAP,
    BROWSER_ORDER,
    EXPLORE_URL_TEMPLATE,
    HOVER_SCAN_LIMIT,
    UNSUPPORTED_PLACEHOLDER,
)
from .matcher import find_first_reference
from .model import Feature, HoverResult, Position, TextDocument
from .registry import FeatureRegistry
from .status import classify
from .util.text import escape_leading_angle


def support_cell(feature: Feature, browser_id: str, registry: FeatureRegistry) -> str:
    """Return ``version (release date)`` for a browser, or the unsupported placeholder."""
    version = feature.status.support.get(browser_id)
    if not version:
        return UNSUPPORTED_PLACEHOLDER
    return f"{version} ({registry.release_date(browser_id, version)})"


def render_feature_markdown(feature: Feature, registry: FeatureRegistry) -> str:
    status = classify(feature.status)
    lines = [
        f"### {escape_leading_angle(feature.name)}",
        "",
        feature.description_html,
        "",
        f"{BASELINE_ICON_MAP[status.icon_key]} {status.label}",
        "",
        "| Browser | Support |",
        "| --- | --- |",
    ]
    for browser_id in BROWSER_ORDER:
        browser_name = registry.browser_name(browser_id)
        lines.append(f"| {browser_name} | {support_cell(feature, browser_id, registry)} |")
    lines.extend(
        [
            "",
            f"[Explore on webstatus.dev]({EXPLORE_URL_TEMPLATE.format(feature_id=feature.id)})",
        ]
    )
    return "\n".join(lines)


def hover(
    document: TextDocument, position: Position, registry: FeatureRegistry
) -> HoverResult | None:
    """Render hover details when the cursor sits on a known feature id."""
    line_text = document.line_at(position.line)[:HOVER_SCAN_LIMIT]
    reference = find_first_reference(line_text, position.line)
    if reference is None:
        return None
    if not reference.start_column <= position.character < reference.end_column:
        return None

    feature = registry.get(reference.feature_id)
    if feature is None:
        return None
    return HoverResult(markdown=render_feature_markdown(feature, registry), range=reference.range)
