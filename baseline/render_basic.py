"""Feature detail renderer."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .constants import BASELINE_ICON_MAP, BROWSER_ORDER, EXPLORE_URL_TEMPLATE
from .hover import support_cell
from .model import Feature
from .registry import FeatureRegistry
from .status import classify


def render_basic(feature: Feature, registry: FeatureRegistry) -> Group:
    """Render feature details as a Rich renderable group."""
    status = classify(feature.status)
    lines: list[Text] = []

    lines.append(Text(feature.name, style="bold"))
    lines.append(Text(f"{BASELINE_ICON_MAP[status.icon_key]} {status.label}"))

    if feature.description:
        lines.append(Text(""))
        lines.append(Text("Description", style="bold"))
        lines.append(Text(feature.description))

    lines.append(Text(""))
    lines.append(Text("Browser Support", style="bold"))

    for browser_id in BROWSER_ORDER:
        browser_name = registry.browser_name(browser_id)
        lines.append(Text(f"  {browser_name}: {support_cell(feature, browser_id, registry)}"))

    lines.append(Text(""))
    lines.append(Text(EXPLORE_URL_TEMPLATE.format(feature_id=feature.id), style="dim"))

    return Group(Panel(Group(*lines), border_style="blue", title=f"baseline/{feature.id}"))
