"""TODO report rows and their Rich table rendering."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import RenderableType
from rich.table import Table
from rich.text import Text

from .constants import BASELINE_ICON_MAP, BROWSER_ORDER, UNSUPPORTED_PLACEHOLDER
from .model import TodoEntry, TodoReportRow
from .registry import FeatureRegistry
from .status import classify


def build_report(entries: Iterable[TodoEntry], registry: FeatureRegistry) -> list[TodoReportRow]:
    """Attach feature details and per-browser support to each TODO entry."""
    rows: list[TodoReportRow] = []
    for entry in entries:
        feature = registry.get(entry.feature_id)
        if feature is None:
            rows.append(TodoReportRow(entry=entry, feature=None, status=None))
            continue
        rows.append(
            TodoReportRow(
                entry=entry,
                feature=feature,
                status=classify(feature.status),
                support_cells={
                    browser_id: feature.status.support.get(browser_id) or UNSUPPORTED_PLACEHOLDER
                    for browser_id in BROWSER_ORDER
                },
            )
        )
    return rows


def render_report(rows: list[TodoReportRow], registry: FeatureRegistry) -> RenderableType:
    """Render report rows as a table, one column per browser."""
    if not rows:
        return Text("No items found", style="dim")

    table = Table(title="Baseline TODOs", header_style="bold", expand=False)
    table.add_column("Feature", style="bold cyan", no_wrap=True)
    table.add_column("Status", justify="center")
    table.add_column("File")
    table.add_column("Line", justify="right")
    for browser_id in BROWSER_ORDER:
        table.add_column(registry.browser_name(browser_id), justify="center")

    for row in rows:
        entry = row.entry
        location = Text(entry.file_name)
        location.append(f"  {entry.file_path}", style="dim")
        if row.feature is None or row.status is None:
            table.add_row(
                Text(entry.feature_id),
                Text("unrecognized", style="red"),
                location,
                str(entry.line_number),
                *("" for _ in BROWSER_ORDER),
            )
            continue
        table.add_row(
            Text(f"{row.feature.name} ({entry.feature_id})"),
            BASELINE_ICON_MAP[row.status.icon_key],
            location,
            str(entry.line_number),
            *(
                row.support_cells.get(browser_id, UNSUPPORTED_PLACEHOLDER)
                for browser_id in BROWSER_ORDER
            ),
        )
    return table
