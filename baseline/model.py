"""Data models for features, documents and scan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .util.text import split_lines

SyntaxKind = Literal["hot-phrase", "attribute"]
IconKey = Literal["widely", "newly", "limited"]


@dataclass(frozen=True)
class Release:
    version: str
    date: str


@dataclass(frozen=True)
class Browser:
    id: str
    name: str
    releases: tuple[Release, ...] = ()


@dataclass(frozen=True)
class FeatureStatus:
    baseline: str | None
    baseline_low_date: str | None = None
    baseline_high_date: str | None = None
    support: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Feature:
    id: str
    name: str
    description: str
    description_html: str
    status: FeatureStatus


@dataclass(frozen=True)
class StatusLabel:
    label: str
    icon_key: IconKey


@dataclass(frozen=True)
class FeatureCandidate:
    id: str
    name: str
    description: str
    description_html: str
    status_label: str
    icon_key: IconKey = "limited"


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class TextRange:
    line: int
    start_column: int
    end_column: int


@dataclass(frozen=True)
class TextDocument:
    """Read-only snapshot of an open document."""

    uri: str
    text: str
    version: int = 0

    @property
    def lines(self) -> list[str]:
        return split_lines(self.text)

    def line_at(self, line: int) -> str:
        lines = self.lines
        if 0 <= line < len(lines):
            return lines[line]
        return ""


@dataclass(frozen=True)
class Reference:
    line: int
    start_column: int
    end_column: int
    feature_id: str
    syntax_kind: SyntaxKind

    @property
    def range(self) -> TextRange:
        return TextRange(self.line, self.start_column, self.end_column)


@dataclass(frozen=True)
class Diagnostic:
    range: TextRange
    message: str
    severity: Literal["error"] = "error"


@dataclass(frozen=True)
class HoverResult:
    markdown: str
    range: TextRange


@dataclass(frozen=True)
class InsertionTrigger:
    line: int
    column: int
    syntax_kind: SyntaxKind


@dataclass(frozen=True)
class Insertion:
    line: int
    column: int
    text: str


@dataclass(frozen=True)
class TodoEntry:
    feature_id: str
    file_name: str
    file_path: str
    line_number: int


@dataclass(frozen=True)
class TodoReportRow:
    entry: TodoEntry
    feature: Feature | None
    status: StatusLabel | None
    support_cells: dict[str, str] = field(default_factory=dict)
