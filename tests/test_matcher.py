from __future__ import annotations

import pytest

from baseline.matcher import find_first_reference, find_todo_feature_id


def _covered(line: str, start: int, end: int) -> str:
    return line[start:end]


@pytest.mark.parametrize(
    "line",
    [
        "baseline/foo-bar",
        "// see baseline/foo-bar for details",
        "/* baseline/foo-bar */",
        "x = 'baseline/foo-bar';",
        "https://example.com/baseline/foo-bar",
    ],
)
def test_hot_phrase_range_covers_id(line: str) -> None:
    reference = find_first_reference(line, 3)
    assert reference is not None
    assert reference.feature_id == "foo-bar"
    assert reference.syntax_kind == "hot-phrase"
    assert reference.line == 3
    assert _covered(line, reference.start_column, reference.end_column) == "foo-bar"


@pytest.mark.parametrize(
    "line",
    [
        '<baseline-status featureId="foo-bar"></baseline-status>',
        "<baseline-status featureId='foo-bar'>",
        "<baseline-status featureId=foo-bar>",
        '  <baseline-status class="x" data-y="1" featureId="foo-bar">',
    ],
)
def test_attribute_range_points_at_id_not_tag(line: str) -> None:
    reference = find_first_reference(line)
    assert reference is not None
    assert reference.feature_id == "foo-bar"
    assert reference.syntax_kind == "attribute"
    assert _covered(line, reference.start_column, reference.end_column) == "foo-bar"


def test_matching_is_case_insensitive_and_lowercases_id() -> None:
    line = "// Baseline/Foo-Bar"
    reference = find_first_reference(line)
    assert reference is not None
    assert reference.feature_id == "foo-bar"
    assert _covered(line, reference.start_column, reference.end_column) == "Foo-Bar"

    attribute = find_first_reference('<BASELINE-STATUS FEATUREID="Grid">')
    assert attribute is not None
    assert attribute.feature_id == "grid"


def test_grid_scenario_columns() -> None:
    line = "// see baseline/grid for details"
    reference = find_first_reference(line)
    assert reference is not None
    assert (reference.start_column, reference.end_column) == (16, 20)
    assert reference.range.line == 0


def test_first_match_wins_by_position() -> None:
    line = '<baseline-status featureId="popover"> and baseline/grid'
    reference = find_first_reference(line)
    assert reference is not None
    assert reference.feature_id == "popover"

    line = 'baseline/grid then <baseline-status featureId="popover">'
    reference = find_first_reference(line)
    assert reference is not None
    assert reference.feature_id == "grid"


def test_only_first_reference_per_line() -> None:
    reference = find_first_reference("baseline/grid baseline/popover")
    assert reference is not None
    assert reference.feature_id == "grid"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "no references here",
        "baseline/",
        "mybaseline/grid",
        "baseline/123",
        "<baseline-status>",
        '<baseline-status foo="bar">',
    ],
)
def test_no_reference(line: str) -> None:
    assert find_first_reference(line) is None


def test_id_stops_at_non_id_characters() -> None:
    reference = find_first_reference("baseline/grid_layout")
    assert reference is None

    reference = find_first_reference("baseline/grid.")
    assert reference is not None
    assert reference.feature_id == "grid"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("// TODO(baseline/grid) fix this", "grid"),
        ("# TODO(baseline/Web-Animations2) later", "Web-Animations2"),
        ("/* TODO(baseline/grid)*/", "grid"),
        ("// TODO baseline/grid", None),
        ("// todo(baseline/grid)", None),
        ("// see baseline/grid", None),
        ("// TODO(baseline/)", None),
    ],
)
def test_todo_marker_grammar(line: str, expected: str | None) -> None:
    assert find_todo_feature_id(line) == expected
