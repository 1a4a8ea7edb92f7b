"""Interactive feature picker with type-to-filter."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import os
import select
import sys
from typing import Any, cast

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..constants import BASELINE_ICON_MAP
from ..model import FeatureCandidate
from ..registry import search_candidates
from ..util.text import ellipsize

# Keys are either a named action or a single printable character.
_NAMED_KEYS = frozenset({"up", "down", "enter", "quit", "backspace", "noop"})


@dataclass
class _PickerState:
    query: str = ""
    selected_idx: int = 0


def filter_candidates(
    candidates: list[FeatureCandidate], query: str
) -> list[FeatureCandidate]:
    if not query.strip():
        return list(candidates)
    return search_candidates(candidates, query)


def _build_frame(
    matches: list[FeatureCandidate],
    selected_idx: int,
    width: int,
    start: int,
    stop: int,
    query: str = "",
) -> Panel:
    rows: list[Text] = [Text(f"Search: {query}", style="bold")]
    rows.append(Text(""))
    for index in range(start, stop):
        item = matches[index]
        is_selected = index == selected_idx
        prefix = ">" if is_selected else " "
        text_width = max(width - len(item.id) - 12, 10)
        name = ellipsize(item.name, text_width)
        rows.append(
            Text(
                f"{prefix} {BASELINE_ICON_MAP[item.icon_key]} {name}  {item.id}",
                style="bold white" if is_selected else "white",
            )
        )
        if item.description:
            detail = ellipsize(item.description, max(width - 10, 10))
            rows.append(Text(f"     {detail}", style="dim"))
    if not matches:
        rows.append(Text("No matching features.", style="yellow"))

    footer = Text("Type to filter  ↑/↓ move  Enter select  Esc cancel", style="dim")
    return Panel(Group(*rows, Text(""), footer), title="Baseline search", border_style="cyan")


def _visible_window(selected_idx: int, total: int, height: int) -> tuple[int, int]:
    # Each entry takes two rows; the frame needs eight more.
    visible = max((height - 8) // 2, 1)
    if total <= visible:
        return 0, total
    start = selected_idx - (visible // 2)
    start = max(start, 0)
    start = min(start, total - visible)
    return start, min(start + visible, total)


def _decode_escape_sequence(sequence: bytes) -> str:
    normalized = sequence.replace(b"O", b"[")
    if normalized.endswith(b"A"):
        return "up"
    if normalized.endswith(b"B"):
        return "down"
    return "noop"


def _decode_char(char: str) -> str:
    if char in {"\r", "\n"}:
        return "enter"
    if char in {"\x7f", "\b"}:
        return "backspace"
    if char.isprintable():
        return char
    return "noop"


def _read_key_posix(fd: int) -> str:
    data = os.read(fd, 1)
    if not data:
        return "noop"

    char = data.decode(errors="ignore")
    if char == "\x1b":
        sequence = b""
        while select.select([fd], [], [], 0.01)[0]:
            sequence += os.read(fd, 1)
            if sequence.endswith((b"A", b"B")):
                break
        if not sequence:
            return "quit"
        return _decode_escape_sequence(sequence)
    return _decode_char(char)


def _read_key_windows() -> str:
    import msvcrt  # pragma: no cover

    getwch = cast(Callable[[], str] | None, getattr(msvcrt, "getwch", None))
    if getwch is None:
        return "noop"

    char = getwch()
    if char == "\x1b":
        return "quit"
    if char in {"\x00", "\xe0"}:
        special = getwch()
        return {"H": "up", "P": "down"}.get(special, "noop")
    return _decode_char(char)


class _RawInput:
    def __init__(self) -> None:
        self._fd: int | None = None
        self._old_settings: Any = None

    def __enter__(self) -> _RawInput:
        if os.name == "nt":
            return self
        import termios
        import tty

        self._fd = sys.stdin.fileno()
        self._old_settings = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: object | None,
    ) -> None:
        if os.name == "nt" or self._fd is None or self._old_settings is None:
            return
        import termios

        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)

    def read_key(self) -> str:
        if os.name == "nt":
            return _read_key_windows()
        if self._fd is None:
            return "noop"
        return _read_key_posix(self._fd)


def _supports_key_loop(console: Console) -> bool:
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return False
    if not hasattr(console, "screen"):
        return False
    try:
        sys.stdin.fileno()
    except (OSError, ValueError):
        return False
    return True


def _apply_key(key: str, state: _PickerState, total: int) -> None:
    if key == "up":
        state.selected_idx = max(0, state.selected_idx - 1)
    elif key == "down":
        state.selected_idx = min(max(total - 1, 0), state.selected_idx + 1)
    elif key == "backspace":
        state.query = state.query[:-1]
        state.selected_idx = 0
    elif key not in _NAMED_KEYS:
        state.query += key
        state.selected_idx = 0


def _select_match_by_number(console: Console, options: list[FeatureCandidate]) -> str | None:
    while True:
        selected = console.input("[dim]Enter number (or q to cancel): [/]").strip().lower()
        if selected in {"q", "quit", "esc"}:
            return None
        if selected.isdigit():
            idx = int(selected)
            if 1 <= idx <= len(options):
                return options[idx - 1].id
        console.print("Invalid selection. Try again.", style="yellow")


def select_match(matches: Iterable[FeatureCandidate]) -> str | None:
    """Return the selected feature id or None when user cancels."""
    options = list(matches)
    if not options:
        return None
    if len(options) == 1:
        return options[0].id

    # Non-interactive environments cannot support key loops; choose first deterministically.
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        return options[0].id

    console = Console()
    width = max(console.size.width, 40)
    if not _supports_key_loop(console):
        numbered = [
            Text(f"{index}. {item.name}  {item.id}") for index, item in enumerate(options, start=1)
        ]
        console.print(Panel(Group(*numbered), title="Baseline search", border_style="cyan"))
        return _select_match_by_number(console, options)

    state = _PickerState()
    with (
        _RawInput() as raw,
        console.screen(hide_cursor=True),
        Live(
            _build_frame(options, selected_idx=0, width=width, start=0, stop=len(options)),
            console=console,
            auto_refresh=False,
            screen=True,
        ) as live,
    ):
        while True:
            visible = filter_candidates(options, state.query)
            start, stop = _visible_window(state.selected_idx, len(visible), console.size.height)
            live.update(
                _build_frame(
                    visible,
                    selected_idx=state.selected_idx,
                    width=max(console.size.width, 40),
                    start=start,
                    stop=stop,
                    query=state.query,
                ),
                refresh=True,
            )
            key = raw.read_key()
            if key == "enter":
                if visible:
                    return visible[state.selected_idx].id
                continue
            if key == "quit":
                return None
            _apply_key(key, state, len(visible))
