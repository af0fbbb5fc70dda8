"""
Bordered box for the staged-files overview.

    ╭────────────────────────────────────────────────╮
    │         Staged files to be committed:          │
    ├────────────────────────────────────────────────┤
    │src/app.py (+12) (-3)                           │
    ╰────────────────────────────────────────────────╯

Every line is computed against one content width, so the right border lines
up whether or not the text carries color codes.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style
from rich.text import Text

from hypecommit.models import StagedFileStat
from hypecommit.text import truncate_path, visible_width

DEFAULT_HEADER = "Staged files to be committed:"

MIN_BOX_WIDTH = 50
MAX_BOX_WIDTH = 80
BORDER_WIDTH = 2  # left + right

MIN_CONTENT_WIDTH = MIN_BOX_WIDTH - BORDER_WIDTH
MAX_CONTENT_WIDTH = MAX_BOX_WIDTH - BORDER_WIDTH

STYLES = {
    "border": "bright_blue",
    "header": "bold",
    "path": "bright_yellow",
    "additions": "bright_green",
    "deletions": "bright_red",
}


@dataclass(frozen=True)
class BoxDimensions:
    header: str
    content_width: int


def paint(text: str, role: str, color: bool = True) -> str:
    """Wrap `text` in the ANSI codes for one of the box's style roles."""
    if not color or not text:
        return text
    return Style.parse(STYLES[role]).render(text, color_system=ColorSystem.STANDARD)


# --- Layout ---


def format_stats(additions: int, deletions: int) -> str:
    return f" (+{additions}) (-{deletions})"


def fit_path(file: str, stats: str, max_width: int) -> str:
    """Shorten `file` so that it and its stats suffix fit in `max_width`."""
    return truncate_path(file, max(0, max_width - visible_width(stats)))


def format_row(file: str, additions: int, deletions: int, max_width: int = MAX_CONTENT_WIDTH) -> str:
    """File path, shortened to leave room for its stats, followed by the stats."""
    stats = format_stats(additions, deletions)
    return fit_path(file, stats, max_width) + stats


def compute_box_dimensions(
    header: str = DEFAULT_HEADER,
    rows: Iterable[StagedFileStat] = (),
    max_width: int = MAX_CONTENT_WIDTH,
) -> BoxDimensions:
    """Width that fits the header, every formatted row and the minimum box size."""
    widths = [MIN_CONTENT_WIDTH, visible_width(header)]
    widths.extend(
        visible_width(format_row(row.file, row.additions, row.deletions, max_width)) for row in rows
    )
    return BoxDimensions(header=header, content_width=max(widths))


# --- Rendering ---


def _pad(content: str, content_width: int) -> str:
    return content + " " * max(0, content_width - visible_width(content))


def _bordered(content: str, content_width: int, color: bool) -> str:
    edge = paint("│", "border", color)
    return edge + _pad(content, content_width) + edge


def _rule(left: str, right: str, content_width: int, color: bool) -> str:
    return paint(left + "─" * max(0, content_width) + right, "border", color)


def render_top(dims: BoxDimensions, color: bool = True) -> str:
    return _rule("╭", "╮", dims.content_width, color)


def render_header(dims: BoxDimensions, color: bool = True) -> str:
    """Header centered; an odd leftover column goes to the right."""
    slack = max(0, dims.content_width - visible_width(dims.header))
    left = slack // 2
    content = " " * left + paint(dims.header, "header", color)
    return _bordered(content, dims.content_width, color)


def render_separator(dims: BoxDimensions, color: bool = True) -> str:
    return _rule("├", "┤", dims.content_width, color)


def render_row(
    dims: BoxDimensions,
    row: StagedFileStat,
    color: bool = True,
    max_width: int = MAX_CONTENT_WIDTH,
) -> str:
    """One file line, right-padded with spaces to the content width."""
    path = fit_path(row.file, format_stats(row.additions, row.deletions), max_width)
    content = (
        paint(path, "path", color)
        + paint(f" (+{row.additions})", "additions", color)
        + paint(f" (-{row.deletions})", "deletions", color)
    )
    return _bordered(content, dims.content_width, color)


def render_footer(dims: BoxDimensions, color: bool = True) -> str:
    return _rule("╰", "╯", dims.content_width, color)


def render_box(
    rows: Sequence[StagedFileStat],
    header: str = DEFAULT_HEADER,
    color: bool = True,
    max_width: int = MAX_CONTENT_WIDTH,
) -> list[str]:
    """All lines of the box, top border first."""
    dims = compute_box_dimensions(header, rows, max_width)
    lines = [render_top(dims, color), render_header(dims, color), render_separator(dims, color)]
    lines.extend(render_row(dims, row, color, max_width) for row in rows)
    lines.append(render_footer(dims, color))
    return lines


def print_box(console: Console, rows: Sequence[StagedFileStat], header: str = DEFAULT_HEADER) -> None:
    """Write the box to `console`, one line at a time."""
    max_width = max(MIN_CONTENT_WIDTH, min(MAX_CONTENT_WIDTH, console.width - BORDER_WIDTH))
    for line in render_box(rows, header, color=True, max_width=max_width):
        console.print(Text.from_ansi(line), soft_wrap=True)
