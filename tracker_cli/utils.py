"""Utility functions for the course tracker CLI."""
import typing as t
from datetime import datetime

from rich.console import Console
from rich.markup import escape

from tracker_config import get_timezone

console = Console()
error_console = Console(stderr=True)

PRIORITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "green"}
STATUS_STYLES = {"completed": "green", "overdue": "bold red", "pending": "cyan"}


def fail(message: str) -> t.NoReturn:
    """Print an error through the console and exit with status 1."""
    error_console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(1)


def format_datetime_human(moment: datetime) -> str:
    """Convert a datetime to a human-readable format (MM/DD HH:MM)."""
    return moment.astimezone(get_timezone()).strftime("%m/%d %H:%M")


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def styled(value: str, styles: dict[str, str], width: int = 0) -> str:
    """Escape a label, pad it to ``width`` and wrap it in the style looked up
    by its value."""
    label = escape(value.ljust(width))
    style = styles.get(value)
    return f"[{style}]{label}[/{style}]" if style else label


def parse_score_options(scores: tuple[str, ...]) -> dict[str, list[str]]:
    """Group ``CATEGORY=SCORE`` options by category, keeping their order.

    The score text is passed through untouched; the grade calculator decides
    how to read it.

    Raises:
        ValueError: If an option has no "=".
    """
    entries: dict[str, list[str]] = {}
    for option in scores:
        if "=" not in option:
            raise ValueError(f"Expected CATEGORY=SCORE, got {option!r}")
        category, score = option.rsplit("=", 1)
        entries.setdefault(category.strip(), []).append(score.strip())
    return entries
