"""Environment-driven settings and logging setup shared by the server and CLI."""
import logging
import os
import typing as t
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rich.console import Console
from rich.logging import RichHandler

# Path to the JSON export of courses and assignments
TRACKER_DATA_PATH = os.getenv("TRACKER_DATA_PATH", "data/tracker.json")

TRACKER_LOG_LEVEL = os.getenv("TRACKER_LOG_LEVEL", "WARNING").upper()

# Timezone used to decide which calendar day an assignment falls on
TRACKER_TIMEZONE = os.getenv("TRACKER_TIMEZONE", "UTC")


def get_timezone(name: t.Optional[str] = None) -> tzinfo:
    """Resolve a timezone name, falling back to UTC for unknown names."""
    name = name or TRACKER_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logging.getLogger(__name__).warning("Unknown timezone %r, using UTC", name)
        return timezone.utc


def configure_logging(level: t.Optional[str] = None) -> None:
    """Send log records to stderr through rich. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level or TRACKER_LOG_LEVEL)

    # Prevent duplicate handlers
    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    root.addHandler(handler)
