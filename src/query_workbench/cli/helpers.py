"""Shared CLI formatting helpers."""

from __future__ import annotations


def format_execution_time(ms: float | None) -> str:
    """Format an execution time in milliseconds for the status line."""
    if ms is None:
        return ""
    if ms < 1000:
        return f"{ms:.0f} ms"
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.2f} s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"


def parse_selection(raw: str | None) -> tuple[int, int] | None:
    """Parse ``start:end`` into a selection range.

    Raises ValueError on anything else.
    """
    if raw is None or raw == "":
        return None
    start_s, sep, end_s = raw.partition(":")
    if not sep:
        msg = f"Invalid selection {raw!r}. Expected START:END"
        raise ValueError(msg)
    start, end = int(start_s), int(end_s)
    if start < 0 or end < 0:
        msg = f"Invalid selection {raw!r}. Offsets must be >= 0"
        raise ValueError(msg)
    return start, end
