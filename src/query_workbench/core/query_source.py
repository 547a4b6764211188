"""Query text resolution for Query Workbench.

Two entry points:

- ``select_query_text`` picks what a tab actually executes: the selected
  text when there is a non-blank selection, otherwise every statement of
  the tab content, trimmed and re-joined with ``"; "``.
- ``resolve_query_source`` reads the query for the one-shot CLI command
  from one of three sources:
  1. Inline (-e flag)  - highest priority
  2. File path         - middle priority
  3. stdin             - lowest priority
"""

from __future__ import annotations

import sys
from pathlib import Path

from query_workbench.core.exceptions import ValidationError

EMPTY_QUERY_MESSAGE = "Please enter a SQL query to execute."


def join_statements(content: str) -> str:
    """Split on ';', trim each statement, drop empties, re-join with '; '."""
    statements = (part.strip() for part in content.split(";"))
    return "; ".join(s for s in statements if s)


def select_query_text(
    content: str,
    selection: tuple[int, int] | None = None,
) -> str:
    """Return the text to execute for a tab.

    ``selection`` is a ``(start, end)`` character range into ``content``.
    Raises ValidationError when nothing executable remains.
    """
    if selection is not None:
        start, end = sorted(selection)
        selected = content[start:end]
        if selected.strip():
            return selected

    text = join_statements(content)
    if not text:
        raise ValidationError(EMPTY_QUERY_MESSAGE)
    return text


def resolve_query_source(
    inline: str | None,
    file_path: str | None,
) -> str:
    """Resolve query text from inline, file, or stdin.

    Precedence: inline > file > stdin.
    Raises ValidationError when no source is available.
    """
    if inline is not None:
        return inline

    if file_path is not None:
        p = Path(file_path)
        if not p.exists():
            msg = (
                f"Query file not found: {file_path}\n"
                "Use -e for inline queries or pipe query via stdin."
            )
            raise ValidationError(msg)
        return p.read_text()

    if not sys.stdin.isatty():
        return sys.stdin.read()

    msg = "No query provided. Use -e, file path, or pipe to stdin."
    raise ValidationError(msg)
