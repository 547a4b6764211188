"""Line tokenizer for query text highlighting.

Presentation only: splits a line into keyword / operator / plain spans
in order. Text is HTML-escaped before it is classified, so span text can
be dropped into markup as-is.
"""

from __future__ import annotations

import html
import re
from enum import StrEnum
from typing import NamedTuple

KEYWORDS = (
    "SELECT", "FROM", "CREATE", "STOP", "REMOVE", "TABLE", "INSERT", "INTO",
    "VALUES", "UPDATE", "DELETE", "DROP", "ALTER", "INDEX", "VIEW", "LAUNCH",
    "SHOW", "NUMBER", "STRING", "BOOLEAN", "CONTAINER", "START", "PAUSE",
    "UNPAUSE", "RESTART", "KILL",
)  # fmt: skip

WORD_OPERATORS = (
    "IS", "NULL", "METADATA", "RUN_CMD", "AND", "OR", "LIKE", "IN", "BETWEEN",
    "EXISTS", "TABLES", "WHERE", "FALSE", "TRUE",
)  # fmt: skip

# Escaped forms first so "&lt;=" is one operator, not "&lt;" then "=".
SYMBOL_OPERATORS = (
    "&gt;=", "&lt;=", "&lt;&gt;", "&gt;", "&lt;",
    ">=", "<=", "<>", "!=", ">", "<", "=", "+", "-", "*",
)  # fmt: skip

_TOKEN_RE = re.compile(
    r"(?P<keyword>\b(?:{kw})\b)|(?P<word_op>\b(?:{op})\b)|(?P<symbol_op>{sym})".format(
        kw="|".join(KEYWORDS),
        op="|".join(WORD_OPERATORS),
        sym="|".join(re.escape(s) for s in SYMBOL_OPERATORS),
    ),
    re.IGNORECASE,
)

_COLORS = {
    "keyword": "#4A90E2",
    "operator": "#D0021B",
}


class SpanKind(StrEnum):
    KEYWORD = "keyword"
    OPERATOR = "operator"
    PLAIN = "plain"


class Span(NamedTuple):
    kind: SpanKind
    text: str


def tokenize_line(line: str, escape: bool = True) -> list[Span]:
    """Classify ``line`` into ordered spans whose texts concatenate back to it.

    With ``escape`` (the default) ``&``, ``<`` and ``>`` are HTML-escaped
    first and the spans concatenate to the escaped line.
    """
    text = html.escape(line, quote=False) if escape else line
    spans: list[Span] = []
    pos = 0
    for match in _TOKEN_RE.finditer(text):
        if match.start() > pos:
            spans.append(Span(SpanKind.PLAIN, text[pos : match.start()]))
        kind = SpanKind.KEYWORD if match.lastgroup == "keyword" else SpanKind.OPERATOR
        spans.append(Span(kind, match.group()))
        pos = match.end()
    if pos < len(text):
        spans.append(Span(SpanKind.PLAIN, text[pos:]))
    return spans


def highlight_html(line: str) -> str:
    """Render one line as HTML with colored keyword and operator spans."""
    parts = []
    for span in tokenize_line(line):
        if span.kind == SpanKind.PLAIN:
            parts.append(span.text)
        else:
            color = _COLORS[span.kind.value]
            parts.append(f'<span style="color: {color};">{span.text}</span>')
    return "".join(parts)
