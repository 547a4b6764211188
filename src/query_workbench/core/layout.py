"""Resizable result column widths, in character cells."""

from __future__ import annotations

from query_workbench.core.logging import get_logger


class ColumnLayout:
    def __init__(self, default_width: int = 40, min_width: int = 5) -> None:
        self.default_width = default_width
        self.min_width = min_width
        self.widths: list[int] = []

    def ensure(self, column_count: int) -> None:
        """Give every column up to ``column_count`` a width; existing ones stay."""
        missing = column_count - len(self.widths)
        if missing > 0:
            self.widths.extend([self.default_width] * missing)

    def width(self, index: int) -> int:
        if 0 <= index < len(self.widths):
            return self.widths[index]
        return self.default_width

    def resize(self, index: int, delta: int) -> int:
        """Grow or shrink a column by ``delta``, never below the minimum."""
        if index < 0:
            msg = f"Invalid column index: {index}"
            raise IndexError(msg)
        self.ensure(index + 1)
        self.widths[index] = max(self.widths[index] + delta, self.min_width)
        get_logger("layout").debug(
            "column resized", index=index, width=self.widths[index]
        )
        return self.widths[index]

    def reset(self) -> None:
        self.widths = []
