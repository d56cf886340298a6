"""Minimal left-aligned text table."""
from __future__ import annotations

import sys
from typing import Any, TextIO


class Table:
    """Collects rows of display values and renders them as aligned columns.

    Headers are upper-cased. Cells are converted with ``str()``.
    """

    column_gap = "  "

    def __init__(self, *headers: str) -> None:
        self.headers = tuple(h.upper() for h in headers)
        self.rows: list[tuple[str, ...]] = []

    def add_row(self, *values: Any) -> None:
        if len(values) != len(self.headers):
            raise ValueError(
                f"expected {len(self.headers)} values, got {len(values)}"
            )
        self.rows.append(tuple("" if v is None else str(v) for v in values))

    def __len__(self) -> int:
        return len(self.rows)

    def render(self) -> str:
        widths = [len(h) for h in self.headers]
        for row in self.rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))

        def _line(cells: tuple[str, ...]) -> str:
            return self.column_gap.join(
                cell.ljust(widths[i]) for i, cell in enumerate(cells)
            ).rstrip()

        lines = [_line(self.headers)]
        lines.extend(_line(row) for row in self.rows)
        return "\n".join(lines) + "\n"

    def print(self, file: TextIO | None = None) -> None:
        (file or sys.stdout).write(self.render())
