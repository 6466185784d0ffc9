"""Responsive grid placement.

Widgets are placed row-major in list order. A widget that does not fit in the
columns left on the current row starts the next row; cells covered by a
taller widget above are skipped. The cursor never moves backwards.
"""

from __future__ import annotations

from typing import Sequence

from goaldash.config import settings
from goaldash.engine.models import GridPosition

# size hint -> (col_span, row_span)
SIZE_SPANS: dict[str, tuple[int, int]] = {
    "small": (1, 1),
    "medium": (2, 1),
    "large": (3, 2),
    "extra_large": (4, 3),
}


def span_for_size(size: str) -> tuple[int, int]:
    return SIZE_SPANS.get(size, SIZE_SPANS["medium"])


def breakpoint_columns() -> dict[str, int]:
    return dict(settings.breakpoint_columns)


def max_columns() -> int:
    return max(breakpoint_columns().values(), default=1)


def resolve_breakpoint(name: str | None = None) -> tuple[str, int]:
    """Return (breakpoint, columns). Unknown or missing names use the default."""
    columns = breakpoint_columns()
    if name in columns:
        return name, max(1, columns[name])
    default = settings.default_breakpoint
    if default in columns:
        return default, max(1, columns[default])
    # Misconfigured default: fall back to the widest breakpoint
    widest = max(columns, key=lambda k: columns[k]) if columns else "base"
    return widest, max(1, columns.get(widest, 1))


def place_widgets(spans: Sequence[tuple[int, int]], columns: int) -> list[GridPosition]:
    """Assign a GridPosition to each (col_span, row_span), in order.

    col_span is clamped to the column count; positions never overlap.
    """
    columns = max(1, columns)
    occupied: set[tuple[int, int]] = set()
    positions: list[GridPosition] = []
    row, col = 0, 0

    for col_span, row_span in spans:
        width = min(max(col_span, 1), columns)
        height = max(row_span, 1)

        while True:
            if col + width > columns:
                row += 1
                col = 0
                continue
            cells = [(r, c) for r in range(row, row + height) for c in range(col, col + width)]
            if any(cell in occupied for cell in cells):
                col += 1
                continue
            break

        occupied.update(cells)
        positions.append(GridPosition(row=row, col=col, row_span=height, col_span=width))
        col += width

    return positions
