"""
Grid helpers and anchor locators.

A grid is a list of rows, each a list of string cells ("" for blank).
Locators return None when the anchor is not present; extractors return
early on None instead of raising.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence

Grid = Sequence[Sequence[str]]
CellPredicate = Callable[[str], bool]


class Anchor(NamedTuple):
    row: int
    col: int


def cell(grid: Grid, row_idx: int, col_idx: int) -> str:
    if row_idx < 0 or row_idx >= len(grid):
        return ""
    row = grid[row_idx]
    if col_idx < 0 or col_idx >= len(row):
        return ""
    value = row[col_idx]
    return "" if value is None else str(value)


def row_at(grid: Grid, row_idx: int) -> Sequence[str]:
    if 0 <= row_idx < len(grid):
        return grid[row_idx] or []
    return []


def is_blank_row(row: Sequence[str]) -> bool:
    return not any(str(value or "").strip() for value in row)


def rectangular(rows: Sequence[Sequence[object]]) -> list[list[str]]:
    """Copy rows as strings, padding every row to the widest one."""
    width = max((len(row) for row in rows), default=0)
    grid: list[list[str]] = []
    for row in rows:
        cells = ["" if value is None else str(value) for value in row]
        cells.extend([""] * (width - len(cells)))
        grid.append(cells)
    return grid


def find_in_row(row: Sequence[str], predicate: CellPredicate, start: int = 0) -> Optional[int]:
    for col_idx in range(max(start, 0), len(row)):
        if predicate(str(row[col_idx] or "")):
            return col_idx
    return None


def find_cell(
    grid: Grid,
    predicate: CellPredicate,
    *,
    start_row: int = 0,
    stop_row: Optional[int] = None,
) -> Optional[Anchor]:
    """First cell, scanning row by row, whose text satisfies predicate."""
    stop = len(grid) if stop_row is None else min(stop_row, len(grid))
    for row_idx in range(max(start_row, 0), stop):
        col_idx = find_in_row(row_at(grid, row_idx), predicate)
        if col_idx is not None:
            return Anchor(row_idx, col_idx)
    return None


def find_row(
    grid: Grid,
    predicate: CellPredicate,
    *,
    start_row: int = 0,
    stop_row: Optional[int] = None,
) -> Optional[int]:
    anchor = find_cell(grid, predicate, start_row=start_row, stop_row=stop_row)
    return anchor.row if anchor else None
