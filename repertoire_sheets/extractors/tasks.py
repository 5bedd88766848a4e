from __future__ import annotations

import logging

from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.grid import Grid, cell, row_at
from repertoire_sheets.models import RepertoireData

logger = logging.getLogger(__name__)

HEADER_ROW = 2
FIRST_MEMBER_COL = 2
TASK_NAME_COL = 1
DONE_MARK = "x"


def extract_tasks(grid: Grid, context: ExtractionContext, data: RepertoireData) -> RepertoireData:
    """
    Row 2 lists members from column C on; rows 3+ hold a task name in column B
    and an "x" under every member responsible for it.
    """
    header = row_at(grid, HEADER_ROW)
    member_cols: list[tuple[str, int]] = []
    for col_idx in range(FIRST_MEMBER_COL, len(header)):
        name = str(header[col_idx] or "").strip()
        if name:
            member_cols.append((name, col_idx))
            data.tasks.setdefault(name, [])

    for row_idx in range(HEADER_ROW + 1, len(grid)):
        task_name = cell(grid, row_idx, TASK_NAME_COL).strip()
        if not task_name:
            continue
        for name, col_idx in member_cols:
            if cell(grid, row_idx, col_idx).strip().lower() == DONE_MARK:
                data.tasks[name].append(task_name)

    logger.debug("Sheet '%s': tasks for %d members", context.sheet_name, len(member_cols))
    return data
