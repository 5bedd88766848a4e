"""
Chord-progression extractor.

Column A holds a song title, column B one progression line. Rows with an
empty column A continue the song above.
"""

from __future__ import annotations

import logging
from typing import Optional

from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.grid import Grid, cell
from repertoire_sheets.models import RepertoireData
from repertoire_sheets.names import flatten_cell

logger = logging.getLogger(__name__)

HEADER_TOKEN = "titles"


def progression_key(raw_title: str) -> str:
    title = raw_title.strip()
    if title.endswith(":"):
        title = title[:-1]
    return flatten_cell(title).lower()


def extract_progressions(grid: Grid, context: ExtractionContext, data: RepertoireData) -> RepertoireData:
    current_title: Optional[str] = None
    current_lines: list[str] = []
    stored = 0

    def commit() -> None:
        nonlocal stored
        if current_title and current_lines:
            data.progressions[current_title] = "\n".join(current_lines)
            stored += 1

    for row_idx in range(len(grid)):
        raw_title = cell(grid, row_idx, 0).strip()
        line = cell(grid, row_idx, 1).strip()

        if raw_title and raw_title.lower() != HEADER_TOKEN:
            commit()
            current_title = progression_key(raw_title)
            current_lines = [line] if line else []
        elif line:
            current_lines.append(line)

    commit()
    logger.debug("Sheet '%s': %d progressions", context.sheet_name, stored)
    return data
