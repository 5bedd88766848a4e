"""
Vocal-groups extractor ("Groupes vocal").

    Lead          | Jemima        | Dorcas          | ...
    Soprano       | Nellia, Irene | Jemima          | ...
    Alto 1        | ...
    Alto 2/Tenor  | ...
    Bass          | ...

The "Lead" cell fixes both the label column and the lead row. The first
entirely blank row below it ends the block.
"""

from __future__ import annotations

import logging
from typing import Optional

from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.grid import Grid, find_cell, is_blank_row, row_at
from repertoire_sheets.models import RepertoireData, empty_harmony_parts
from repertoire_sheets.names import compact_label

logger = logging.getLogger(__name__)

LEAD_LABEL = "lead"


def classify_part(label: str) -> Optional[str]:
    text = compact_label(label)
    if not text:
        return None
    if "sopran" in text:
        return "Soprano"
    if "alto2" in text or "tenor" in text:
        return "Alto 2/Tenor"
    if "alto1" in text:
        return "Alto 1"
    if "bass" in text:
        return "Bass"
    return None


def split_names(raw: str) -> list[str]:
    text = (raw or "").strip()
    if text.endswith(","):
        text = text[:-1]
    return [token.strip() for token in text.split(",") if token.strip()]


def extract_vocal_groups(grid: Grid, context: ExtractionContext, data: RepertoireData) -> RepertoireData:
    anchor = find_cell(grid, lambda text: text.strip().lower() == LEAD_LABEL)
    if anchor is None:
        logger.info("Sheet '%s': no 'Lead' row, vocal groups skipped", context.sheet_name)
        return data

    lead_row = row_at(grid, anchor.row)
    lead_cols: dict[int, str] = {}
    for col_idx in range(anchor.col + 1, len(lead_row)):
        lead = str(lead_row[col_idx] or "").strip()
        if not lead or lead.lower() == LEAD_LABEL:
            continue
        lead_cols[col_idx] = lead
        data.vocal_groups[lead] = empty_harmony_parts()

    for row_idx in range(anchor.row + 1, len(grid)):
        row = row_at(grid, row_idx)
        if is_blank_row(row):
            break

        label = str(row[anchor.col] or "") if anchor.col < len(row) else ""
        part = classify_part(label)
        if part is None:
            continue

        for col_idx, lead in lead_cols.items():
            value = str(row[col_idx] or "") if col_idx < len(row) else ""
            data.vocal_groups[lead][part] = split_names(value)

    logger.debug("Sheet '%s': %d leads", context.sheet_name, len(lead_cols))
    return data
