"""
Vocal-range extractor.

Two layouts exist for this sheet:

  anchored: a "Voice type" label cell; the member-name row is the row just
            above it (within 6 rows) holding the most name-like cells right
            of the label column, and the four metric rows are found by
            their labels.
  fixed:    names on row 9 (from column D), voice types row 11, then
            low chest / high chest / head voice / prima voce on rows
            14 / 16 / 18 / 20.

The anchored layout is used whenever its label row exists. The fixed layout is
only trusted when its name row really looks like one.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional, Sequence

from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.grid import Grid, cell, find_cell, find_row, row_at
from repertoire_sheets.models import RepertoireData, VocalRange
from repertoire_sheets.names import compact_label, flatten_cell, normalize_label, strip_accents

logger = logging.getLogger(__name__)

NAME_ROW_SEARCH_DEPTH = 6
MIN_NAME_SCORE = 2

VOICE_TYPE_TOKENS = (("voice", "type"), ("voix", "type"))
METRIC_MARKERS = {
    "low_chest": "lowchest",
    "high_chest": "highchest",
    "head_voice": "headvoice",
    "prima_voce": "primavoce",
}

NAME_RE = re.compile(r"^[A-Za-z]+(?:['’\- ]+[A-Za-z]+)*$")
NON_NAME_LABELS = {
    "soprano",
    "mezzo",
    "mezzo soprano",
    "alto",
    "contralto",
    "tenor",
    "tenors",
    "baritone",
    "bariton",
    "bass",
    "basse",
    "voice type",
    "voice",
    "type",
    "type de voix",
    "low chest",
    "high chest",
    "head voice",
    "prima voce",
    "name",
    "names",
    "nom",
    "noms",
    "member",
    "members",
    "membre",
    "membres",
    "range",
    "vocal range",
    "tessiture",
    "notes",
    "note",
    "lead",
    "total",
}

FIXED_NAME_ROW = 9
FIXED_TYPE_ROW = 11
FIXED_METRIC_ROWS = {"low_chest": 14, "high_chest": 16, "head_voice": 18, "prima_voce": 20}
FIXED_FIRST_NAME_COL = 3


class RangeLayout(NamedTuple):
    name_row: int
    type_row: int
    metric_rows: dict[str, Optional[int]]
    first_col: int


def looks_like_name(value: str) -> bool:
    text = flatten_cell(value)
    if len(text) < 2:
        return False
    if normalize_label(text) in NON_NAME_LABELS:
        return False
    return bool(NAME_RE.match(strip_accents(text)))


def name_score(row: Sequence[str]) -> int:
    return sum(1 for value in row if looks_like_name(str(value or "")))


def _is_voice_type_label(text: str) -> bool:
    label = normalize_label(text)
    return any(all(token in label for token in tokens) for tokens in VOICE_TYPE_TOKENS)


def find_metric_row(grid: Grid, marker: str, after_row: int) -> Optional[int]:
    def matches(text: str) -> bool:
        return marker in compact_label(text)

    found = find_row(grid, matches, start_row=after_row + 1)
    if found is None:
        found = find_row(grid, matches)
    return found


def locate_anchored_layout(grid: Grid) -> Optional[RangeLayout]:
    anchor = find_cell(grid, _is_voice_type_label)
    if anchor is None:
        return None
    type_row = anchor.row
    # Names sit right of the label column; labels like "Singers" are not members.
    first_col = anchor.col + 1

    best_row: Optional[int] = None
    best_score = 0
    for row_idx in range(type_row - 1, max(type_row - NAME_ROW_SEARCH_DEPTH, 0) - 1, -1):
        score = name_score(list(row_at(grid, row_idx))[first_col:])
        if score > best_score:
            best_row, best_score = row_idx, score

    if best_row is None or best_score < MIN_NAME_SCORE:
        logger.info("Vocal range: no member-name row above the voice-type row %d", type_row)
        return None

    metric_rows = {field: find_metric_row(grid, marker, type_row) for field, marker in METRIC_MARKERS.items()}
    return RangeLayout(best_row, type_row, metric_rows, first_col=first_col)


def locate_fixed_layout(grid: Grid) -> Optional[RangeLayout]:
    names = list(row_at(grid, FIXED_NAME_ROW))[FIXED_FIRST_NAME_COL:]
    if name_score(names) < MIN_NAME_SCORE:
        return None
    return RangeLayout(FIXED_NAME_ROW, FIXED_TYPE_ROW, dict(FIXED_METRIC_ROWS), FIXED_FIRST_NAME_COL)


def select_layout(grid: Grid) -> Optional[RangeLayout]:
    if find_row(grid, _is_voice_type_label) is not None:
        return locate_anchored_layout(grid)
    return locate_fixed_layout(grid)


def _metric(grid: Grid, row_idx: Optional[int], col_idx: int) -> str:
    if row_idx is None:
        return ""
    return flatten_cell(cell(grid, row_idx, col_idx))


def extract_vocal_ranges(grid: Grid, context: ExtractionContext, data: RepertoireData) -> RepertoireData:
    layout = select_layout(grid)
    if layout is None:
        logger.info("Sheet '%s': vocal range layout not recognised, skipped", context.sheet_name)
        return data

    name_row = row_at(grid, layout.name_row)
    recorded = 0
    for col_idx in range(layout.first_col, len(name_row)):
        raw_name = flatten_cell(name_row[col_idx])
        if not looks_like_name(raw_name):
            continue

        vocal_range = VocalRange(
            voice_type=_metric(grid, layout.type_row, col_idx),
            low_chest=_metric(grid, layout.metric_rows.get("low_chest"), col_idx),
            high_chest=_metric(grid, layout.metric_rows.get("high_chest"), col_idx),
            head_voice=_metric(grid, layout.metric_rows.get("head_voice"), col_idx),
            prima_voce=_metric(grid, layout.metric_rows.get("prima_voce"), col_idx),
        )
        if vocal_range.is_empty():
            continue
        data.vocal_ranges[raw_name] = vocal_range
        recorded += 1

    logger.debug("Sheet '%s': %d vocal ranges", context.sheet_name, recorded)
    return data
