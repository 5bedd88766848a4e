"""
Member-roster extractor ("Report sheet").

The roster block is found through its "Member" header cell; older sheets
without one use the fixed layout (header on row 1, name in A, role in B).
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from repertoire_sheets.config import DEFAULT_MEMBER_ROLE
from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.grid import Grid, cell, find_in_row, row_at
from repertoire_sheets.models import Member, RepertoireData
from repertoire_sheets.names import flatten_cell, normalize_person_name

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 20
HEADER_NAME_RE = re.compile(r"member", re.IGNORECASE)
HEADER_ROLE_RE = re.compile(r"group|function|type|role", re.IGNORECASE)
VALID_ROLE_RE = re.compile(r"singer|musician|member|membre|chanteu|musicien", re.IGNORECASE)
INVALID_NAME_RE = re.compile(
    r"^(total|opening|entry|entree|entrée|song|songs|praise|worship|language|chart)$",
    re.IGNORECASE,
)
NUMERIC_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?$", re.IGNORECASE)


class RosterLayout(NamedTuple):
    header_row: int
    name_col: int
    role_col: int


LEGACY_LAYOUT = RosterLayout(header_row=1, name_col=0, role_col=1)


def locate_roster(grid: Grid) -> RosterLayout | None:
    for row_idx in range(min(len(grid), HEADER_SCAN_ROWS)):
        row = row_at(grid, row_idx)
        name_col = find_in_row(row, lambda text: bool(HEADER_NAME_RE.search(text)))
        if name_col is None:
            continue
        role_col = find_in_row(row, lambda text: bool(HEADER_ROLE_RE.search(text)))
        return RosterLayout(row_idx, name_col, role_col if role_col is not None else name_col + 1)
    return None


def _is_candidate_name(name: str, role: str) -> bool:
    if HEADER_NAME_RE.search(name):
        return False
    if NUMERIC_RE.match(name):
        return False
    if INVALID_NAME_RE.match(name):
        return False
    if role and not VALID_ROLE_RE.search(role):
        return False
    return True


def extract_members(grid: Grid, context: ExtractionContext, data: RepertoireData) -> RepertoireData:
    layout = locate_roster(grid)
    if layout is None:
        logger.info("Sheet '%s': no member header, using the fixed A/B layout", context.sheet_name)
        layout = LEGACY_LAYOUT

    seen = {normalize_person_name(member.name) for member in data.members}
    started = False
    added = 0

    for row_idx in range(layout.header_row + 1, len(grid)):
        name = flatten_cell(cell(grid, row_idx, layout.name_col))
        role = flatten_cell(cell(grid, row_idx, layout.role_col))

        if started and not name and not role:
            break
        if not name:
            continue
        started = True

        if not _is_candidate_name(name, role):
            continue

        key = normalize_person_name(name)
        if key in seen:
            continue
        seen.add(key)
        data.members.append(Member(name=name, role=role or DEFAULT_MEMBER_ROLE))
        added += 1

    logger.debug("Sheet '%s': %d members", context.sheet_name, added)
    return data
