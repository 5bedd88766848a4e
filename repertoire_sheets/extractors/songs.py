"""
Song-section extractor (Entrée, S-E, Louange, Adoration).

Expected layout, tolerant of drift:
  - a group-header band ("VOCALS", "Musician: Keyboardist", ...) on row 0
  - the column-header row ("Songs: Original key", "Last sang", ...), found by
    scanning the first rows for a song/title marker in column A
  - one song per row below it
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from repertoire_sheets.config import LANGUAGE_UNDEFINED
from repertoire_sheets.extractors.shared import (
    ExtractionContext,
    is_affirmative,
    is_musician_mark,
    parse_leading_int,
    parse_sheet_date,
)
from repertoire_sheets.grid import Grid, cell, row_at
from repertoire_sheets.models import RepertoireData, Song
from repertoire_sheets.names import flatten_cell, first_word

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 6
DEFAULT_HEADER_ROW = 1
TITLE_MARKERS = ("song", "chanson", "titre")
INSTRUMENT_MARKERS = ("piano", "drum", "bass", "guitar")

PROGRESSION_MAX_COL = 10
MEMBER_KEY_COLS = range(7, 23)
MUSICIAN_MIN_COL = 19
MIN_TITLE_LENGTH = 2


@dataclass
class SongColumns:
    title: int = 0
    last_sang: int = -1
    days_past: int = -1
    creu_sommet: int = -1
    langue: int = -1
    lyrics: int = -1
    progression: int = -1
    member_keys: dict[str, int] = field(default_factory=dict)
    musicians: dict[str, int] = field(default_factory=dict)


def find_header_row(grid: Grid) -> int:
    for row_idx in range(min(len(grid), HEADER_SCAN_ROWS)):
        first = cell(grid, row_idx, 0).lower()
        if any(marker in first for marker in TITLE_MARKERS):
            return row_idx
    return DEFAULT_HEADER_ROW


def _roles_for_header(lowered: str, col_idx: int) -> list[str]:
    """Every role whose marker appears in the header; one cell can match several."""
    roles = []
    if "last" in lowered or ("sang" in lowered and col_idx < 5):
        roles.append("last_sang")
    if "days" in lowered or "past" in lowered:
        roles.append("days_past")
    if "creu" in lowered or "sommet" in lowered:
        roles.append("creu_sommet")
    if "langu" in lowered:
        roles.append("langue")
    if "lyrc" in lowered or "lyric" in lowered:
        roles.append("lyrics")
    if "progress" in lowered and col_idx < PROGRESSION_MAX_COL:
        roles.append("progression")
    return roles


def detect_columns(headers: Sequence[str], singers: Sequence[str]) -> SongColumns:
    """
    Assign column roles from header text.

    Each role goes to the first matching column. Column 0 is always the title.
    Member key columns are "... Key" headers in columns 7-22 naming a singer's
    first word; musician columns are instrument headers from column 19 on.
    """
    cols = SongColumns()

    for col_idx, header in enumerate(headers):
        if col_idx == 0:
            continue
        lowered = header.lower()

        for role in _roles_for_header(lowered, col_idx):
            if getattr(cols, role) < 0:
                setattr(cols, role, col_idx)

        if col_idx in MEMBER_KEY_COLS and "key" in lowered:
            for singer in singers:
                token = first_word(singer).lower()
                if token and token in lowered and singer not in cols.member_keys:
                    cols.member_keys[singer] = col_idx

        if col_idx >= MUSICIAN_MIN_COL and any(marker in lowered for marker in INSTRUMENT_MARKERS):
            parts = header.split()
            if len(parts) >= 2:
                cols.musicians.setdefault(f"{parts[0]} {parts[1]}", col_idx)

    return cols


def parse_title_key(raw: str) -> tuple[str, str]:
    """Split "Title: Key" on the last colon; no colon (or a leading one) means no key."""
    clean = flatten_cell(raw)
    colon_idx = clean.rfind(":")
    if colon_idx > 0:
        return clean[:colon_idx].strip(), clean[colon_idx + 1:].strip()
    return clean, ""


def _optional_text(row: Sequence[str], col_idx: int) -> str:
    if col_idx < 0 or col_idx >= len(row):
        return ""
    return str(row[col_idx] or "").strip()


def build_song(row: Sequence[str], row_idx: int, section: str, cols: SongColumns) -> Song | None:
    raw_title = _optional_text(row, cols.title)
    if len(raw_title) < MIN_TITLE_LENGTH:
        return None

    title, original_key = parse_title_key(raw_title)
    if len(title) < MIN_TITLE_LENGTH:
        return None

    member_keys: dict[str, str] = {}
    for member, col_idx in cols.member_keys.items():
        value = _optional_text(row, col_idx)
        if value and value not in ("0", "-"):
            member_keys[member] = value

    musicians = {
        key: True
        for key, col_idx in cols.musicians.items()
        if is_musician_mark(_optional_text(row, col_idx))
    }

    langue = _optional_text(row, cols.langue).upper() if cols.langue >= 0 else ""

    return Song(
        id=f"{section}_{row_idx}",
        title=title,
        section=section,
        original_key=original_key,
        last_sang=parse_sheet_date(_optional_text(row, cols.last_sang)) if cols.last_sang >= 0 else None,
        days_past=parse_leading_int(_optional_text(row, cols.days_past)) if cols.days_past >= 0 else None,
        creu_sommet=_optional_text(row, cols.creu_sommet),
        langue=langue or LANGUAGE_UNDEFINED,
        has_lyrics=cols.lyrics >= 0 and is_affirmative(_optional_text(row, cols.lyrics)),
        has_progression=cols.progression >= 0 and is_affirmative(_optional_text(row, cols.progression)),
        member_keys=member_keys,
        musicians=musicians,
    )


def extract_songs(grid: Grid, context: ExtractionContext, data: RepertoireData) -> RepertoireData:
    section = context.label or context.sheet_name
    header_idx = find_header_row(grid)
    if header_idx >= len(grid):
        logger.info("Sheet '%s': no header row, no songs recorded", context.sheet_name)
        return data

    headers = [flatten_cell(value) for value in row_at(grid, header_idx)]
    cols = detect_columns(headers, context.singers)

    added = 0
    for row_idx in range(header_idx + 1, len(grid)):
        song = build_song(row_at(grid, row_idx), row_idx, section, cols)
        if song is None:
            continue
        data.songs.append(song)
        added += 1

    logger.debug("Sheet '%s': %d songs", context.sheet_name, added)
    return data
