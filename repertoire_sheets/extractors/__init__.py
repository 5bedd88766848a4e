from __future__ import annotations

from typing import Callable

from repertoire_sheets.classifier import SheetKind
from repertoire_sheets.extractors.members import extract_members
from repertoire_sheets.extractors.progressions import extract_progressions
from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.extractors.songs import extract_songs
from repertoire_sheets.extractors.tasks import extract_tasks
from repertoire_sheets.extractors.vocal_groups import extract_vocal_groups
from repertoire_sheets.extractors.vocal_range import extract_vocal_ranges
from repertoire_sheets.grid import Grid
from repertoire_sheets.models import RepertoireData

Extractor = Callable[[Grid, ExtractionContext, RepertoireData], RepertoireData]

EXTRACTORS: dict[SheetKind, Extractor] = {
    SheetKind.SONGS: extract_songs,
    SheetKind.PROGRESSIONS: extract_progressions,
    SheetKind.MEMBERS: extract_members,
    SheetKind.VOCAL_RANGE: extract_vocal_ranges,
    SheetKind.VOCAL_GROUPS: extract_vocal_groups,
    SheetKind.TASKS: extract_tasks,
}

__all__ = [
    "EXTRACTORS",
    "ExtractionContext",
    "Extractor",
    "extract_members",
    "extract_progressions",
    "extract_songs",
    "extract_tasks",
    "extract_vocal_groups",
    "extract_vocal_ranges",
]
