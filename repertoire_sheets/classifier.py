from __future__ import annotations

import enum
from typing import NamedTuple, Optional

from repertoire_sheets.names import normalize_label


class SheetKind(enum.Enum):
    SONGS = "songs"
    PROGRESSIONS = "progressions"
    MEMBERS = "members"
    VOCAL_RANGE = "vocal_range"
    VOCAL_GROUPS = "vocal_groups"
    TASKS = "tasks"


class SheetMatch(NamedTuple):
    kind: SheetKind
    label: str


# Keys are normalized sheet names (accents stripped, lowercase, single spaces).
SHEET_TABLE: dict[str, SheetMatch] = {
    "entree": SheetMatch(SheetKind.SONGS, "Entrée"),
    "s-e": SheetMatch(SheetKind.SONGS, "S-E"),
    "se": SheetMatch(SheetKind.SONGS, "S-E"),
    "louange": SheetMatch(SheetKind.SONGS, "Louange"),
    "adoration": SheetMatch(SheetKind.SONGS, "Adoration"),
    "progression blank": SheetMatch(SheetKind.PROGRESSIONS, "Progression Blank"),
    "progressions": SheetMatch(SheetKind.PROGRESSIONS, "Progression Blank"),
    "report sheet": SheetMatch(SheetKind.MEMBERS, "Report sheet"),
    "membres": SheetMatch(SheetKind.MEMBERS, "Report sheet"),
    "members": SheetMatch(SheetKind.MEMBERS, "Report sheet"),
    "vocal range": SheetMatch(SheetKind.VOCAL_RANGE, "Vocal Range"),
    "tessiture": SheetMatch(SheetKind.VOCAL_RANGE, "Vocal Range"),
    "groupes vocal": SheetMatch(SheetKind.VOCAL_GROUPS, "Groupes vocal"),
    "groupes vocaux": SheetMatch(SheetKind.VOCAL_GROUPS, "Groupes vocal"),
    "vocal groups": SheetMatch(SheetKind.VOCAL_GROUPS, "Groupes vocal"),
    "taches": SheetMatch(SheetKind.TASKS, "Taches"),
    "tasks": SheetMatch(SheetKind.TASKS, "Taches"),
}


def classify_sheet(name: str) -> Optional[SheetMatch]:
    """Map a sheet display name to its kind; None means the sheet is ignored."""
    return SHEET_TABLE.get(normalize_label(name))
