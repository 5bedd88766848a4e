"""Parse choir repertoire spreadsheets into typed records."""

__version__ = "0.1.0"

from repertoire_sheets.classifier import SheetKind, classify_sheet  # noqa: E402
from repertoire_sheets.errors import (  # noqa: E402
    ConfigError,
    EmptyRepertoireError,
    RepertoireError,
    SheetFetchError,
)
from repertoire_sheets.models import Member, RepertoireData, Song, VocalRange  # noqa: E402
from repertoire_sheets.pipeline import (  # noqa: E402
    load_csv_sheets,
    load_google_sheets,
    load_workbook,
    parse_sheets,
)

__all__ = [
    "ConfigError",
    "EmptyRepertoireError",
    "Member",
    "RepertoireData",
    "RepertoireError",
    "SheetFetchError",
    "SheetKind",
    "Song",
    "VocalRange",
    "classify_sheet",
    "load_csv_sheets",
    "load_google_sheets",
    "load_workbook",
    "parse_sheets",
]
