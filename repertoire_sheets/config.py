"""Shared constants and configuration loading for repertoire-sheets."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

from repertoire_sheets.errors import ConfigError

# Known singers. The song-sheet parser looks for the first word of each name
# inside "... Key" column headers.
SINGERS = [
    "Dorcas",
    "Harmony",
    "Jemima",
    "Jovany",
    "Maman Annie",
    "Nellia",
    "Voldie",
    "Ya Itie",
    "Raphael",
    "Joel",
    "Furah",
    "Irene",
]

SECTIONS = ["Entrée", "S-E", "Louange", "Adoration"]
REQUIRED_SHEETS = list(SECTIONS)
DEFAULT_SHEET_NAMES = SECTIONS + [
    "Progression Blank",
    "Report sheet",
    "Vocal Range",
    "Groupes vocal",
    "Taches",
]

HARMONY_PARTS = ["Soprano", "Alto 1", "Alto 2/Tenor", "Bass"]

DEFAULT_MEMBER_ROLE = "Membre"
SINGER_ROLE = "Chanteur·se"
MUSICIAN_ROLE = "Musicien·ne"
LANGUAGE_UNDEFINED = "—"

GOOGLE_SHEETS_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/export?format=csv&gid={gid}"
DEFAULT_TIMEOUT_SECONDS = 30.0

SINGERS_ENV = "REPERTOIRE_SHEETS_SINGERS"
TIMEOUT_ENV = "REPERTOIRE_SHEETS_TIMEOUT"

STARTER_SOURCES = {
    "spreadsheet_id": "",
    "gids": {name: "" for name in DEFAULT_SHEET_NAMES},
    "singers": [],
}


def configured_singers(environ: Mapping[str, str] | None = None) -> list[str]:
    env = os.environ if environ is None else environ
    raw = env.get(SINGERS_ENV, "")
    override = [name.strip() for name in raw.split(",") if name.strip()]
    return override or list(SINGERS)


def configured_timeout(environ: Mapping[str, str] | None = None) -> float:
    env = os.environ if environ is None else environ
    raw = env.get(TIMEOUT_ENV, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{TIMEOUT_ENV} must be positive, got {raw!r}")
    return value


def missing_required_sheets(gids: Mapping[str, str | None]) -> list[str]:
    return [name for name in REQUIRED_SHEETS if not str(gids.get(name) or "").strip()]


def load_sources_config(path: "str | Path") -> dict[str, Any]:
    """
    Read a JSON sources file describing a Google Sheets load.

    Expected shape:
        {"spreadsheet_id": "...", "gids": {"Entrée": "0", ...}, "singers": [...]}

    Returns a dict with keys spreadsheet_id, gids (name -> stripped gid or "")
    and singers (list, empty when not overridden).
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Sources config not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Could not read sources config: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError("Sources config root must be a JSON object.")

    spreadsheet_id = payload.get("spreadsheet_id")
    if not isinstance(spreadsheet_id, str) or not spreadsheet_id.strip():
        raise ConfigError("Sources config needs a non-empty 'spreadsheet_id' string.")

    gids = payload.get("gids", {})
    if not isinstance(gids, dict):
        raise ConfigError("'gids' must map sheet names to gid strings.")

    singers = payload.get("singers") or []
    if not isinstance(singers, list) or not all(isinstance(item, str) for item in singers):
        raise ConfigError("'singers' must be a list of names.")

    return {
        "spreadsheet_id": spreadsheet_id.strip(),
        "gids": {str(name): "" if gid is None else str(gid).strip() for name, gid in gids.items()},
        "singers": [name.strip() for name in singers if name.strip()],
    }
