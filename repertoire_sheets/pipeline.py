"""
pipeline.py — Classify sheets, dispatch them to extractors, accumulate

Public API:
    result = load_workbook("repertoire.xlsx")
    result = load_google_sheets(spreadsheet_id, {"Entrée": "0", ...})
    data   = result["data"]        # RepertoireData

Result dict keys:
    data       : RepertoireData (always present, collections never None)
    processed  : [(sheet name, kind value)] in processing order
    ignored    : sheet names that matched no known sheet kind
    skipped    : sheet names whose payload could not be fetched
    warnings   : list of warning strings (also logged)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

import requests

from repertoire_sheets.classifier import SheetMatch, classify_sheet
from repertoire_sheets.config import configured_singers
from repertoire_sheets.errors import EmptyRepertoireError, SheetFetchError
from repertoire_sheets.extractors import EXTRACTORS, ExtractionContext
from repertoire_sheets.grid import Grid
from repertoire_sheets.loader import WorkbookSource, read_csv_payload, read_workbook
from repertoire_sheets.models import RepertoireData
from repertoire_sheets.roster import complete_members
from repertoire_sheets.sheets_client import GoogleSheetsClient

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], Union[str, bytes]]
FETCH_ERRORS = (SheetFetchError, requests.RequestException, OSError)


def _new_result(data: Optional[RepertoireData] = None) -> dict[str, Any]:
    return {
        "data": data if data is not None else RepertoireData(),
        "processed": [],
        "ignored": [],
        "skipped": [],
        "warnings": [],
    }


def process_sheet(
    name: str,
    grid: Grid,
    data: RepertoireData,
    *,
    singers: Optional[Sequence[str]] = None,
) -> Optional[SheetMatch]:
    """Run the matching extractor over one sheet; None when the sheet is not recognised."""
    match = classify_sheet(name)
    if match is None:
        logger.debug("Ignoring sheet '%s'", name)
        return None

    context = ExtractionContext(
        sheet_name=name,
        label=match.label,
        singers=list(singers) if singers is not None else configured_singers(),
    )
    EXTRACTORS[match.kind](grid, context, data)
    return match


def parse_sheets(
    sheets: Iterable[tuple[str, Grid]],
    *,
    singers: Optional[Sequence[str]] = None,
    data: Optional[RepertoireData] = None,
) -> dict[str, Any]:
    result = _new_result(data)
    singer_list = list(singers) if singers is not None else configured_singers()
    for name, grid in sheets:
        match = process_sheet(name, grid, result["data"], singers=singer_list)
        if match is None:
            result["ignored"].append(name)
        else:
            result["processed"].append((name, match.kind.value))
    return result


def ensure_songs(result: dict[str, Any], source: str) -> None:
    if not result["data"].songs:
        raise EmptyRepertoireError(
            f"No songs found in {source}. Check the sheet names (Entrée, S-E, Louange, Adoration)."
        )


def _finish(
    result: dict[str, Any],
    *,
    source: str,
    singers: Sequence[str],
    complete: bool,
    require_songs: bool,
) -> dict[str, Any]:
    if require_songs:
        ensure_songs(result, source)
    if complete:
        complete_members(result["data"], singers)
    data = result["data"]
    logger.info(
        "Loaded %d songs, %d members from %s",
        len(data.songs),
        len(data.members),
        source,
    )
    return result


def load_workbook(
    source: WorkbookSource,
    *,
    singers: Optional[Sequence[str]] = None,
    complete: bool = True,
    require_songs: bool = True,
) -> dict[str, Any]:
    """
    Load every recognised sheet of a workbook.

    Raises:
        EmptyRepertoireError  if no song was recorded and require_songs is set.
        ValueError / ImportError / FileNotFoundError from the workbook reader.
    """
    singer_list = list(singers) if singers is not None else configured_singers()
    result = parse_sheets(read_workbook(source), singers=singer_list)
    label = str(source) if not isinstance(source, (bytes, bytearray)) else "workbook"
    return _finish(result, source=label, singers=singer_list, complete=complete, require_songs=require_songs)


def load_csv_sheets(
    sources: Mapping[str, Optional[str]],
    fetch: FetchFn,
    *,
    singers: Optional[Sequence[str]] = None,
    complete: bool = True,
    require_songs: bool = True,
) -> dict[str, Any]:
    """
    Load CSV payloads sheet by sheet.

    Args:
        sources: sheet display name -> identifier handed to fetch. A blank
                 identifier means the optional sheet is not configured.
        fetch:   returns the CSV text (or bytes) for an identifier. Fetches run
                 one after another; a failing fetch only skips its sheet.
    """
    singer_list = list(singers) if singers is not None else configured_singers()
    result = _new_result()

    for name, identifier in sources.items():
        if not str(identifier or "").strip():
            continue
        if classify_sheet(name) is None:
            logger.debug("Ignoring sheet '%s'", name)
            result["ignored"].append(name)
            continue

        try:
            payload = fetch(str(identifier).strip())
        except FETCH_ERRORS as exc:
            message = f"Could not load sheet '{name}' ({identifier}): {exc}"
            logger.warning("%s", message)
            result["warnings"].append(message)
            result["skipped"].append(name)
            continue

        match = process_sheet(name, read_csv_payload(payload), result["data"], singers=singer_list)
        if match is not None:
            result["processed"].append((name, match.kind.value))

    return _finish(
        result,
        source="CSV sheets",
        singers=singer_list,
        complete=complete,
        require_songs=require_songs,
    )


def load_google_sheets(
    spreadsheet_id: str,
    gids: Mapping[str, Optional[str]],
    *,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    singers: Optional[Sequence[str]] = None,
    complete: bool = True,
    require_songs: bool = True,
) -> dict[str, Any]:
    client = GoogleSheetsClient(spreadsheet_id, session=session, timeout=timeout)
    return load_csv_sheets(
        gids,
        client,
        singers=singers,
        complete=complete,
        require_songs=require_songs,
    )
