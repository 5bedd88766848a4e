"""
loader.py — Turn workbooks and CSV payloads into named string grids

Supports: .xlsx .xlsm (openpyxl), .xls .ods (pandas), CSV text or bytes

Public API:
    sheets = read_workbook("repertoire.xlsx")      # [(sheet name, grid), ...]
    sheets = read_workbook(raw_bytes)
    grid   = read_csv_payload(raw_bytes_or_text)

Every cell comes back as a string ("" for blank) and every grid is
rectangular. Dates are rendered as YYYY-MM-DD so the extractors never see
Excel serial numbers.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, time
from pathlib import Path
from typing import BinaryIO, Optional, Union

import chardet
import openpyxl
import pandas as pd

from repertoire_sheets.grid import rectangular

OPENPYXL_FORMATS = {".xlsx", ".xlsm"}
PANDAS_FORMATS = {".xls", ".ods"}
ALL_FORMATS = OPENPYXL_FORMATS | PANDAS_FORMATS

WorkbookSource = Union[str, Path, bytes, bytearray, BinaryIO]
NamedGrid = tuple[str, list[list[str]]]


# ══════════════════════════════════════════════════════════════════════════════
# CELL RENDERING
# ══════════════════════════════════════════════════════════════════════════════

def cell_to_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, float):
        if value != value:
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


# ══════════════════════════════════════════════════════════════════════════════
# ENCODING DETECTION
# ══════════════════════════════════════════════════════════════════════════════

def _detect_encoding(raw: bytes) -> str:
    result = chardet.detect(raw)
    return result.get("encoding") or "utf-8"


def decode_payload(raw: bytes) -> str:
    """
    Decode raw bytes line-by-line.

    Strategy per line:
      1. Try UTF-8
      2. Try the chardet guess
      3. Try latin-1
      4. CP1252 with replace (never crashes)

    Null bytes and a leading BOM are removed.
    """
    preferred = _detect_encoding(raw)
    decoded_lines: list[str] = []
    for raw_line in raw.split(b"\n"):
        decoded: Optional[str] = None
        for enc in ("utf-8", preferred, "latin-1"):
            try:
                decoded = raw_line.decode(enc)
                break
            except (LookupError, UnicodeDecodeError):
                continue
        if decoded is None:
            decoded = raw_line.decode("cp1252", errors="replace")
        decoded_lines.append(decoded.replace("\x00", ""))
    return "\n".join(decoded_lines).lstrip("\ufeff")


# ══════════════════════════════════════════════════════════════════════════════
# CSV ADAPTER
# ══════════════════════════════════════════════════════════════════════════════

def parse_csv_text(text: str) -> list[list[str]]:
    """
    Parse CSV text into a grid.

    Blank lines stay as (empty) rows and trailing empty fields are kept, so
    row and column indices match the sheet they were exported from.
    """
    rows = list(csv.reader(io.StringIO(text, newline="")))
    return rectangular(rows)


def read_csv_payload(payload: "str | bytes") -> list[list[str]]:
    text = decode_payload(payload) if isinstance(payload, (bytes, bytearray)) else payload
    return parse_csv_text(text)


# ══════════════════════════════════════════════════════════════════════════════
# WORKBOOK ADAPTER
# ══════════════════════════════════════════════════════════════════════════════

def _read_openpyxl_sheets(source: "Path | BinaryIO") -> list[NamedGrid]:
    try:
        workbook = openpyxl.load_workbook(source, read_only=True, data_only=True)
    except Exception as exc:
        raise ValueError(f"Could not open workbook: {exc}") from exc

    try:
        sheets: list[NamedGrid] = []
        for name in workbook.sheetnames:
            sheet = workbook[name]
            if not hasattr(sheet, "iter_rows"):
                # chartsheets carry no cells
                continue
            rows = [
                [cell_to_text(value) for value in values]
                for values in sheet.iter_rows(values_only=True)
            ]
            sheets.append((name, rectangular(rows)))
        return sheets
    finally:
        workbook.close()


def _read_pandas_sheets(path: Path, suffix: str) -> list[NamedGrid]:
    engine = None
    if suffix == ".xls":
        try:
            import xlrd  # noqa: F401
        except ImportError:
            raise ImportError(".xls files require xlrd — run: pip install xlrd")
    else:
        try:
            import odf  # noqa: F401
        except ImportError:
            raise ImportError(".ods files require odfpy — run: pip install odfpy")
        engine = "odf"

    try:
        frames = pd.read_excel(path, sheet_name=None, header=None, dtype=object, engine=engine)
    except Exception as exc:
        raise ValueError(f"Could not open workbook: {exc}") from exc

    sheets: list[NamedGrid] = []
    for name, df in frames.items():
        rows = [
            [cell_to_text(None if pd.isna(value) else value) for value in row]
            for row in df.itertuples(index=False, name=None)
        ]
        sheets.append((str(name), rectangular(rows)))
    return sheets


def read_workbook(source: WorkbookSource) -> list[NamedGrid]:
    """
    Read every sheet of a workbook into (sheet name, grid) pairs, in
    workbook order.

    Args:
        source: a path (.xlsx/.xlsm/.xls/.ods), raw .xlsx bytes, or a binary
                file object positioned at the start of an .xlsx payload.

    Raises:
        FileNotFoundError  if a path does not exist.
        ValueError         if the format is unsupported or unreadable.
        ImportError        if xlrd/odfpy is needed but missing.
    """
    if isinstance(source, (bytes, bytearray)):
        return _read_openpyxl_sheets(io.BytesIO(bytes(source)))
    if not isinstance(source, (str, Path)):
        return _read_openpyxl_sheets(source)

    path = Path(source)
    suffix = path.suffix.lower()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if suffix not in ALL_FORMATS:
        supported = ", ".join(sorted(ALL_FORMATS))
        raise ValueError(f"Unsupported format '{suffix}'. Supported: {supported}")

    if suffix in OPENPYXL_FORMATS:
        return _read_openpyxl_sheets(path)
    return _read_pandas_sheets(path, suffix)
