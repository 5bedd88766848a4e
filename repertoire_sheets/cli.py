from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from repertoire_sheets import __version__ as TOOL_VERSION
from repertoire_sheets.config import STARTER_SOURCES, load_sources_config, missing_required_sheets
from repertoire_sheets.contracts import build_metrics, build_payload, read_payload
from repertoire_sheets.errors import ConfigError, EmptyRepertoireError, SheetFetchError
from repertoire_sheets.models import RepertoireData
from repertoire_sheets.pipeline import load_google_sheets, load_workbook

EXIT_SUCCESS = 0
EXIT_COMMAND_ERROR = 1
EXIT_PARSE_FAILED = 2
EXIT_EMPTY_REPERTOIRE = 3
EXIT_PARTIAL = 6

WORKBOOK_FORMATS = {".xlsx", ".xlsm", ".xls", ".ods"}


class CliError(Exception):
    def __init__(self, message: str, code: int = EXIT_COMMAND_ERROR) -> None:
        super().__init__(message)
        self.code = code


class RepertoireSheetsArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise CliError(message, EXIT_COMMAND_ERROR)


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def emit_human(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        eprint(message)


def json_dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)


def write_text(path: Path, payload: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")


def configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if getattr(args, "quiet", False):
        level = logging.ERROR
    elif getattr(args, "verbose", False):
        level = logging.INFO
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def classify_backend_exception(exc: Exception) -> int:
    if isinstance(exc, CliError):
        return exc.code
    if isinstance(exc, EmptyRepertoireError):
        return EXIT_EMPTY_REPERTOIRE
    if isinstance(exc, (ConfigError, FileNotFoundError)):
        return EXIT_COMMAND_ERROR
    if isinstance(exc, (ImportError, UnicodeDecodeError, SheetFetchError, ValueError)):
        return EXIT_PARSE_FAILED
    return EXIT_COMMAND_ERROR


def render_summary_text(data: RepertoireData, *, source: str, warnings: list[str] | None = None) -> str:
    metrics = build_metrics(data)
    lines = [
        "repertoire-sheets summary",
        f"Source: {source}",
        f"Songs: {metrics['songs']}",
    ]
    for section, count in metrics["songs_by_section"].items():
        lines.append(f"  {section}: {count}")
    lines.extend(
        [
            f"Members: {metrics['members']}",
            f"Progressions: {metrics['progressions']}",
            f"Vocal ranges: {metrics['vocal_ranges']}",
            f"Vocal group leads: {metrics['vocal_group_leads']}",
            f"Members with tasks: {metrics['task_members']}",
        ]
    )
    if warnings:
        lines.append("Warnings:")
        lines.extend(f"- {warning}" for warning in warnings)
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = RepertoireSheetsArgumentParser(
        prog="repertoire-sheets",
        description="Read a choir repertoire spreadsheet into structured JSON.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Parse a local workbook.")
    parse.add_argument("input", help="Workbook path (.xlsx, .xlsm, .xls, .ods)")
    parse.add_argument("-o", "--output", help="Write the JSON payload to this path")
    parse.add_argument("--json", action="store_true", help="Write the JSON payload to stdout")
    parse.add_argument("--no-complete", dest="complete", action="store_false", help="Do not add members found only in other sheets")
    parse.add_argument("-q", "--quiet", action="store_true", help="Minimal human logs")
    parse.add_argument("-v", "--verbose", action="store_true", help="More human logs")

    fetch = subparsers.add_parser("fetch", help="Fetch and parse published Google Sheets tabs.")
    fetch.add_argument("--config", required=True, help="JSON sources file (spreadsheet_id, gids, singers)")
    fetch.add_argument("-o", "--output", help="Write the JSON payload to this path")
    fetch.add_argument("--json", action="store_true", help="Write the JSON payload to stdout")
    fetch.add_argument("--no-complete", dest="complete", action="store_false", help="Do not add members found only in other sheets")
    fetch.add_argument("--strict", action="store_true", help="Return exit code 6 when a sheet could not be fetched")
    fetch.add_argument("-q", "--quiet", action="store_true", help="Minimal human logs")
    fetch.add_argument("-v", "--verbose", action="store_true", help="More human logs")

    summary = subparsers.add_parser("summary", help="Summarize a cached JSON payload.")
    summary.add_argument("input", help="Payload written by parse/fetch")
    summary.add_argument("--json", action="store_true", help="Write metrics as JSON to stdout")

    config = subparsers.add_parser("config", help="Generate configuration.")
    config_subparsers = config.add_subparsers(dest="config_command", required=True)
    config_init = config_subparsers.add_parser("init", help="Write a starter sources file.")
    config_init.add_argument("--path", default="sources.json", help="Sources file output path")

    subparsers.add_parser("version", help="Print version")
    return parser


def emit_payload(args: argparse.Namespace, result: dict[str, Any], *, source: str) -> None:
    data = result["data"]
    payload = build_payload(data, source=source, warnings=result["warnings"], skipped=result["skipped"])
    if args.output:
        write_text(Path(args.output), json_dumps(payload))
        emit_human(f"Payload written: {args.output}", quiet=args.quiet)
    if args.json:
        print(json_dumps(payload))
    else:
        emit_human(render_summary_text(data, source=source, warnings=result["warnings"]).rstrip(), quiet=args.quiet)


def run_parse(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        eprint(f"File not found: {input_path}")
        return EXIT_COMMAND_ERROR
    suffix = input_path.suffix.lower()
    if suffix not in WORKBOOK_FORMATS:
        eprint(f"Unsupported file type '{suffix or '[missing extension]'}'. Supported: {', '.join(sorted(WORKBOOK_FORMATS))}")
        return EXIT_COMMAND_ERROR

    try:
        result = load_workbook(input_path, complete=args.complete)
        emit_payload(args, result, source=str(input_path))
        return EXIT_SUCCESS
    except Exception as exc:
        eprint(str(exc))
        return classify_backend_exception(exc)


def run_fetch(args: argparse.Namespace) -> int:
    try:
        sources = load_sources_config(args.config)
        missing = missing_required_sheets(sources["gids"])
        if missing:
            raise CliError(f"Missing gid for required sheets: {', '.join(missing)}", EXIT_COMMAND_ERROR)
        result = load_google_sheets(
            sources["spreadsheet_id"],
            sources["gids"],
            singers=sources["singers"] or None,
            complete=args.complete,
        )
        emit_payload(args, result, source=f"google-sheets:{sources['spreadsheet_id']}")
        if result["skipped"] and args.strict:
            return EXIT_PARTIAL
        return EXIT_SUCCESS
    except Exception as exc:
        eprint(str(exc))
        return classify_backend_exception(exc)


def run_summary(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        eprint(f"File not found: {input_path}")
        return EXIT_COMMAND_ERROR
    try:
        data = read_payload(input_path.read_text(encoding="utf-8"))
    except Exception as exc:
        eprint(str(exc))
        return classify_backend_exception(exc)
    if args.json:
        print(json_dumps(build_metrics(data)))
    else:
        print(render_summary_text(data, source=str(input_path)).rstrip())
    return EXIT_SUCCESS


def run_config_init(args: argparse.Namespace) -> int:
    config_path = Path(args.path)
    if config_path.exists():
        eprint(f"Refusing to overwrite existing config: {config_path}")
        return EXIT_COMMAND_ERROR
    write_text(config_path, json.dumps(STARTER_SOURCES, indent=2, ensure_ascii=False) + "\n")
    emit_human(f"Config written: {config_path}")
    return EXIT_SUCCESS


def run_version() -> int:
    print(TOOL_VERSION)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        configure_logging(args)
        if args.command == "parse":
            return run_parse(args)
        if args.command == "fetch":
            return run_fetch(args)
        if args.command == "summary":
            return run_summary(args)
        if args.command == "config":
            if args.config_command == "init":
                return run_config_init(args)
        if args.command == "version":
            return run_version()
        raise CliError(f"Unknown command: {args.command}", EXIT_COMMAND_ERROR)
    except CliError as exc:
        eprint(str(exc))
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
