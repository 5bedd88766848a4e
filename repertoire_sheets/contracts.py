"""Versioned contract for the repertoire payload written by the CLI and caches."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from repertoire_sheets import __version__ as TOOL_VERSION
from repertoire_sheets.errors import EmptyRepertoireError
from repertoire_sheets.models import RepertoireData

CONTRACT_VERSIONS = {
    "repertoire_sheets.repertoire": "1.0.0",
}
REPERTOIRE_CONTRACT = "repertoire_sheets.repertoire"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def build_contract(name: str) -> dict[str, str]:
    version = CONTRACT_VERSIONS[name]
    return {"name": name, "version": version}


def build_metrics(data: RepertoireData) -> dict[str, Any]:
    return {
        "songs": len(data.songs),
        "songs_by_section": {section: len(songs) for section, songs in data.songs_by_section().items()},
        "members": len(data.members),
        "progressions": len(data.progressions),
        "vocal_ranges": len(data.vocal_ranges),
        "vocal_group_leads": len(data.vocal_groups),
        "task_members": len(data.tasks),
    }


def build_run_summary(
    *,
    source: str,
    data: RepertoireData,
    status: str = "ok",
    warnings: list[str] | None = None,
    skipped: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "tool": "repertoire-sheets",
        "status": status,
        "generated_at": utc_now_iso(),
        "source": source,
        "warnings_count": len(warnings or []),
        "warnings": list(warnings or []),
        "skipped_sheets": list(skipped or []),
        "metrics": build_metrics(data),
    }


def build_payload(data: RepertoireData, *, source: str, warnings: list[str] | None = None,
                  skipped: list[str] | None = None) -> dict[str, Any]:
    contract = build_contract(REPERTOIRE_CONTRACT)
    return {
        "contract": contract,
        "schema_version": contract["version"],
        "tool_version": TOOL_VERSION,
        "run_summary": build_run_summary(
            source=source,
            data=data,
            status="partial" if skipped else "ok",
            warnings=warnings,
            skipped=skipped,
        ),
        "data": data.to_dict(),
    }


def read_payload(text: str) -> RepertoireData:
    """
    Rebuild RepertoireData from a payload written by build_payload(), or from
    a bare data dict. A payload without songs is treated like an empty load.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid repertoire payload: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Repertoire payload root must be a JSON object.")

    contract = payload.get("contract")
    if contract is not None:
        if contract.get("name") != REPERTOIRE_CONTRACT:
            raise ValueError(f"Unexpected contract: {contract.get('name')!r}")
        body = payload.get("data") or {}
    else:
        body = payload

    data = RepertoireData.from_dict(body)
    if not data.songs:
        raise EmptyRepertoireError("Cached repertoire has no songs.")
    return data
