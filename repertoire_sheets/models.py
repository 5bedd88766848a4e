"""
models.py — Normalized records produced by the sheet extractors.

RepertoireData is the accumulator threaded through every extractor and the
single object handed to presentation or caching layers. to_dict()/from_dict()
use the flat JSON key names the cached payload has always used
(songs, members, progressions, vocalRanges, vocalGroups, tasks).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from repertoire_sheets.config import DEFAULT_MEMBER_ROLE, HARMONY_PARTS, LANGUAGE_UNDEFINED


@dataclass
class Song:
    id: str
    title: str
    section: str
    original_key: str = ""
    last_sang: Optional[date] = None
    days_past: Optional[int] = None
    creu_sommet: str = ""
    langue: str = LANGUAGE_UNDEFINED
    has_lyrics: bool = False
    has_progression: bool = False
    member_keys: dict[str, str] = field(default_factory=dict)
    musicians: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "originalKey": self.original_key,
            "section": self.section,
            "lastSang": self.last_sang.isoformat() if self.last_sang else None,
            "daysPast": self.days_past,
            "creuSommet": self.creu_sommet,
            "langue": self.langue,
            "hasLyrics": self.has_lyrics,
            "hasProgression": self.has_progression,
            "memberKeys": dict(self.member_keys),
            "musicians": dict(self.musicians),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Song":
        last_sang = payload.get("lastSang")
        days_past = payload.get("daysPast")
        return cls(
            id=str(payload["id"]),
            title=str(payload["title"]),
            section=str(payload["section"]),
            original_key=str(payload.get("originalKey") or ""),
            last_sang=date.fromisoformat(last_sang) if last_sang else None,
            days_past=int(days_past) if days_past is not None else None,
            creu_sommet=str(payload.get("creuSommet") or ""),
            langue=str(payload.get("langue") or LANGUAGE_UNDEFINED),
            has_lyrics=bool(payload.get("hasLyrics")),
            has_progression=bool(payload.get("hasProgression")),
            member_keys={str(k): str(v) for k, v in (payload.get("memberKeys") or {}).items()},
            musicians={str(k): bool(v) for k, v in (payload.get("musicians") or {}).items()},
        )


@dataclass
class Member:
    name: str
    role: str = DEFAULT_MEMBER_ROLE

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "role": self.role}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Member":
        return cls(name=str(payload["name"]), role=str(payload.get("role") or DEFAULT_MEMBER_ROLE))


@dataclass
class VocalRange:
    voice_type: str = ""
    low_chest: str = ""
    high_chest: str = ""
    head_voice: str = ""
    prima_voce: str = ""

    def is_empty(self) -> bool:
        return not any((self.voice_type, self.low_chest, self.high_chest, self.head_voice, self.prima_voce))

    def to_dict(self) -> dict[str, str]:
        return {
            "voiceType": self.voice_type,
            "lowChest": self.low_chest,
            "highChest": self.high_chest,
            "headVoice": self.head_voice,
            "primaVoce": self.prima_voce,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "VocalRange":
        return cls(
            voice_type=str(payload.get("voiceType") or ""),
            low_chest=str(payload.get("lowChest") or ""),
            high_chest=str(payload.get("highChest") or ""),
            head_voice=str(payload.get("headVoice") or ""),
            prima_voce=str(payload.get("primaVoce") or ""),
        )


def empty_harmony_parts() -> dict[str, list[str]]:
    return {part: [] for part in HARMONY_PARTS}


@dataclass
class RepertoireData:
    songs: list[Song] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    progressions: dict[str, str] = field(default_factory=dict)
    vocal_ranges: dict[str, VocalRange] = field(default_factory=dict)
    vocal_groups: dict[str, dict[str, list[str]]] = field(default_factory=dict)
    tasks: dict[str, list[str]] = field(default_factory=dict)

    def reset(self) -> None:
        self.songs.clear()
        self.members.clear()
        self.progressions.clear()
        self.vocal_ranges.clear()
        self.vocal_groups.clear()
        self.tasks.clear()

    def songs_by_section(self) -> dict[str, list[Song]]:
        grouped: dict[str, list[Song]] = {}
        for song in self.songs:
            grouped.setdefault(song.section, []).append(song)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "songs": [song.to_dict() for song in self.songs],
            "members": [member.to_dict() for member in self.members],
            "progressions": dict(self.progressions),
            "vocalRanges": {name: vr.to_dict() for name, vr in self.vocal_ranges.items()},
            "vocalGroups": {
                lead: {part: list(names) for part, names in parts.items()}
                for lead, parts in self.vocal_groups.items()
            },
            "tasks": {name: list(items) for name, items in self.tasks.items()},
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RepertoireData":
        vocal_groups: dict[str, dict[str, list[str]]] = {}
        for lead, parts in (payload.get("vocalGroups") or {}).items():
            merged = empty_harmony_parts()
            for part, names in (parts or {}).items():
                merged[str(part)] = [str(name) for name in names or []]
            vocal_groups[str(lead)] = merged

        return cls(
            songs=[Song.from_dict(item) for item in payload.get("songs") or []],
            members=[Member.from_dict(item) for item in payload.get("members") or []],
            progressions={str(k): str(v) for k, v in (payload.get("progressions") or {}).items()},
            vocal_ranges={
                str(name): VocalRange.from_dict(item or {})
                for name, item in (payload.get("vocalRanges") or {}).items()
            },
            vocal_groups=vocal_groups,
            tasks={str(name): [str(t) for t in items or []] for name, items in (payload.get("tasks") or {}).items()},
        )
