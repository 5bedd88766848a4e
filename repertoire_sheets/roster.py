"""
Cross-sheet member helpers.

complete_members() adds people the roster sheet forgot but other sheets
mention. The lookups below answer "what does this member do" questions for a
presentation layer. tasks_for_member() and harmony_roles() match on the first
word of a name, so two members sharing a first name get each other's entries.
"""

from __future__ import annotations

from typing import Optional, Sequence

from repertoire_sheets.config import MUSICIAN_ROLE, SINGER_ROLE
from repertoire_sheets.models import Member, RepertoireData, Song, VocalRange
from repertoire_sheets.names import find_person_key, first_word, normalize_person_name


def _has_member(data: RepertoireData, name: str) -> bool:
    target = normalize_person_name(name)
    return any(normalize_person_name(member.name) == target for member in data.members)


def _add_missing(data: RepertoireData, name: str, role: str) -> bool:
    if not name or _has_member(data, name):
        return False
    data.members.append(Member(name=name, role=role))
    return True


def complete_members(data: RepertoireData, singers: Sequence[str]) -> list[Member]:
    """
    Add members referenced elsewhere but missing from the roster:
    configured singers with at least one personal key, vocal-range names,
    then musician first names. Returns the members that were added.
    """
    before = len(data.members)

    for singer in singers:
        if any(singer in song.member_keys for song in data.songs):
            _add_missing(data, singer, SINGER_ROLE)

    for name in data.vocal_ranges:
        _add_missing(data, name, SINGER_ROLE)

    musician_names: list[str] = []
    for song in data.songs:
        for key in song.musicians:
            name = first_word(key)
            if name and name not in musician_names:
                musician_names.append(name)
    for name in musician_names:
        _add_missing(data, name, MUSICIAN_ROLE)

    return data.members[before:]


def tasks_for_member(data: RepertoireData, name: str) -> list[str]:
    wanted_first = first_word(name).lower()
    for key, tasks in data.tasks.items():
        if first_word(key).lower() == wanted_first or key.lower() == name.lower():
            return list(tasks)
    return []


def all_tasks(data: RepertoireData) -> list[str]:
    seen: dict[str, None] = {}
    for tasks in data.tasks.values():
        for task in tasks:
            seen.setdefault(task, None)
    return list(seen)


def harmony_roles(data: RepertoireData, name: str) -> list[tuple[str, str]]:
    """(lead, part) pairs where this member sings a part under another lead."""
    first_name = first_word(name).lower()
    if not first_name:
        return []
    roles: list[tuple[str, str]] = []
    for lead, parts in data.vocal_groups.items():
        if lead == name:
            continue
        for part, members in parts.items():
            if any(first_name in member.lower() for member in members):
                roles.append((lead, part))
    return roles


def vocal_range_for(data: RepertoireData, name: str) -> Optional[VocalRange]:
    key = find_person_key(data.vocal_ranges, name)
    return data.vocal_ranges[key] if key is not None else None


def songs_for_member(data: RepertoireData, name: str) -> list[Song]:
    songs: list[Song] = []
    for song in data.songs:
        if find_person_key(song.member_keys, name) is not None:
            songs.append(song)
    return songs


def member_key(song: Song, name: str) -> Optional[str]:
    key = find_person_key(song.member_keys, name)
    return song.member_keys[key] if key is not None else None
