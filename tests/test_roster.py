from __future__ import annotations

import unittest

from repertoire_sheets.models import Member, RepertoireData, Song, VocalRange, empty_harmony_parts
from repertoire_sheets.roster import (
    all_tasks,
    complete_members,
    harmony_roles,
    member_key,
    songs_for_member,
    tasks_for_member,
    vocal_range_for,
)


def sample_data() -> RepertoireData:
    groups = {"Jemima": empty_harmony_parts(), "Dorcas": empty_harmony_parts()}
    groups["Jemima"]["Soprano"] = ["Nellia", "Irene"]
    groups["Jemima"]["Alto 1"] = ["Dorcas"]
    groups["Dorcas"]["Soprano"] = ["Jemima"]
    return RepertoireData(
        songs=[
            Song(id="Entrée_2", title="Way Maker", section="Entrée", member_keys={"Dorcas": "C", "Maman Annie": "A"},
                 musicians={"Raphael Piano": True, "Joel Drums": True}),
            Song(id="Louange_3", title="Oceans", section="Louange", member_keys={"Harmony": "E"},
                 musicians={"Raphael Piano": True}),
        ],
        members=[Member("Dorcas", "Singer"), Member("Joël", "Musician")],
        vocal_ranges={"Nellia": VocalRange(voice_type="Alto"), "dorcas": VocalRange(voice_type="Soprano")},
        vocal_groups=groups,
        tasks={"Dorcas": ["Slides", "Sound check"], "Joel": ["Sound check"], "Joel Kabila": ["Chairs"]},
    )


class CompleteMembersTests(unittest.TestCase):
    def test_missing_people_are_added_once_with_derived_roles(self):
        data = sample_data()
        added = complete_members(data, ["Dorcas", "Harmony", "Maman Annie", "Furah"])
        self.assertEqual(
            [(m.name, m.role) for m in added],
            [("Harmony", "Chanteur·se"), ("Maman Annie", "Chanteur·se"), ("Nellia", "Chanteur·se"), ("Raphael", "Musicien·ne")],
        )
        self.assertEqual(len(data.members), 6)

    def test_completion_is_stable(self):
        data = sample_data()
        complete_members(data, ["Harmony"])
        self.assertEqual(complete_members(data, ["Harmony"]), [])


class LookupTests(unittest.TestCase):
    def test_tasks_match_on_first_word(self):
        data = sample_data()
        self.assertEqual(tasks_for_member(data, "dorcas"), ["Slides", "Sound check"])
        self.assertEqual(tasks_for_member(data, "Furah"), [])

    def test_shared_first_name_returns_the_first_entry(self):
        # Known gap: "Joel Kabila" gets plain "Joel"'s tasks.
        data = sample_data()
        self.assertEqual(tasks_for_member(data, "Joel Kabila"), ["Sound check"])

    def test_all_tasks_are_unique_in_first_seen_order(self):
        self.assertEqual(all_tasks(sample_data()), ["Slides", "Sound check", "Chairs"])

    def test_harmony_roles_skip_own_lead(self):
        data = sample_data()
        data.vocal_groups["Dorcas"]["Alto 1"] = ["Dorcas"]
        self.assertEqual(harmony_roles(data, "Dorcas"), [("Jemima", "Alto 1")])
        self.assertEqual(harmony_roles(data, "Jemima"), [("Dorcas", "Soprano")])
        self.assertEqual(harmony_roles(data, ""), [])

    def test_harmony_roles_match_first_name_substrings(self):
        # Known gap: a first name found inside another name still counts.
        data = sample_data()
        data.vocal_groups["Jemima"]["Bass"] = ["Irene-Joy"]
        self.assertEqual(harmony_roles(data, "Irene Mukendi"), [("Jemima", "Soprano"), ("Jemima", "Bass")])

    def test_vocal_range_and_song_lookups_use_name_tiers(self):
        data = sample_data()
        self.assertEqual(vocal_range_for(data, "Dorcas").voice_type, "Soprano")
        self.assertIsNone(vocal_range_for(data, "Furah"))
        self.assertEqual([song.id for song in songs_for_member(data, "MaAnnie")], ["Entrée_2"])
        self.assertEqual(member_key(data.songs[0], "Maman Annie"), "A")
        self.assertIsNone(member_key(data.songs[1], "Dorcas"))


if __name__ == "__main__":
    unittest.main()
