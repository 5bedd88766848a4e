from __future__ import annotations

import unittest

from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.extractors.vocal_groups import classify_part, extract_vocal_groups, split_names
from repertoire_sheets.models import RepertoireData


def extract(grid):
    return extract_vocal_groups(grid, ExtractionContext(sheet_name="Groupes vocal"), RepertoireData())


class PartLabelTests(unittest.TestCase):
    def test_labels_map_to_the_four_parts(self):
        self.assertEqual(classify_part("Sopranos"), "Soprano")
        self.assertEqual(classify_part("ALTO 1"), "Alto 1")
        self.assertEqual(classify_part("Alto 2"), "Alto 2/Tenor")
        self.assertEqual(classify_part("Ténor"), "Alto 2/Tenor")
        self.assertEqual(classify_part("Alto 2 / Tenor"), "Alto 2/Tenor")
        self.assertEqual(classify_part("Basse"), "Bass")
        self.assertIsNone(classify_part("Notes"))
        self.assertIsNone(classify_part(""))

    def test_split_names(self):
        self.assertEqual(split_names("Nellia, Irene,"), ["Nellia", "Irene"])
        self.assertEqual(split_names(" , Joel ,, "), ["Joel"])
        self.assertEqual(split_names(""), [])


class VocalGroupTests(unittest.TestCase):
    def grid(self):
        return [
            ["Groupes vocaux", "", ""],
            ["Lead", "Jemima", "Dorcas"],
            ["Soprano", "Nellia, Irene,", "Jemima"],
            ["Alto 1", "Harmony", ""],
            ["Notes", "whatever", ""],
            ["Alto 2 / Tenor", "Joel", "Raphael"],
            ["", "", ""],
            ["Bass", "Furah", "Furah"],
        ]

    def test_parts_are_read_per_lead_until_blank_row(self):
        groups = extract(self.grid()).vocal_groups
        self.assertEqual(
            groups,
            {
                "Jemima": {"Soprano": ["Nellia", "Irene"], "Alto 1": ["Harmony"], "Alto 2/Tenor": ["Joel"], "Bass": []},
                "Dorcas": {"Soprano": ["Jemima"], "Alto 1": [], "Alto 2/Tenor": ["Raphael"], "Bass": []},
            },
        )

    def test_lead_anchor_can_move(self):
        grid = [[""] + row for row in self.grid()]
        grid.insert(0, ["", "", "", ""])
        groups = extract(grid).vocal_groups
        self.assertEqual(groups["Dorcas"]["Soprano"], ["Jemima"])

    def test_missing_lead_row_aborts(self):
        grid = [["Leaders", "Jemima"], ["Soprano", "Nellia"]]
        self.assertEqual(extract(grid).vocal_groups, {})

    def test_every_lead_gets_all_parts(self):
        groups = extract([["Lead", "Voldie"]]).vocal_groups
        self.assertEqual(groups, {"Voldie": {"Soprano": [], "Alto 1": [], "Alto 2/Tenor": [], "Bass": []}})


if __name__ == "__main__":
    unittest.main()
