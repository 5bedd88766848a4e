from __future__ import annotations

import unittest

from repertoire_sheets.names import (
    are_person_names_equivalent,
    compact_label,
    find_person_key,
    flatten_cell,
    normalize_label,
    normalize_person_name,
    same_person_name,
)


class LabelNormalizationTests(unittest.TestCase):
    def test_normalize_label_strips_accents_case_and_whitespace(self):
        self.assertEqual(normalize_label("  Entrée\t "), "entree")
        self.assertEqual(normalize_label("Groupes   Vocaux"), "groupes vocaux")
        self.assertEqual(normalize_label(None), "")

    def test_compact_label_drops_spaces(self):
        self.assertEqual(compact_label("Low  Chest"), "lowchest")

    def test_flatten_cell_joins_lines(self):
        self.assertEqual(flatten_cell("Songs:\nOriginal key "), "Songs: Original key")


class PersonNameTests(unittest.TestCase):
    def test_tier_one_ignores_accents_case_and_punctuation(self):
        self.assertEqual(normalize_person_name("Raphaël"), "raphael")
        self.assertEqual(normalize_person_name("Ya' Itie"), "yaitie")
        self.assertTrue(same_person_name("DORCAS", "dorcas "))

    def test_alias_table_maps_irregular_spellings(self):
        self.assertTrue(same_person_name("Voldie", "Voldis"))
        self.assertTrue(same_person_name("Maman Annie", "MaAnnie"))

    def test_blank_names_are_never_the_same_person(self):
        self.assertFalse(same_person_name("", ""))
        self.assertFalse(are_person_names_equivalent("", "Dorcas"))

    def test_tier_two_matches_on_first_name_prefix(self):
        self.assertTrue(are_person_names_equivalent("Jemima Mbuyi", "Jemima"))
        self.assertTrue(are_person_names_equivalent("Jo", "Joel"))
        self.assertFalse(are_person_names_equivalent("Irene", "Harmony"))

    def test_find_person_key_prefers_exact_tier(self):
        keys = ["Jo Kabila", "Joel"]
        self.assertEqual(find_person_key(keys, "joël"), "Joel")

    def test_find_person_key_falls_back_to_first_name(self):
        self.assertEqual(find_person_key(["Maman Annie", "Nellia"], "Nellia K."), "Nellia")
        self.assertIsNone(find_person_key(["Dorcas"], "Furah"))


if __name__ == "__main__":
    unittest.main()
