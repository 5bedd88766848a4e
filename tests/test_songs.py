from __future__ import annotations

import unittest
from datetime import date

from repertoire_sheets.extractors.shared import ExtractionContext, is_musician_mark, parse_leading_int, parse_sheet_date
from repertoire_sheets.extractors.songs import detect_columns, extract_songs, find_header_row, parse_title_key
from repertoire_sheets.models import RepertoireData

SINGERS = ["Dorcas", "Harmony", "Maman Annie", "Raphael", "Joel"]

HEADERS = [
    "Songs:\nOriginal key", "Last sang", "Days past", "Creu/Sommet", "Langue", "Lyrics", "Progression",
    "Dorcas Key", "Harmony Key", "Maman Annie key", "Dorcas key (old)", "", "", "", "", "", "", "", "",
    "Raphael Piano", "Joel Drums", "Joel Bass guitar",
]


def song_row(*, title, last_sang="", days="", creu="", langue="", lyrics="", progression="", keys=None, musicians=None):
    row = [""] * len(HEADERS)
    row[0:7] = [title, last_sang, days, creu, langue, lyrics, progression]
    for col_idx, value in (keys or {}).items():
        row[col_idx] = value
    for col_idx, value in (musicians or {}).items():
        row[col_idx] = value
    return row


def song_grid(*rows):
    band = ["VOCALS"] + [""] * 18 + ["Musician: Keyboardist", "Musician: Drummer", ""]
    return [band, list(HEADERS), *rows]


def extract(grid, section="Louange"):
    context = ExtractionContext(sheet_name=section, label=section, singers=list(SINGERS))
    return extract_songs(grid, context, RepertoireData())


class TitleKeyTests(unittest.TestCase):
    def test_splits_on_last_colon(self):
        self.assertEqual(parse_title_key("10 000 Reasons: G"), ("10 000 Reasons", "G"))
        self.assertEqual(parse_title_key("Alleluia"), ("Alleluia", ""))
        self.assertEqual(parse_title_key("Weird: Title: D"), ("Weird: Title", "D"))

    def test_leading_colon_keeps_whole_cell_as_title(self):
        self.assertEqual(parse_title_key(":Intro"), (":Intro", ""))

    def test_newlines_are_flattened(self):
        self.assertEqual(parse_title_key("Way\nMaker: Bb"), ("Way Maker", "Bb"))


class CellParsingTests(unittest.TestCase):
    def test_musician_marks(self):
        for value in ("x", "X", "✓", "yes", " Yes "):
            with self.subTest(value=value):
                self.assertTrue(is_musician_mark(value))
        for value in ("", "-", "no", "0"):
            with self.subTest(value=value):
                self.assertFalse(is_musician_mark(value))

    def test_days_past_never_defaults_to_zero(self):
        self.assertIsNone(parse_leading_int("N/A"))
        self.assertIsNone(parse_leading_int(""))
        self.assertIsNone(parse_leading_int("-3"))
        self.assertEqual(parse_leading_int("0"), 0)
        self.assertEqual(parse_leading_int("12 jours"), 12)

    def test_sheet_dates(self):
        self.assertEqual(parse_sheet_date("2024-03-10"), date(2024, 3, 10))
        self.assertEqual(parse_sheet_date("2024-03-10 18:30:00"), date(2024, 3, 10))
        self.assertEqual(parse_sheet_date("45361"), date(2024, 3, 10))
        self.assertIsNone(parse_sheet_date("N/A"))
        self.assertIsNone(parse_sheet_date("not a date"))
        self.assertIsNone(parse_sheet_date("12"))

    def test_sheet_dates_prefer_day_first_formats(self):
        self.assertEqual(parse_sheet_date("03/04/2024"), date(2024, 4, 3))
        self.assertEqual(parse_sheet_date("12/25/2024"), date(2024, 12, 25))
        self.assertEqual(parse_sheet_date("10-03-2024"), date(2024, 3, 10))
        self.assertEqual(parse_sheet_date("March 10, 2024"), date(2024, 3, 10))
        self.assertEqual(parse_sheet_date("10 Mar 2024"), date(2024, 3, 10))

    def test_partial_dates_and_times_are_not_dates(self):
        for value in ("10:30", "18:30:00", "3/4", "March", "Mar 10", "0001-03-01"):
            with self.subTest(value=value):
                self.assertIsNone(parse_sheet_date(value))


class HeaderDetectionTests(unittest.TestCase):
    def test_header_row_is_found_by_title_marker(self):
        grid = [["Repertoire 2024"], [""], ["Chanson"], ["Alleluia"]]
        self.assertEqual(find_header_row(grid), 2)

    def test_header_row_defaults_to_row_one(self):
        grid = [["VOCALS"], ["Name"], ["Alleluia"]]
        self.assertEqual(find_header_row(grid), 1)

    def test_each_role_goes_to_the_first_matching_column(self):
        headers = ["Songs", "Last sang", "Last sang (old)", "Days past", "", "", "", "Progress notes", "", "", "", "Progression"]
        cols = detect_columns(headers, SINGERS)
        self.assertEqual(cols.last_sang, 1)
        self.assertEqual(cols.days_past, 3)
        self.assertEqual(cols.progression, 7)

    def test_header_matching_several_roles_fills_the_unclaimed_one(self):
        cols = detect_columns(["Songs: Original key", "Last sang", "Days since last sang", "Langue"], SINGERS)
        self.assertEqual(cols.last_sang, 1)
        self.assertEqual(cols.days_past, 2)
        self.assertEqual(cols.langue, 3)

    def test_days_survive_a_header_that_mentions_last_sang(self):
        grid = [
            ["VOCALS"],
            ["Songs: Original key", "Last sang", "Days since last sang"],
            ["Oceans: D", "2024-01-14", "30"],
        ]
        song = extract(grid).songs[0]
        self.assertEqual(song.last_sang, date(2024, 1, 14))
        self.assertEqual(song.days_past, 30)

    def test_progression_marker_is_ignored_beyond_column_ten(self):
        headers = ["Songs"] + [""] * 10 + ["Progression"]
        self.assertEqual(detect_columns(headers, SINGERS).progression, -1)

    def test_member_key_columns_first_match_wins(self):
        cols = detect_columns([h.replace("\n", " ") for h in HEADERS], SINGERS)
        self.assertEqual(cols.member_keys, {"Dorcas": 7, "Harmony": 8, "Maman Annie": 9})

    def test_key_headers_outside_member_range_are_ignored(self):
        headers = ["Songs", "Dorcas key"] + [""] * 21 + ["Harmony key"]
        self.assertEqual(detect_columns(headers, SINGERS).member_keys, {})

    def test_musician_columns_use_first_two_header_words(self):
        cols = detect_columns(HEADERS, SINGERS)
        self.assertEqual(cols.musicians, {"Raphael Piano": 19, "Joel Drums": 20, "Joel Bass": 21})


class SongExtractionTests(unittest.TestCase):
    def test_full_row_is_normalized(self):
        grid = song_grid(
            song_row(
                title="10 000 Reasons: G",
                last_sang="2024-03-10",
                days="45",
                creu="Sommet",
                langue="en",
                lyrics="Yes",
                progression="oui",
                keys={7: "A", 8: "0", 9: "-", 10: "C"},
                musicians={19: "x", 20: "", 21: "✓"},
            )
        )
        data = extract(grid)
        self.assertEqual(len(data.songs), 1)
        song = data.songs[0]
        self.assertEqual(song.id, "Louange_2")
        self.assertEqual(song.title, "10 000 Reasons")
        self.assertEqual(song.original_key, "G")
        self.assertEqual(song.section, "Louange")
        self.assertEqual(song.last_sang, date(2024, 3, 10))
        self.assertEqual(song.days_past, 45)
        self.assertEqual(song.creu_sommet, "Sommet")
        self.assertEqual(song.langue, "EN")
        self.assertTrue(song.has_lyrics)
        self.assertTrue(song.has_progression)
        self.assertEqual(song.member_keys, {"Dorcas": "A"})
        self.assertEqual(song.musicians, {"Raphael Piano": True, "Joel Bass": True})

    def test_missing_fields_stay_absent(self):
        data = extract(song_grid(song_row(title="Alleluia", last_sang="someday", days="N/A", lyrics="no")))
        song = data.songs[0]
        self.assertIsNone(song.last_sang)
        self.assertIsNone(song.days_past)
        self.assertEqual(song.langue, "—")
        self.assertFalse(song.has_lyrics)
        self.assertEqual(song.member_keys, {})
        self.assertEqual(song.musicians, {})

    def test_short_or_empty_titles_are_skipped(self):
        grid = song_grid(
            song_row(title=""),
            song_row(title="A"),
            song_row(title="  "),
            song_row(title="Oceans: D"),
        )
        data = extract(grid)
        self.assertEqual([song.title for song in data.songs], ["Oceans"])
        self.assertEqual(data.songs[0].id, "Louange_5")

    def test_songs_append_to_existing_sections(self):
        data = RepertoireData()
        first = ExtractionContext(sheet_name="Entrée", label="Entrée", singers=SINGERS)
        second = ExtractionContext(sheet_name="Adoration", label="Adoration", singers=SINGERS)
        extract_songs(song_grid(song_row(title="Oceans")), first, data)
        extract_songs(song_grid(song_row(title="Oceans")), second, data)
        self.assertEqual([song.id for song in data.songs], ["Entrée_2", "Adoration_2"])

    def test_extraction_is_repeatable(self):
        grid = song_grid(song_row(title="Way Maker: Bb", keys={7: "C"}, musicians={19: "x"}))
        self.assertEqual(extract(grid).to_dict(), extract(grid).to_dict())

    def test_empty_grid_yields_nothing(self):
        self.assertEqual(extract([]).songs, [])


if __name__ == "__main__":
    unittest.main()
