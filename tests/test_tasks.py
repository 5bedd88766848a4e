from __future__ import annotations

import unittest

from repertoire_sheets.extractors.shared import ExtractionContext
from repertoire_sheets.extractors.tasks import extract_tasks
from repertoire_sheets.models import RepertoireData


class TaskTests(unittest.TestCase):
    def test_marked_tasks_are_listed_in_row_order(self):
        grid = [
            ["TACHES"],
            [""],
            ["", "Task", "Dorcas", "Joel", ""],
            ["", "Sound check", "x", " X "],
            ["", "", "x", "x"],
            ["", "Slides", "", "x"],
            ["", "Sound check", "x", "done"],
        ]
        data = extract_tasks(grid, ExtractionContext(sheet_name="Taches"), RepertoireData())
        self.assertEqual(
            data.tasks,
            {"Dorcas": ["Sound check", "Sound check"], "Joel": ["Sound check", "Slides"]},
        )

    def test_members_without_marks_get_empty_lists(self):
        grid = [[], [], ["", "", "Furah"], ["", "Slides", ""]]
        data = extract_tasks(grid, ExtractionContext(sheet_name="Taches"), RepertoireData())
        self.assertEqual(data.tasks, {"Furah": []})

    def test_short_sheet_yields_nothing(self):
        data = extract_tasks([["TACHES"]], ExtractionContext(sheet_name="Taches"), RepertoireData())
        self.assertEqual(data.tasks, {})


if __name__ == "__main__":
    unittest.main()
