#!/usr/bin/env python3
"""
Generates sample-data/repertoire_sample.xlsx, a small choir repertoire
workbook laid out the way the real one drifts over time.

Run from the repo root:
    python sample-data/generate_xlsx.py

What is baked in:
  Song sheets "Entrée", "S-E", "Louange", "Adoration"
    - Group band on row 1, column headers on row 2, one song per row
    - Louange row 3 has data but no title (must be dropped)
    - Titles carry the original key after the last colon
  "Progression Blank"  two songs, one spread over continuation rows
  "Report sheet"       roster block under a "Members" header, trailing total
  "Vocal Range"        names row above the "Voice type" row
  "Groupes vocal"      one lead, blank row, then an ignored Bass row
  "Taches"             members on row 3, tasks from row 4
  "Notes"              not a known sheet, ignored by the parser
"""

from datetime import datetime
from pathlib import Path

import openpyxl

OUTPUT = Path(__file__).parent / "repertoire_sample.xlsx"

SONG_HEADERS = [
    "Songs:\nOriginal key", "Last sang", "Days past", "Creu/Sommet", "Langue", "Lyrics", "Progression",
    "Dorcas Key", "Harmony Key", None, None, None, None, None, None, None, None, None, None,
    "Raphael Piano", "Joel Drums",
]
SONG_BAND = ["VOCALS"] + [None] * 18 + ["Musician: Keyboardist", "Musician: Drummer"]


def song(title, last_sang=None, days=None, creu=None, langue=None, lyrics=None, progression=None,
         dorcas=None, harmony=None, piano=None, drums=None):
    return [title, last_sang, days, creu, langue, lyrics, progression, dorcas, harmony] + [None] * 10 + [piano, drums]


SECTIONS = {
    "Entrée": [
        song("Way Maker: Bb", datetime(2024, 3, 10), 45, "Sommet", "en", "Yes", "Yes", dorcas="C", piano="x"),
    ],
    "S-E": [
        song("Oceans: D", "2024-01-14", "N/A", langue="EN", lyrics="no", harmony="E", drums="✓"),
    ],
    "Louange": [
        song(None, "2024-02-01", 12),
        song("10 000 Reasons: G", days="3 jours", lyrics="oui", dorcas="0", harmony="A"),
    ],
    "Adoration": [
        song("Alleluia", langue="fr", dorcas="-", piano="X", drums="yes"),
    ],
}


def build_workbook():
    wb = openpyxl.Workbook()
    first = True
    for section, rows in SECTIONS.items():
        ws = wb.active if first else wb.create_sheet(section)
        ws.title = section
        first = False
        ws.append(SONG_BAND)
        ws.append(SONG_HEADERS)
        for row in rows:
            ws.append(row)

    ws = wb.create_sheet("Progression Blank")
    ws.append(["Titles", "Progression"])
    ws.append(["Way Maker:", "Verse: Bb F Gm Eb"])
    ws.append([None, "Chorus: Eb Bb F Gm"])
    ws.append([None, None])
    ws.append(["Oceans", "Intro: Bm A D G"])

    ws = wb.create_sheet("Report sheet")
    ws.append(["REPORT 2024"])
    ws.append([None, "Members", "Role"])
    ws.append([None, "Dorcas", "Singer"])
    ws.append([None, "Jemima", "Singer"])
    ws.append([None, "Joel", "Musician"])
    ws.append([None, "dorcas", "Singer"])
    ws.append([None, None, None])
    ws.append([None, "Total", 3])

    ws = wb.create_sheet("Vocal Range")
    ws.append(["VOCAL RANGE"])
    ws.append([None, "Dorcas", "Nellia"])
    ws.append(["Voice type", "Soprano", "Alto"])
    ws.append(["Low chest", "A3", "F3"])
    ws.append(["High chest", "C5", "A4"])
    ws.append(["Head voice", "A5", "D5"])
    ws.append(["Prima voce", "E4", "C4"])

    ws = wb.create_sheet("Groupes vocal")
    ws.append(["Lead", "Jemima"])
    ws.append(["Soprano", "Nellia, Irene,"])
    ws.append(["Alto 1", "Dorcas"])
    ws.append([None, None])
    ws.append(["Bass", "Joel"])

    ws = wb.create_sheet("Taches")
    ws.append(["TACHES"])
    ws.append([None])
    ws.append([None, "Task", "Dorcas", "Joel"])
    ws.append([None, "Sound check", None, "x"])
    ws.append([None, "Slides", "x", "x"])

    ws = wb.create_sheet("Notes")
    ws.append(["Remember to update the keys"])
    return wb


def main():
    build_workbook().save(OUTPUT)
    print(f"Created: {OUTPUT}")


if __name__ == "__main__":
    main()
