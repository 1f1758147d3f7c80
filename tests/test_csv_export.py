# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from wristband.analytics.export import CSV_HEADER, export_csv, export_filename
from wristband.readings.models import Reading


class TestCsvExport(unittest.TestCase):
    def test_single_row_exact_output(self) -> None:
        row = {
            "device_id": "A",
            "hr": 72,
            "temp": 36.6,
            "spo2": 98,
            "bp_sys": 100,
            "bp_dia": 70,
            "created_at": "2024-01-01T00:00:00Z",
        }
        expected = "device_id,hr,temp,spo2,bp_sys,bp_dia,created_at\nA,72,36.6,98,100,70,2024-01-01T00:00:00Z"
        self.assertEqual(export_csv([row]), expected)
        self.assertEqual(export_csv([row], escape=False), expected)

    def test_reading_models_and_order(self) -> None:
        rows = [
            Reading(device_id="B", hr=80, temp=37.0, spo2=97, bp_sys=101, bp_dia=68, created_at="2024-01-01T00:00:01Z"),
            Reading(device_id="A", hr=60, temp=0.0, spo2=99, bp_sys=91, bp_dia=61, created_at="2024-01-01T00:00:02Z"),
        ]
        lines = export_csv(rows).split("\n")
        self.assertEqual(lines[0], ",".join(CSV_HEADER))
        self.assertEqual(lines[1], "B,80,37,97,101,68,2024-01-01T00:00:01Z")
        self.assertEqual(lines[2], "A,60,0,99,91,61,2024-01-01T00:00:02Z")
        self.assertEqual(len(lines), 3)

    def test_empty_view_exports_nothing(self) -> None:
        self.assertIsNone(export_csv([]))
        self.assertIsNone(export_csv([], escape=False))

    def test_delimiters_are_quoted(self) -> None:
        row = {
            "device_id": 'wrist,"left"',
            "hr": 70,
            "temp": 36.5,
            "spo2": 98,
            "bp_sys": 98,
            "bp_dia": 65,
            "created_at": "2024-01-01T00:00:00Z",
        }
        escaped = export_csv([row])
        self.assertEqual(escaped.split("\n")[1], '"wrist,""left""",70,36.5,98,98,65,2024-01-01T00:00:00Z')

        legacy = export_csv([row], escape=False)
        self.assertEqual(legacy.split("\n")[1], 'wrist,"left",70,36.5,98,98,65,2024-01-01T00:00:00Z')

    def test_filename(self) -> None:
        self.assertEqual(export_filename(1700000000000), "wristband_data_1700000000000.csv")
        self.assertTrue(export_filename().startswith("wristband_data_"))


if __name__ == "__main__":
    unittest.main()
