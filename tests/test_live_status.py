# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from wristband.live.status import VitalStatus, vital_status

RED, YELLOW, GREEN = VitalStatus.RED, VitalStatus.YELLOW, VitalStatus.GREEN


class TestVitalStatus(unittest.TestCase):
    def test_heart_rate_bands(self) -> None:
        cases = {59: RED, 60: YELLOW, 69: YELLOW, 70: GREEN, 90: GREEN, 91: YELLOW, 100: YELLOW, 101: RED}
        for hr, expected in cases.items():
            self.assertEqual(vital_status("hr", hr), expected, hr)

    def test_temperature_bands(self) -> None:
        cases = {35.9: RED, 36.0: YELLOW, 36.4: YELLOW, 36.5: GREEN, 37.2: GREEN, 37.3: YELLOW, 37.5: YELLOW, 37.6: RED}
        for temp, expected in cases.items():
            self.assertEqual(vital_status("temp", temp), expected, temp)

    def test_spo2_bands(self) -> None:
        cases = {94: RED, 95: YELLOW, 96: YELLOW, 97: GREEN, 100: GREEN}
        for spo2, expected in cases.items():
            self.assertEqual(vital_status("spo2", spo2), expected, spo2)

    def test_blood_pressure_bands(self) -> None:
        self.assertEqual(vital_status("bp", (120, 75)), GREEN)
        self.assertEqual(vital_status("bp", (141, 75)), RED)
        self.assertEqual(vital_status("bp", (120, 59)), RED)
        self.assertEqual(vital_status("bp", (89, 75)), RED)
        self.assertEqual(vital_status("bp", (120, 91)), RED)
        self.assertEqual(vital_status("bp", (135, 75)), YELLOW)
        self.assertEqual(vital_status("bp", (95, 75)), YELLOW)
        self.assertEqual(vital_status("bp", (120, 86)), YELLOW)
        self.assertEqual(vital_status("bp", (120, 62)), YELLOW)

    def test_unknown_kind(self) -> None:
        with self.assertRaises(ValueError):
            vital_status("glucose", 5.0)


if __name__ == "__main__":
    unittest.main()
