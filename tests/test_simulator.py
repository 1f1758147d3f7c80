# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import httpx

from wristband import cli
from wristband.cli import main
from wristband.ingest.service import build_reading
from wristband.ingest.simulator import SimulationConfig, WristbandSimulator, send_sample
from wristband.readings.models import Reading


class TestWristbandSimulator(unittest.TestCase):
    def test_samples_are_accepted_by_ingestion(self) -> None:
        simulator = WristbandSimulator(SimulationConfig(devices=3, count=5, seed=7))
        samples = [sample for sample, _ in simulator.iter_samples()]
        self.assertEqual(len(samples), 15)
        self.assertEqual({s["id"] for s in samples}, {"W1", "W2", "W3"})
        for sample in samples:
            reading = build_reading(sample)
            self.assertGreaterEqual(reading.hr, 40)
            self.assertLessEqual(reading.spo2, 100)

    def test_seed_is_deterministic(self) -> None:
        config = SimulationConfig(devices=2, count=3, seed=1)
        a = list(WristbandSimulator(config).iter_samples())
        b = list(WristbandSimulator(config).iter_samples())
        self.assertEqual(a, b)

    def test_interval_paces_rounds(self) -> None:
        simulator = WristbandSimulator(SimulationConfig(devices=2, count=3, interval_sec=0.5, seed=3))
        pauses = [sleep_sec for _, sleep_sec in simulator.iter_samples()]
        # One pause before each round after the first.
        self.assertEqual(pauses, [0.0, 0.0, 0.5, 0.0, 0.5, 0.0])

    def test_send_sample(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(dict(request.url.params))
            return httpx.Response(200, text="OK")

        with httpx.Client(base_url="http://wristband.test", transport=httpx.MockTransport(handler)) as client:
            self.assertTrue(send_sample(client, {"id": "W1", "hr": "70", "temp": "36.6", "spo2": "98"}))
        self.assertEqual(seen[0]["id"], "W1")


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="wristband-cli-"))

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def test_no_command_prints_help(self) -> None:
        self.assertEqual(main([]), 1)

    def test_simulate_uses_configured_interval(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="OK"))
        real_client = httpx.Client

        def client_factory(**kwargs):
            return real_client(transport=transport, **kwargs)

        with mock.patch.object(cli.httpx, "Client", side_effect=client_factory), mock.patch.object(
            cli.time, "sleep"
        ) as sleep:
            code = main(
                ["simulate", "--url", "http://wristband.test", "--devices", "2", "--count", "3",
                 "--interval", "0.25", "--seed", "5"]
            )
        self.assertEqual(code, 0)
        self.assertEqual([c.args for c in sleep.call_args_list], [(0.25,), (0.25,)])

    def _export(self, *extra: str, csv_escape: bool = True) -> str:
        rows = [
            Reading(
                id=1,
                device_id="W,1",
                hr=70,
                temp=36.6,
                spo2=98,
                bp_sys=100,
                bp_dia=66,
                created_at="2026-01-01T00:00:00.000000+00:00",
            )
        ]
        out = self._tmp / "export.csv"
        with mock.patch(
            "wristband.analytics.sources.HttpReadingSource.fetch_since",
            new=mock.AsyncMock(return_value=rows),
        ), mock.patch.object(cli.settings, "csv_escape", csv_escape):
            code = main(["export", "--url", "http://wristband.test", "-o", str(out), *extra])
        self.assertEqual(code, 0)
        return out.read_text(encoding="utf-8")

    def test_export_quotes_by_default(self) -> None:
        self.assertIn('"W,1",70,36.6', self._export())

    def test_export_follows_csv_escape_setting(self) -> None:
        text = self._export(csv_escape=False)
        self.assertNotIn('"W,1"', text)
        self.assertIn("\nW,1,70,36.6", text)

    def test_export_legacy_flag_disables_quoting(self) -> None:
        self.assertNotIn('"W,1"', self._export("--legacy"))


if __name__ == "__main__":
    unittest.main()
