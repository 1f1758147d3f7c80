from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import httpx


@dataclass
class SimulationConfig:
    devices: int = 3
    count: int = 10
    interval_sec: float = 1.0
    seed: Optional[int] = None


@dataclass
class _DeviceState:
    device_id: str
    hr: float
    temp: float
    spo2: float


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class WristbandSimulator:
    """Random-walk vitals for a handful of fake wristbands."""

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config or SimulationConfig()
        self.rng = random.Random(self.config.seed)
        self.devices: List[_DeviceState] = [
            _DeviceState(
                device_id=f"W{idx + 1}",
                hr=self.rng.uniform(65, 85),
                temp=self.rng.uniform(36.3, 37.0),
                spo2=self.rng.uniform(96, 99),
            )
            for idx in range(self.config.devices)
        ]

    def step(self, state: _DeviceState) -> Dict[str, str]:
        state.hr = _clamp(state.hr + self.rng.gauss(0, 3), 40, 160)
        state.temp = _clamp(state.temp + self.rng.gauss(0, 0.05), 35.0, 40.0)
        state.spo2 = _clamp(state.spo2 + self.rng.gauss(0, 0.5), 85, 100)
        return {
            "id": state.device_id,
            "hr": str(int(round(state.hr))),
            "temp": f"{state.temp:.1f}",
            "spo2": str(int(round(state.spo2))),
        }

    def iter_samples(self) -> Iterator[Tuple[Dict[str, str], float]]:
        """``config.count`` rounds of ``(sample, sleep_sec)``, one sample per device per round.

        ``sleep_sec`` is the pause to take before sending the sample: the
        configured interval at the start of every round but the first, else 0.
        """
        interval = max(0.0, float(self.config.interval_sec))
        for round_idx in range(self.config.count):
            for dev_idx, state in enumerate(self.devices):
                sleep_sec = interval if round_idx and dev_idx == 0 else 0.0
                yield self.step(state), sleep_sec


def send_sample(client: httpx.Client, sample: Dict[str, str]) -> bool:
    resp = client.get("/api/data", params=sample)
    return resp.status_code == 200 and resp.text == "OK"
