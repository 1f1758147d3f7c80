# -*- coding: utf-8 -*-
"""Ingestion adapter.

Turns one set of raw query parameters from a wristband into a stored
reading:
- ``hr`` / ``spo2`` take the leading integer of the value ("72.9" -> 72)
- ``temp`` takes the leading decimal and falls back to 0
- a missing or zero ``id``, ``hr`` or ``spo2`` is rejected
- blood pressure is estimated from ``hr`` and ``spo2``, never submitted
"""

from __future__ import annotations

import math
import re
from typing import Mapping, Optional, Tuple

from ..errors import ValidationError
from ..readings.models import Reading, ReadingCreate
from ..readings.storage import ReadingStore


_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _INT_RE.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_leading_float(value: Optional[str], default: float = 0.0) -> float:
    if not value:
        return default
    match = _FLOAT_RE.match(value)
    if not match:
        return default
    parsed = float(match.group(1))
    if math.isnan(parsed) or math.isinf(parsed):
        return default
    return parsed


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_blood_pressure(hr: int, spo2: int) -> Tuple[int, int]:
    """Linear (systolic, diastolic) estimate; deliberately unclamped."""
    bp_sys = _round_half_up(90 + (hr - 60) * 0.8 + (100 - spo2) * 1.2)
    bp_dia = _round_half_up(60 + (hr - 60) * 0.4 + (100 - spo2) * 0.8)
    return bp_sys, bp_dia


def build_reading(params: Mapping[str, Optional[str]]) -> ReadingCreate:
    device_id = params.get("id") or ""
    hr = parse_leading_int(params.get("hr"))
    spo2 = parse_leading_int(params.get("spo2"))
    temp = parse_leading_float(params.get("temp"))

    # Zero counts as missing for hr/spo2.
    if not device_id or not hr or not spo2:
        raise ValidationError("Missing data")

    bp_sys, bp_dia = estimate_blood_pressure(hr, spo2)
    return ReadingCreate(
        device_id=device_id,
        hr=hr,
        temp=temp,
        spo2=spo2,
        bp_sys=bp_sys,
        bp_dia=bp_dia,
    )


def ingest_reading(params: Mapping[str, Optional[str]], store: ReadingStore) -> Reading:
    """Validate, derive and append one reading. Raises ValidationError / PersistenceError."""
    reading = build_reading(params)
    return store.insert(reading)
