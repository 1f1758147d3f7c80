# -*- coding: utf-8 -*-
"""Threshold bands used to colour-code the live device cards."""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union


class VitalStatus(str, Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"


def hr_status(hr: float) -> VitalStatus:
    if hr < 60 or hr > 100:
        return VitalStatus.RED
    if hr < 70 or hr > 90:
        return VitalStatus.YELLOW
    return VitalStatus.GREEN


def temp_status(temp: float) -> VitalStatus:
    if temp < 36 or temp > 37.5:
        return VitalStatus.RED
    if temp < 36.5 or temp > 37.2:
        return VitalStatus.YELLOW
    return VitalStatus.GREEN


def spo2_status(spo2: float) -> VitalStatus:
    if spo2 < 95:
        return VitalStatus.RED
    if spo2 < 97:
        return VitalStatus.YELLOW
    return VitalStatus.GREEN


def bp_status(bp_sys: float, bp_dia: float) -> VitalStatus:
    if bp_sys > 140 or bp_sys < 90 or bp_dia > 90 or bp_dia < 60:
        return VitalStatus.RED
    if bp_sys > 130 or bp_sys < 100 or bp_dia > 85 or bp_dia < 65:
        return VitalStatus.YELLOW
    return VitalStatus.GREEN


def vital_status(kind: str, value: Union[float, Tuple[float, float]]) -> VitalStatus:
    """Dispatch by vital kind: ``hr``, ``temp``, ``spo2`` or ``bp`` (sys, dia)."""
    if kind == "hr":
        return hr_status(value)
    if kind == "temp":
        return temp_status(value)
    if kind == "spo2":
        return spo2_status(value)
    if kind == "bp":
        bp_sys, bp_dia = value
        return bp_status(bp_sys, bp_dia)
    raise ValueError(f"Unknown vital kind: {kind}")
