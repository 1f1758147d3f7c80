# -*- coding: utf-8 -*-
"""Live view: Pydantic models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ..readings.models import Reading
from .status import VitalStatus


class VitalStatuses(BaseModel):
    hr: VitalStatus
    temp: VitalStatus
    spo2: VitalStatus
    bp: VitalStatus


class DeviceCard(BaseModel):
    reading: Reading
    status: VitalStatuses


class LiveResponse(BaseModel):
    device_count: int = Field(..., ge=0)
    refresh_sec: int = Field(..., description="suggested client revalidation interval")
    devices: List[DeviceCard]
