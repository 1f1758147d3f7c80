# -*- coding: utf-8 -*-
"""Readings domain: Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ReadingCreate(BaseModel):
    device_id: str = Field(..., min_length=1)
    hr: int = Field(..., description="Heart rate (bpm)")
    temp: float = Field(0.0, description="Temperature (°C)")
    spo2: int = Field(..., description="Blood oxygen saturation (%)")
    bp_sys: int = Field(..., description="Derived systolic blood pressure (mmHg)")
    bp_dia: int = Field(..., description="Derived diastolic blood pressure (mmHg)")


class Reading(ReadingCreate):
    id: Optional[int] = None
    created_at: str = Field(..., description="ISO8601 UTC timestamp, server-assigned")
