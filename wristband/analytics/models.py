# -*- coding: utf-8 -*-
"""Analytics domain: window enum and Pydantic response models."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..readings.models import Reading

ALL_DEVICES = "ALL"


class TimeWindow(str, Enum):
    H1 = "1h"
    H6 = "6h"
    H24 = "24h"
    D7 = "7d"

    @property
    def duration(self) -> timedelta:
        return _WINDOW_DURATIONS[self]


_WINDOW_DURATIONS = {
    TimeWindow.H1: timedelta(hours=1),
    TimeWindow.H6: timedelta(hours=6),
    TimeWindow.H24: timedelta(hours=24),
    TimeWindow.D7: timedelta(days=7),
}


class SummaryStats(BaseModel):
    avg_hr: Optional[float] = None
    avg_temp: Optional[float] = None
    avg_spo2: Optional[float] = None
    min_hr: Optional[int] = None
    max_hr: Optional[int] = None
    total_readings: int = Field(0, ge=0)
    devices: int = Field(0, ge=0, description="distinct devices in the unfiltered batch")
    hr_trend: float = 0.0
    temp_trend: float = 0.0
    spo2_trend: float = 0.0


class ChartRow(BaseModel):
    time: str = Field(..., description="local HH:MM:SS")
    hr: int
    temp: float
    spo2: int
    bp_sys: int
    bp_dia: int
    device_id: str


class HistogramBucket(BaseModel):
    range: str = Field(..., description="e.g. 60-69 or 120+")
    count: int = Field(..., ge=0)


class AnalyticsResponse(BaseModel):
    status: str = Field(..., description="loaded | empty | failed")
    window: TimeWindow
    device_filter: str = ALL_DEVICES
    devices: List[str] = Field(default_factory=list)
    stats: Optional[SummaryStats] = None
    chart: List[ChartRow] = Field(default_factory=list)
    histogram: List[HistogramBucket] = Field(default_factory=list)
    detail: Optional[str] = None


class ReadingsResponse(BaseModel):
    since: str
    count: int
    readings: List[Reading]
