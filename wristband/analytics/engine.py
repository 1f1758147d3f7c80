# -*- coding: utf-8 -*-
"""Analytics aggregation over an in-memory batch of readings.

Everything here is a pure function of the fetched batch:
- time-window lower bound for the fetch
- device filtering (projection, never a query)
- summary statistics and trends
- chart-ready rows
- heart-rate histogram
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

from ..readings.models import Reading
from .models import ALL_DEVICES, ChartRow, HistogramBucket, SummaryStats, TimeWindow

HR_BUCKET_BOUNDS: Tuple[int, ...] = (50, 60, 70, 80, 90, 100, 110, 120)


def round1(value: float) -> float:
    """One decimal, half away from zero on the exact binary value."""
    return float(Decimal(float(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def window_start(window: TimeWindow, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now - TimeWindow(window).duration


def device_ids(batch: Sequence[Reading]) -> List[str]:
    """Distinct device ids in first-appearance order."""
    return list(dict.fromkeys(r.device_id for r in batch))


def filter_by_device(batch: Sequence[Reading], device_filter: str = ALL_DEVICES) -> List[Reading]:
    if device_filter == ALL_DEVICES:
        return list(batch)
    return [r for r in batch if r.device_id == device_filter]


def to_frame(readings: Sequence[Reading]) -> pd.DataFrame:
    return pd.DataFrame([r.model_dump() for r in readings])


def compute_trend(latest: float, previous: float) -> float:
    """Percentage change from ``previous`` to ``latest``; 0.0 for a zero baseline."""
    if previous == 0:
        return 0.0
    return round1((latest - previous) / previous * 100)


def compute_stats(filtered: Sequence[Reading], batch: Sequence[Reading]) -> SummaryStats:
    stats = SummaryStats(total_readings=len(filtered), devices=len(device_ids(batch)))
    if not filtered:
        return stats

    df = to_frame(filtered)
    stats.avg_hr = round1(df["hr"].mean())
    stats.avg_temp = round1(df["temp"].mean())
    stats.avg_spo2 = round1(df["spo2"].mean())
    stats.min_hr = int(df["hr"].min())
    stats.max_hr = int(df["hr"].max())

    if len(filtered) >= 2:
        previous, latest = filtered[-2], filtered[-1]
        stats.hr_trend = compute_trend(latest.hr, previous.hr)
        stats.temp_trend = compute_trend(latest.temp, previous.temp)
        stats.spo2_trend = compute_trend(latest.spo2, previous.spo2)
    return stats


def _parse_iso(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_tz(name: Optional[str]) -> Optional[tzinfo]:
    return ZoneInfo(name) if name else None


def chart_rows(filtered: Sequence[Reading], tz: Optional[tzinfo] = None) -> List[ChartRow]:
    rows: List[ChartRow] = []
    for r in filtered:
        local = _parse_iso(r.created_at).astimezone(tz)
        rows.append(
            ChartRow(
                time=local.strftime("%H:%M:%S"),
                hr=r.hr,
                temp=r.temp,
                spo2=r.spo2,
                bp_sys=r.bp_sys,
                bp_dia=r.bp_dia,
                device_id=r.device_id,
            )
        )
    return rows


def histogram_labels(bounds: Sequence[int] = HR_BUCKET_BOUNDS) -> List[str]:
    labels: List[str] = []
    lower = 0
    for upper in bounds:
        labels.append(f"{lower}-{upper - 1}")
        lower = upper
    labels.append(f"{bounds[-1]}+")
    return labels


def hr_histogram(filtered: Sequence[Reading], bounds: Sequence[int] = HR_BUCKET_BOUNDS) -> List[HistogramBucket]:
    """Left-closed heart-rate buckets; every reading lands in exactly one."""
    labels = histogram_labels(bounds)
    counts: Dict[str, int] = {label: 0 for label in labels}
    if filtered:
        # Lower edge is open so that a negative reading still lands in the first bucket.
        edges = [-np.inf, *bounds, np.inf]
        hr = pd.Series([r.hr for r in filtered], dtype="float64")
        binned = pd.cut(hr, bins=edges, right=False, labels=labels)
        for label, count in binned.value_counts().items():
            counts[str(label)] = int(count)
    return [HistogramBucket(range=label, count=counts[label]) for label in labels]
