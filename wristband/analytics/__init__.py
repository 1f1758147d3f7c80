# -*- coding: utf-8 -*-
"""
Analytics aggregation engine
"""

from .engine import (
    chart_rows,
    compute_stats,
    compute_trend,
    device_ids,
    filter_by_device,
    hr_histogram,
    window_start,
)
from .export import export_csv
from .models import ALL_DEVICES, TimeWindow
from .session import AnalyticsSession, Failed, Loaded, Loading, RefreshScheduler, reduce_view

__all__ = [
    'ALL_DEVICES',
    'AnalyticsSession',
    'Failed',
    'Loaded',
    'Loading',
    'RefreshScheduler',
    'TimeWindow',
    'chart_rows',
    'compute_stats',
    'compute_trend',
    'device_ids',
    'export_csv',
    'filter_by_device',
    'hr_histogram',
    'reduce_view',
    'window_start',
]
