# -*- coding: utf-8 -*-
"""Analytics domain: API endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from ..config import Settings
from ..deps import get_settings, get_store
from ..errors import PersistenceError
from ..readings.storage import ReadingStore
from .engine import chart_rows, hr_histogram, resolve_tz, window_start
from .export import export_csv, export_filename
from .models import ALL_DEVICES, AnalyticsResponse, TimeWindow
from .session import Loaded, reduce_view, state_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


def _load_view(store: ReadingStore, window: TimeWindow, device: str) -> Loaded:
    batch = store.fetch_since(window_start(window))
    return reduce_view(window, device, tuple(batch))


def build_response(view: Loaded, display_tz: Optional[str] = None) -> AnalyticsResponse:
    return AnalyticsResponse(
        status=state_name(view),
        window=view.window,
        device_filter=view.device_filter,
        devices=list(view.devices),
        stats=view.stats,
        chart=chart_rows(view.filtered, resolve_tz(display_tz)),
        histogram=hr_histogram(view.filtered),
    )


@router.get("", response_model=AnalyticsResponse, summary="Summary statistics, chart rows and HR histogram")
def analytics_view(
    window: Optional[TimeWindow] = Query(default=None, description="1h | 6h | 24h | 7d"),
    device: str = Query(default=ALL_DEVICES, description="ALL or a specific device_id"),
    store: ReadingStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    window = window or TimeWindow(settings.default_window)
    try:
        view = _load_view(store, window, device)
    except PersistenceError as exc:
        logger.error("Analytics load failed: %s", exc)
        failed = AnalyticsResponse(
            status="failed",
            window=window,
            device_filter=device,
            detail="Failed to load readings",
        )
        return JSONResponse(status_code=503, content=failed.model_dump(mode="json"))
    return build_response(view, settings.display_tz)


@router.get("/export", summary="Export the filtered view as CSV")
def analytics_export(
    window: Optional[TimeWindow] = Query(default=None, description="1h | 6h | 24h | 7d"),
    device: str = Query(default=ALL_DEVICES, description="ALL or a specific device_id"),
    escape: Optional[bool] = Query(default=None, description="quote fields containing delimiters"),
    store: ReadingStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    window = window or TimeWindow(settings.default_window)
    try:
        view = _load_view(store, window, device)
    except PersistenceError as exc:
        logger.error("Analytics export failed: %s", exc)
        return Response(content="Error", status_code=503, media_type="text/plain")

    csv_text = export_csv(view.filtered, escape=settings.csv_escape if escape is None else escape)
    if csv_text is None:
        return Response(status_code=204)
    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
