# -*- coding: utf-8 -*-
"""Readings domain: raw read access for remote dashboards."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..analytics.engine import window_start
from ..analytics.models import ReadingsResponse, TimeWindow
from ..deps import get_store
from ..errors import PersistenceError
from .storage import ReadingStore, format_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/readings", tags=["Readings"])


def _parse_since(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid since timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@router.get("", response_model=ReadingsResponse, summary="Readings at or after a point in time, oldest first")
def list_readings(
    window: Optional[TimeWindow] = Query(default=None, description="1h | 6h | 24h | 7d"),
    since: Optional[str] = Query(default=None, description="ISO8601 lower bound; overrides window"),
    store: ReadingStore = Depends(get_store),
):
    if since:
        start = _parse_since(since)
    else:
        start = window_start(window or TimeWindow.H24)
    try:
        readings = store.fetch_since(start)
    except PersistenceError as exc:
        logger.error("Readings fetch failed: %s", exc)
        raise HTTPException(status_code=503, detail="Failed to load readings") from exc
    return ReadingsResponse(since=format_timestamp(start), count=len(readings), readings=readings)
