# -*- coding: utf-8 -*-
"""Ingestion: device-facing endpoint."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ..config import Settings
from ..deps import get_settings, get_store
from ..errors import PersistenceError, ValidationError
from ..readings.storage import ReadingStore
from .service import ingest_reading

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Ingestion"])


@router.get("/data", response_class=PlainTextResponse, summary="Record one wristband reading")
def ingest_data(
    id: Optional[str] = Query(default=None, description="device_id"),
    hr: Optional[str] = Query(default=None, description="heart rate (bpm)"),
    temp: Optional[str] = Query(default=None, description="temperature (°C)"),
    spo2: Optional[str] = Query(default=None, description="SpO2 (%)"),
    store: ReadingStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    params = {"id": id, "hr": hr, "temp": temp, "spo2": spo2}
    try:
        ingest_reading(params, store)
    except ValidationError:
        logger.debug("Rejected reading: %s", params)
        return PlainTextResponse("Missing data", status_code=400)
    except PersistenceError as exc:
        logger.error("Failed to store reading from %s: %s", id, exc)
        return PlainTextResponse("Error", status_code=settings.write_error_status)
    return PlainTextResponse("OK", status_code=200)
