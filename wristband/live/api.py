# -*- coding: utf-8 -*-
"""Live view: latest reading per device with status bands."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..config import Settings
from ..deps import get_settings, get_store
from ..errors import PersistenceError
from ..readings.models import Reading
from ..readings.storage import ReadingStore
from .models import DeviceCard, LiveResponse, VitalStatuses
from .status import bp_status, hr_status, spo2_status, temp_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/live", tags=["Live"])


def build_card(reading: Reading) -> DeviceCard:
    return DeviceCard(
        reading=reading,
        status=VitalStatuses(
            hr=hr_status(reading.hr),
            temp=temp_status(reading.temp),
            spo2=spo2_status(reading.spo2),
            bp=bp_status(reading.bp_sys, reading.bp_dia),
        ),
    )


@router.get("", response_model=LiveResponse, summary="Latest reading of every device")
def live_view(
    store: ReadingStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    try:
        latest = store.latest_per_device()
    except PersistenceError as exc:
        logger.error("Live view load failed: %s", exc)
        raise HTTPException(status_code=503, detail="Failed to load readings") from exc
    return LiveResponse(
        device_count=len(latest),
        refresh_sec=settings.live_refresh_sec,
        devices=[build_card(r) for r in latest],
    )
