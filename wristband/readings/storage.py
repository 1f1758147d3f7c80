# -*- coding: utf-8 -*-
"""Readings domain: SQLite-backed store for wristband_data.

The store is constructed explicitly and handed to whoever needs it (the
FastAPI app keeps one on ``app.state``); there is no process-wide client.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from ..app_db import db_conn, init_app_db
from ..errors import PersistenceError
from .models import Reading, ReadingCreate

logger = logging.getLogger(__name__)

_COLUMNS = "id, device_id, hr, temp, spo2, bp_sys, bp_dia, created_at"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Fixed-width UTC ISO8601 so that string order equals time order."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _row_to_reading(row: sqlite3.Row) -> Reading:
    return Reading(
        id=row["id"],
        device_id=row["device_id"],
        hr=row["hr"],
        temp=row["temp"],
        spo2=row["spo2"],
        bp_sys=row["bp_sys"],
        bp_dia=row["bp_dia"],
        created_at=row["created_at"],
    )


class ReadingStore:
    """Append-only access to the ``wristband_data`` table."""

    def __init__(self, db_path: Path, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.db_path = Path(db_path)
        self.clock = clock or _utc_now

    def init(self) -> None:
        try:
            init_app_db(self.db_path)
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to initialize datastore: {exc}") from exc

    def insert(self, reading: ReadingCreate, created_at: Optional[datetime] = None) -> Reading:
        stamp = format_timestamp(created_at or self.clock())
        try:
            with db_conn(self.db_path) as conn:
                cur = conn.execute(
                    """
                    INSERT INTO wristband_data (device_id, hr, temp, spo2, bp_sys, bp_dia, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        reading.device_id,
                        int(reading.hr),
                        float(reading.temp),
                        int(reading.spo2),
                        int(reading.bp_sys),
                        int(reading.bp_dia),
                        stamp,
                    ),
                )
                row_id = cur.lastrowid
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to write reading: {exc}") from exc
        logger.debug("Stored reading #%s from %s", row_id, reading.device_id)
        return Reading(id=row_id, created_at=stamp, **reading.model_dump())

    def fetch_since(self, start: datetime) -> List[Reading]:
        """All readings with ``created_at >= start``, oldest first."""
        try:
            with db_conn(self.db_path) as conn:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM wristband_data WHERE created_at >= ? "
                    "ORDER BY created_at ASC, id ASC",
                    (format_timestamp(start),),
                ).fetchall()
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to read readings: {exc}") from exc
        return [_row_to_reading(r) for r in rows]

    def latest_per_device(self) -> List[Reading]:
        """Newest reading of every device, most recently active device first."""
        try:
            with db_conn(self.db_path) as conn:
                rows = conn.execute(
                    f"""
                    SELECT {_COLUMNS} FROM (
                        SELECT {_COLUMNS},
                               ROW_NUMBER() OVER (
                                   PARTITION BY device_id ORDER BY created_at DESC, id DESC
                               ) AS rn
                        FROM wristband_data
                    )
                    WHERE rn = 1
                    ORDER BY created_at DESC, id DESC
                    """
                ).fetchall()
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to read latest readings: {exc}") from exc
        return [_row_to_reading(r) for r in rows]
