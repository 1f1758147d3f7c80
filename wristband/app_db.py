# -*- coding: utf-8 -*-
"""Datastore: SQLite helpers for the wristband_data table."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS wristband_data (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                device_id TEXT NOT NULL,
                hr INTEGER NOT NULL,
                temp REAL NOT NULL,
                spo2 INTEGER NOT NULL,
                bp_sys INTEGER NOT NULL,
                bp_dia INTEGER NOT NULL,
                created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f000+00:00', 'now'))
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_wristband_data_created ON wristband_data(created_at ASC);"
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_wristband_data_device_created ON wristband_data(device_id, created_at DESC);"
        )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
