# -*- coding: utf-8 -*-
"""FastAPI dependencies for app-scoped service objects."""

from __future__ import annotations

from fastapi import Request

from .config import Settings
from .readings.storage import ReadingStore


def get_store(request: Request) -> ReadingStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
