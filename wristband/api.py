# -*- coding: utf-8 -*-
"""
Wristband vitals service API

Device ingestion, live per-device cards, and windowed analytics over the
stored readings.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .analytics.api import router as analytics_router
from .config import Settings, settings as default_settings
from .ingest.api import router as ingest_router
from .live.api import router as live_router
from .readings.api import router as readings_router
from .readings.storage import ReadingStore


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[ReadingStore] = None,
) -> FastAPI:
    """Build the application around an explicitly constructed store."""
    cfg = app_settings or default_settings

    app = FastAPI(
        title="Wristband Vitals",
        description="Wristband vitals ingestion, live monitor and analytics",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = cfg
    app.state.store = store or ReadingStore(cfg.db_path)
    # Create the table up front so that test clients without lifespan events still work.
    app.state.store.init()

    app.include_router(ingest_router)
    app.include_router(readings_router)
    app.include_router(live_router)
    app.include_router(analytics_router)

    @app.get("/api/health")
    def health() -> dict:
        return {"ok": True}

    return app


app = create_app()
