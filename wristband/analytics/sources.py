# -*- coding: utf-8 -*-
"""Reading sources for the analytics session.

A source fetches the batch of readings at or after a given instant, oldest
first. Failures surface as ``PersistenceError``.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import List, Optional, Protocol

import httpx
import pydantic

from ..config import settings
from ..errors import PersistenceError
from ..readings.models import Reading
from ..readings.storage import ReadingStore, format_timestamp


class ReadingSource(Protocol):
    async def fetch_since(self, start: datetime) -> List[Reading]:
        ...


class StoreReadingSource:
    """Reads straight from a local ``ReadingStore`` off the event loop."""

    def __init__(self, store: ReadingStore) -> None:
        self.store = store

    async def fetch_since(self, start: datetime) -> List[Reading]:
        return await asyncio.to_thread(self.store.fetch_since, start)


class HttpReadingSource:
    """Reads from a running service through ``GET /api/readings``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport

    async def fetch_since(self, start: datetime) -> List[Reading]:
        url = f"{self.base_url}/api/readings"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(url, params={"since": format_timestamp(start)})
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PersistenceError(f"Failed to fetch readings from {url}: {exc}") from exc

        try:
            return [Reading.model_validate(item) for item in data.get("readings", [])]
        except (pydantic.ValidationError, TypeError, AttributeError) as exc:
            raise PersistenceError(f"Malformed readings payload from {url}: {exc}") from exc
