# -*- coding: utf-8 -*-
"""Error taxonomy shared by ingestion, storage and analytics."""

from __future__ import annotations


class WristbandError(Exception):
    """Base class for service errors."""


class ValidationError(WristbandError):
    """A required ingestion field is missing or parses to zero."""


class PersistenceError(WristbandError):
    """Reading from or writing to the datastore failed."""
