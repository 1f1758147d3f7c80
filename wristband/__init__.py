# -*- coding: utf-8 -*-
"""Wristband vitals service: ingestion, live monitor and windowed analytics."""
