# -*- coding: utf-8 -*-
"""
Command line entry point for the wristband vitals service.

Usage:
    wristband serve [--host HOST] [--port PORT]
    wristband simulate [--devices N] [--count M] [--interval SEC]
    wristband watch [--window 24h] [--device ALL]
    wristband export [--window 24h] [--device ALL] [--legacy] [-o FILE]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import httpx

from .config import WINDOW_CHOICES, settings

logger = logging.getLogger("wristband")


def _print_state(state) -> None:
    from .analytics.session import Failed, Loaded

    stamp = time.strftime("%H:%M:%S")
    if isinstance(state, Failed):
        print(f"[{stamp}] load failed: {state.reason}")
        return
    if not isinstance(state, Loaded):
        print(f"[{stamp}] loading...")
        return
    if state.is_empty:
        print(f"[{stamp}] no data in the last {state.window.value}")
        return
    s = state.stats
    print(
        f"[{stamp}] {state.window.value} {state.device_filter}: "
        f"readings={s.total_readings} devices={s.devices} "
        f"avgHR={s.avg_hr} ({s.hr_trend:+}%) minHR={s.min_hr} maxHR={s.max_hr} "
        f"avgTemp={s.avg_temp} ({s.temp_trend:+}%) avgSpO2={s.avg_spo2} ({s.spo2_trend:+}%)"
    )


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run("wristband.api:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Send simulated readings to the ingestion endpoint."""
    from .ingest.simulator import SimulationConfig, WristbandSimulator, send_sample

    simulator = WristbandSimulator(
        SimulationConfig(
            devices=args.devices,
            count=args.count,
            interval_sec=args.interval,
            seed=args.seed,
        )
    )
    sent = failed = 0
    with httpx.Client(base_url=args.url, timeout=settings.http_timeout) as client:
        for sample, sleep_sec in simulator.iter_samples():
            if sleep_sec > 0:
                time.sleep(sleep_sec)
            try:
                ok = send_sample(client, sample)
            except httpx.HTTPError as exc:
                logger.error("Failed to send sample: %s", exc)
                ok = False
            if ok:
                sent += 1
            else:
                failed += 1
    print(f"Sent {sent} readings ({failed} failed)")
    return 0 if failed == 0 else 1


async def _watch(args: argparse.Namespace) -> None:
    from .analytics.models import TimeWindow
    from .analytics.session import AnalyticsSession, RefreshScheduler
    from .analytics.sources import HttpReadingSource

    session = AnalyticsSession(
        HttpReadingSource(args.url),
        window=TimeWindow(args.window),
        device_filter=args.device,
    )
    scheduler = RefreshScheduler(session, interval_sec=args.interval, on_update=_print_state)
    scheduler.start()
    try:
        while scheduler.running:
            await asyncio.sleep(1)
    finally:
        await scheduler.stop()


def cmd_watch(args: argparse.Namespace) -> int:
    """Poll the service and print summary statistics on every refresh."""
    try:
        asyncio.run(_watch(args))
    except KeyboardInterrupt:
        pass
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Fetch the window once and write the filtered view as CSV."""
    from .analytics.export import export_csv, export_filename
    from .analytics.models import TimeWindow
    from .analytics.session import Failed, AnalyticsSession
    from .analytics.sources import HttpReadingSource

    session = AnalyticsSession(
        HttpReadingSource(args.url),
        window=TimeWindow(args.window),
        device_filter=args.device,
    )
    state = asyncio.run(session.refresh())
    if isinstance(state, Failed):
        print(f"Error: {state.reason}")
        return 1

    csv_text = export_csv(state.filtered, escape=settings.csv_escape and not args.legacy)
    if csv_text is None:
        print("No readings to export.")
        return 0

    out = Path(args.output) if args.output else Path(export_filename())
    out.write_text(csv_text, encoding="utf-8")
    print(f"Wrote {len(state.filtered)} readings to {out}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Wristband vitals service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    sim_parser = subparsers.add_parser("simulate", help="Send simulated readings")
    sim_parser.add_argument("--url", default=settings.api_url, help="Service base URL")
    sim_parser.add_argument("--devices", type=int, default=3, help="Number of devices (default: 3)")
    sim_parser.add_argument("--count", type=int, default=10, help="Readings per device (default: 10)")
    sim_parser.add_argument("--interval", type=float, default=1.0, help="Seconds between rounds (default: 1)")
    sim_parser.add_argument("--seed", type=int, default=None)

    for name, help_text in (("watch", "Poll analytics continuously"), ("export", "Export readings as CSV")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--url", default=settings.api_url, help="Service base URL")
        sub.add_argument("--window", default=settings.default_window, choices=WINDOW_CHOICES)
        sub.add_argument("--device", default="ALL", help="ALL or a device_id")
        if name == "watch":
            sub.add_argument(
                "--interval",
                type=float,
                default=settings.refresh_interval_sec,
                help=f"Refresh interval in seconds (default: {settings.refresh_interval_sec:g})",
            )
        else:
            sub.add_argument("--legacy", action="store_true", help="Plain join, no quoting (default follows WRISTBAND_CSV_ESCAPE)")
            sub.add_argument("-o", "--output", default=None, help="Output file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "serve": cmd_serve,
        "simulate": cmd_simulate,
        "watch": cmd_watch,
        "export": cmd_export,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
