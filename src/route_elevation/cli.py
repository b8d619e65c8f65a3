from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from route_elevation.config import settings
from route_elevation.core.chart import render_sparkline
from route_elevation.core.formatting import summarize_stats
from route_elevation.core.models import TRAVEL_MODE_LABELS, TRAVEL_MODES, LocationData, RouteData, parse_lat_lng
from route_elevation.core.session import RouteSession
from route_elevation.errors import ConfigurationError, ProviderError
from route_elevation.providers.base import MappingProvider
from route_elevation.providers.factory import PROVIDER_NAMES, build_provider


def _resolve(provider: MappingProvider, text: str) -> LocationData:
    coord = parse_lat_lng(text)
    return provider.resolve_address(coord if coord is not None else text)


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def _stats_table(route: RouteData) -> Table:
    mode = TRAVEL_MODE_LABELS.get(route.travel_mode, route.travel_mode)
    table = Table(title=f"Route Statistics ({mode})")
    table.add_column("Stat")
    table.add_column("Value", justify="right")
    for label, value in summarize_stats(route.stats):
        table.add_row(label, value)
    return table


def main(argv: Optional[list] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="route-elevation",
        description="Elevation profile and statistics for a route between two points.",
    )
    ap.add_argument("--start", required=True, help="Start address or 'lat,lng'")
    ap.add_argument("--end", required=True, help="End address or 'lat,lng'")
    ap.add_argument("--mode", default="walking", choices=[m.lower() for m in TRAVEL_MODES])
    ap.add_argument("--provider", default=settings.default_provider, choices=list(PROVIDER_NAMES))
    ap.add_argument("--samples", type=int, default=settings.elevation_sample_points,
                    help="Maximum points for elevation sampling")
    ap.add_argument("--json", dest="json_path", default=None, help="Save route data to this JSON file")
    ap.add_argument("--width", type=int, default=60, help="Elevation chart width in characters")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    console = Console()

    try:
        provider = build_provider(args.provider)
        start = _resolve(provider, args.start)
        end = _resolve(provider, args.end)
    except (ConfigurationError, ProviderError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        return 1

    session = RouteSession(
        provider=provider,
        travel_mode=args.mode,
        sample_points=args.samples,
        auto_recalculate=False,
    )
    session.start = start
    session.end = end
    route = session.recalculate()

    if route is None:
        console.print(f"[red]{session.error}[/red]")
        return 1

    console.print(f"[green]Start:[/green] {start.address}")
    console.print(f"[red]End:[/red]   {end.address}")
    console.print(_stats_table(route))
    console.print("Elevation profile")
    console.print(render_sparkline(route.points, args.width), style="blue")

    if args.json_path:
        out = Path(args.json_path)
        _save_json(out, route.model_dump())
        console.print(f"Saved: {out.resolve()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
