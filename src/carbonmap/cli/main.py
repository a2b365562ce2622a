"""Unified CLI for carbon calculations and the HTTP server."""

import argparse
import json
import sys
from pathlib import Path

from carbonmap.analysis import CarbonReport, build_report
from carbonmap.cli import check
from carbonmap.core.config import configure_logging, settings
from carbonmap.core.units import format_tonnes, format_usd
from carbonmap.satellite import gee

# =============================================================================
# Output
# =============================================================================


def print_report(report: CarbonReport) -> None:
    """Print a carbon report as human-readable text."""
    print("Stored Carbon")
    print("=" * 70)
    if report["aboveground_tonnes"] or report["belowground_tonnes"]:
        print(f"  Above-ground:  {format_tonnes(report['aboveground_tonnes'], 1):>14} t C")
        print(f"  Below-ground:  {format_tonnes(report['belowground_tonnes'], 1):>14} t C")
    print(f"  Total:         {format_tonnes(report['total_tonnes'], 1):>14} t C")
    print()

    credits = report["credits"]
    if credits is None:
        print("No carbon credit estimate available (no stored carbon).")
        return

    print("Carbon Credits")
    print("=" * 70)
    print(f"  CO2 equivalent: {format_tonnes(credits['co2_equivalent_tonnes'], 1)} t CO2e")
    print(f"  Project size:   {credits['project_size']} (complexity: {credits['project_complexity']})")
    print()
    print(f"  {'Market':<14} {'Min':>16} {'Average':>16} {'Max':>16}")
    print("  " + "-" * 64)
    for name, tier in credits["credit_estimates"].items():
        print(f"  {name:<14} {format_usd(tier['min']):>16} {format_usd(tier['avg']):>16} {format_usd(tier['max']):>16}")
    print()

    print("Recommended Methodologies")
    print("=" * 70)
    for methodology in credits["recommended_methodologies"]:
        print(f"  {methodology['name']} ({methodology['organization']})")
        print(f"    Timeline: {methodology['timeline']}  Cost: {methodology['cost_estimate']}")
    print()

    print("Suggestions")
    print("=" * 70)
    for suggestion in report["suggestions"]:
        print(f"  [{suggestion['priority'].upper()}] {suggestion['title']}")
        print(f"    {suggestion['description']}")
        print(f"    -> {suggestion['action']}")
    print()
    print(credits["market_info"]["note"])


def _emit(report: CarbonReport, as_json: bool) -> None:
    if as_json:
        print(json.dumps(report, indent=2))
    else:
        print_report(report)


# =============================================================================
# Commands
# =============================================================================


def cmd_estimate(args: argparse.Namespace) -> int:
    """Estimate credits for a known carbon total."""
    _emit(build_report({"total_tonnes": args.tonnes}), args.json)
    return 0


def load_geometry(path: Path) -> dict:
    """Load a GeoJSON geometry from a file (Geometry, Feature, or first Feature of a collection)."""
    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise gee.GeometryError(f"{path} is not a GeoJSON object")
    if data.get("type") == "FeatureCollection":
        features = data.get("features") or []
        if not features:
            raise gee.GeometryError(f"{path} contains no features")
        data = features[0]
    return data


def cmd_calculate(args: argparse.Namespace) -> int:
    """Run the Earth Engine reduction for a GeoJSON file, then estimate."""
    try:
        geometry = load_geometry(args.geojson)
        gee.initialize()
        totals = gee.calculate_carbon(geometry)
    except (OSError, json.JSONDecodeError, gee.GeometryError) as e:
        print(f"Error: could not read geometry: {e}", file=sys.stderr)
        return 2
    except (gee.EarthEngineConfigError, gee.EarthEngineError) as e:
        print(f"Error: calculation failed: {e}", file=sys.stderr)
        return 1

    _emit(build_report(totals), args.json)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "carbonmap.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Verify configuration and Earth Engine access."""
    return 0 if check.main() else 1


# -----------------------------------------------------------------------------
# CLI Entry Point
# -----------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carbonmap",
        description="Biomass carbon and carbon credit estimates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  carbonmap estimate 1000                 Credits for 1,000 t of stored carbon
  carbonmap estimate 50000 --json         Same, as JSON
  carbonmap calculate region.geojson      Sum biomass carbon in a polygon via GEE
  carbonmap serve --port 4000             Run the HTTP API
  carbonmap check                         Verify GEE credentials
""",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # estimate - Credits from a carbon total
    estimate_parser = subparsers.add_parser("estimate", help="Estimate credits for a carbon total")
    estimate_parser.add_argument("tonnes", type=float, help="Total stored carbon in tonnes C")
    estimate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # calculate - Earth Engine reduction + estimate
    calculate_parser = subparsers.add_parser("calculate", help="Calculate carbon for a GeoJSON polygon")
    calculate_parser.add_argument("geojson", type=Path, help="GeoJSON file (Polygon, MultiPolygon, or Feature)")
    calculate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # serve - HTTP API
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    serve_parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # check - Configuration check
    subparsers.add_parser("check", help="Verify configuration and Earth Engine access")

    return parser


def cli_main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "estimate": cmd_estimate,
        "calculate": cmd_calculate,
        "serve": cmd_serve,
        "check": cmd_check,
    }

    if args.command not in commands:
        parser.print_help()
        return 0

    configure_logging()
    return commands[args.command](args)


def cli() -> None:
    """CLI entry point."""
    sys.exit(cli_main())


if __name__ == "__main__":
    cli()
