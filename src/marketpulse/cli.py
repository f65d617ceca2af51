"""Command-line interface for computing derived dashboard views."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping
from typing import Any

from marketpulse.config import Settings
from marketpulse.data import load_payload
from marketpulse.domain.models import ALL, SortKey, TrendAlignment
from marketpulse.errors import ConfigError, PayloadError
from marketpulse.logging import ViewLogger, setup_logger
from marketpulse.records import as_sequence, read_field
from marketpulse.trend import compute_trend, trend_summary
from marketpulse.views import (
    allocation_from_holdings,
    compose_alerts_view,
    compose_allocation,
    compose_assets_view,
    compose_dashboard,
    compose_news_view,
    merge_universes,
)

VIEWS = ("trend", "assets", "news", "alerts", "allocation", "dashboard")


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Compute derived market dashboard views")
    parser.add_argument("--view", choices=VIEWS, required=True, help="View to compute")
    parser.add_argument("--input", type=str, required=True, help="Primary API payload JSON file")
    parser.add_argument("--assets", type=str, help="Assets payload JSON file (trend view)")
    parser.add_argument("--filter", type=str, default=ALL, help="Type, category or severity")
    parser.add_argument("--search", type=str, default="", help="Text search query")
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        help="Comparator for assets and allocation views",
    )
    parser.add_argument("--sort-field", type=str, help="Record field the comparator reads")
    parser.add_argument(
        "--alignment",
        choices=[mode.value for mode in TrendAlignment],
        help="How price histories are joined in the trend view",
    )
    parser.add_argument(
        "--include-unlisted",
        action="store_true",
        help="Keep alert severities outside the canonical order",
    )
    parser.add_argument("--log-level", type=str, help="Logging level")
    parser.add_argument("--log-file", type=str, help="Also write log lines to this file")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level.strip().upper()
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.alignment:
        overrides["trend_alignment"] = args.alignment
    return settings.with_overrides(**overrides)


def validate_view_inputs(args: argparse.Namespace) -> None:
    """Reject argument combinations a view cannot use."""
    if args.view == "trend" and not args.assets:
        raise ConfigError("--view trend requires --assets")
    if args.view != "trend" and args.assets:
        raise ConfigError("--assets is only used by --view trend")


def compute_view(args: argparse.Namespace, settings: Settings, view_logger: ViewLogger) -> Any:
    """Load payloads and compute the requested view."""
    validate_view_inputs(args)
    payload = load_payload(args.input)

    if args.view == "trend":
        assets = load_payload(args.assets)
        points = compute_trend(payload, assets, alignment=settings.alignment())
        view_logger.trend(points, holdings=len(as_sequence(read_field(payload, "assets"))))
        return {"trend": points, "summary": trend_summary(points)}

    if args.view == "assets":
        assets = _asset_universe(payload)
        sort = args.sort or settings.default_sort_key()
        visible = compose_assets_view(
            assets,
            asset_type=args.filter,
            query=args.search,
            sort=sort,
            default_sort=settings.default_sort_key(),
            sort_field=args.sort_field,
        )
        view_logger.view("assets", len(assets), len(visible), {"sort": str(sort)})
        return visible

    if args.view == "news":
        items = as_sequence(payload)
        visible = compose_news_view(items, category=args.filter, query=args.search)
        view_logger.view("news", len(items), len(visible), {"category": args.filter})
        return visible

    if args.view == "alerts":
        stacks = compose_alerts_view(
            payload,
            severity=args.filter,
            order=settings.severity_order,
            include_unlisted=args.include_unlisted,
        )
        view_logger.buckets(stacks, key_name="severity", records_name="alerts")
        return stacks

    if args.view == "allocation":
        if read_field(payload, "assetAllocation") is not None:
            slices = compose_allocation(payload, sort=args.sort)
        else:
            slices = allocation_from_holdings(payload)
        view_logger.view("allocation", len(slices), len(slices))
        return slices

    panels = compose_dashboard(payload, settings.dashboard_limits())
    view_logger.view("dashboard", len(panels), sum(len(items) for items in panels.values()))
    return panels


def _asset_universe(payload: Any) -> list[Any]:
    if isinstance(payload, Mapping) and ("stocks" in payload or "crypto" in payload):
        return merge_universes(payload.get("stocks"), payload.get("crypto"))
    return as_sequence(payload)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        return 2
    setup_logger(settings.log_level, settings.log_file or None)
    view_logger = ViewLogger()
    try:
        result = compute_view(args, settings, view_logger)
    except (ConfigError, PayloadError) as exc:
        view_logger.error(str(exc))
        print(f"Input error: {exc}")
        return 2
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
