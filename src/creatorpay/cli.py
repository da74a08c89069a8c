"""Operator command line for estimates, saved creators, offers, and leads.

Provides an argparse-based tool wrapping the estimation engine, the creator
record store, and the offer composer.  Output formats: table (default) or
JSON.

Usage::

    creatorpay estimate --views 100000 --campaign link --rev-share 15
    creatorpay creators add --name "Jane Doe" --views 250000 --package pack3
    creatorpay creators list --format json
    creatorpay offer 3f2c9a...
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from creatorpay.app import configure_logging, initialize_services, shutdown_services
from creatorpay.calculator import Calculator
from creatorpay.config import get_settings
from creatorpay.domain.errors import PersistenceError
from creatorpay.domain.models import CreatorDraft, CreatorRecord
from creatorpay.domain.types import CampaignType, PaymentPackage
from creatorpay.formatting import (
    format_cents,
    format_count,
    format_currency,
    format_percent,
    format_ratio,
)
from creatorpay.offer.composer import compose_breakdown, compose_breakdown_note, compose_share_text
from creatorpay.pricing.engine import Estimate, estimate
from creatorpay.store.creators import CreatorRecordStore
from creatorpay.store.leads import LeadStore

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_STORAGE = 2


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Path to the state database (default: CREATORPAY_DB_PATH or data/creatorpay.db)",
    )


def _add_metric_arguments(parser: argparse.ArgumentParser) -> None:
    # Metrics are taken as raw text; unparseable or negative values become zero.
    for name in ("views", "likes", "comments", "shares"):
        parser.add_argument(f"--{name}", type=str, default="", help=f"Average {name} per post")
    parser.add_argument(
        "--campaign",
        type=str,
        choices=[c.value for c in CampaignType],
        default=None,
        help="Campaign type (default: from settings)",
    )
    parser.add_argument(
        "--package",
        type=str,
        choices=[p.value for p in PaymentPackage],
        default=None,
        help="Payment package (default: from settings)",
    )
    parser.add_argument(
        "--rev-share",
        type=str,
        default=None,
        dest="rev_share",
        help="Revenue share percent, clamped to 10-30 (default: from settings)",
    )


def _add_identity_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", type=str, default="", help="Creator name (required)")
    parser.add_argument("--email", type=str, default=None, help="Contact email")
    parser.add_argument("--tiktok", type=str, default=None, help="TikTok profile URL")
    parser.add_argument("--instagram", type=str, default=None, help="Instagram profile URL")
    parser.add_argument("--youtube", type=str, default=None, help="YouTube channel URL")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all subcommands.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="creatorpay",
        description="Estimate fair creator compensation and manage saved creators",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    estimate_parser = commands.add_parser("estimate", help="Estimate payout from metrics")
    _add_metric_arguments(estimate_parser)
    estimate_parser.add_argument(
        "--proposed-cpm",
        type=str,
        default=None,
        dest="proposed_cpm",
        help="CPM to check for profitability",
    )
    estimate_parser.add_argument(
        "--current-offer",
        type=str,
        default=None,
        dest="current_offer",
        help="What brands currently pay per video",
    )
    estimate_parser.add_argument(
        "--breakdown",
        action="store_true",
        help="Show how the estimate was calculated",
    )
    _add_common_arguments(estimate_parser)

    creators = commands.add_parser("creators", help="Manage saved creators")
    creator_actions = creators.add_subparsers(dest="action", required=True)

    add_parser = creator_actions.add_parser("add", help="Save a new creator")
    _add_identity_arguments(add_parser)
    _add_metric_arguments(add_parser)
    _add_common_arguments(add_parser)

    list_parser = creator_actions.add_parser("list", help="List saved creators")
    _add_common_arguments(list_parser)

    show_parser = creator_actions.add_parser("show", help="Show a creator and its estimate")
    show_parser.add_argument("record_id", type=str)
    _add_common_arguments(show_parser)

    update_parser = creator_actions.add_parser(
        "update", help="Replace a saved creator (omitted fields reset to defaults)"
    )
    update_parser.add_argument("record_id", type=str)
    _add_identity_arguments(update_parser)
    _add_metric_arguments(update_parser)
    _add_common_arguments(update_parser)

    delete_parser = creator_actions.add_parser("delete", help="Delete a saved creator")
    delete_parser.add_argument("record_id", type=str)
    _add_common_arguments(delete_parser)

    offer_parser = commands.add_parser("offer", help="Compose offer text for a saved creator")
    offer_parser.add_argument("record_id", type=str)
    _add_common_arguments(offer_parser)

    leads = commands.add_parser("leads", help="Capture and list leads")
    lead_actions = leads.add_subparsers(dest="action", required=True)

    lead_add = lead_actions.add_parser("add", help="Capture a lead with its payout estimate")
    lead_add.add_argument("email", type=str)
    _add_metric_arguments(lead_add)
    _add_common_arguments(lead_add)

    lead_list = lead_actions.add_parser("list", help="List captured leads")
    _add_common_arguments(lead_list)

    return parser


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_estimate_table(result: Estimate, package: PaymentPackage) -> str:
    """Format an estimate as aligned ``label  value`` lines.

    Args:
        result: The estimate to render.
        package: Payment package used for the package total.

    Returns:
        The formatted block.
    """
    funnel = result.funnel
    rows: list[tuple[str, str]] = [
        ("Campaign", result.campaign_type.label),
        ("Revenue share", f"{format_percent(result.revenue_share_percent)} ({result.tier.label})"),
        ("Unique engaged", format_count(funnel.unique_engaged)),
        ("Profile clicks", format_count(funnel.profile_clicks)),
        ("Installs", format_count(funnel.installs)),
        ("Paid users", format_count(funnel.paid_users)),
        ("Revenue", format_currency(funnel.revenue)),
        ("Payout per video", format_currency(funnel.payout)),
        ("Earnings range",
         f"{format_currency(result.earnings.low)} - {format_currency(result.earnings.high)}"),
        ("CPM", format_cents(funnel.cpm)),
        ("CAC", format_cents(funnel.cac)),
        (f"Total ({package.label})", format_currency(funnel.payout * package.post_count)),
        ("Verdict", result.assessment.label),
    ]

    if result.assessment.shortfall is not None:
        rows.append(("Shortfall", format_currency(result.assessment.shortfall)))
    if result.overpriced:
        rows.append(("Warning", "Payout exceeds 35% of revenue"))

    if result.reverse is not None:
        reverse = result.reverse
        rows.extend([
            ("Implied payout", format_currency(reverse.implied_payout)),
            ("Profit per video", format_currency(reverse.profit_per_video)),
            ("ROAS", format_ratio(reverse.roas)),
            ("Profit margin", format_percent(reverse.profit_percent)),
        ])

    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label.ljust(width)}  {value}" for label, value in rows)


def format_creators_table(records: Sequence[CreatorRecord]) -> str:
    """Format saved creators with their freshly computed payouts.

    Args:
        records: Records in storage order.

    Returns:
        Formatted table string with header row.
    """
    if not records:
        return "No creators saved."

    headers = ["ID", "Name", "Campaign", "Package", "Share", "Views", "Payout"]
    widths = [32, 24, 12, 12, 6, 12, 10]

    def truncate(value: str, width: int) -> str:
        if len(value) > width:
            return value[: width - 3] + "..."
        return value

    lines: list[str] = []
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True))
    lines.append(header_line)
    lines.append("-" * len(header_line))

    for record in records:
        result = estimate(record.metrics, record.campaign_type, record.revenue_share_percent)
        cells = [
            record.id,
            record.name,
            record.campaign_type.label,
            record.payment_package.label,
            f"{record.revenue_share_percent.normalize():f}%",
            format_count(record.metrics.views),
            format_currency(result.funnel.payout),
        ]
        lines.append(
            "  ".join(truncate(c, w).ljust(w) for c, w in zip(cells, widths, strict=True))
        )

    return "\n".join(lines)


def format_json(payload: Any) -> str:
    """Format a JSON-compatible payload as pretty-printed JSON."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _calculator_from_args(args: argparse.Namespace, base: Calculator) -> Calculator:
    calc = Calculator(
        campaign_type=CampaignType(args.campaign) if args.campaign else base.campaign_type,
        payment_package=PaymentPackage(args.package) if args.package else base.payment_package,
        revenue_share_percent=base.revenue_share_percent,
    )
    if args.rev_share is not None:
        calc.set_revenue_share(args.rev_share)
    calc.set_metrics_text(args.views, args.likes, args.comments, args.shares)
    return calc


def _draft_from_args(args: argparse.Namespace, base: Calculator) -> CreatorDraft:
    calc = _calculator_from_args(args, base)
    return CreatorDraft(
        name=args.name,
        email=args.email,
        tiktok_url=args.tiktok,
        instagram_url=args.instagram,
        youtube_url=args.youtube,
        metrics=calc.metrics,
        campaign_type=calc.campaign_type,
        payment_package=calc.payment_package,
        revenue_share_percent=calc.revenue_share_percent,
    )


def _print_record(record: CreatorRecord, calc: Calculator, output_format: str) -> None:
    result = calc.estimate()
    if output_format == "json":
        print(format_json({
            "record": record.model_dump(mode="json"),
            "estimate": result.model_dump(mode="json"),
        }))
        return
    print(f"{record.name} ({record.id})")
    for label, value in (
        ("Email", record.email),
        ("TikTok", record.tiktok_url),
        ("Instagram", record.instagram_url),
        ("YouTube", record.youtube_url),
    ):
        if value:
            print(f"  {label}: {value}")
    print(format_estimate_table(result, record.payment_package))


def _run_estimate(args: argparse.Namespace, base: Calculator) -> int:
    calc = _calculator_from_args(args, base)
    if args.proposed_cpm is not None:
        calc.set_proposed_cpm(args.proposed_cpm)
    if args.current_offer is not None:
        calc.set_current_offer(args.current_offer)

    result = calc.estimate()
    rows = compose_breakdown(result.funnel, calc.campaign_type, calc.revenue_share_percent)

    if args.output_format == "json":
        payload: dict[str, Any] = result.model_dump(mode="json")
        payload["share_text"] = compose_share_text(result.funnel.payout)
        if args.breakdown:
            payload["breakdown"] = [row.model_dump() for row in rows]
        print(format_json(payload))
        return EXIT_OK

    print(format_estimate_table(result, calc.payment_package))
    if args.breakdown:
        print()
        print(compose_breakdown_note(calc.revenue_share_percent))
        for row in rows:
            print(f"  {row.label}: {row.value}  ({row.hint})")
    return EXIT_OK


def _run_creators(args: argparse.Namespace, services: dict[str, Any]) -> int:
    store: CreatorRecordStore = services["creator_store"]
    base: Calculator = services["calculator"]

    if args.action == "list":
        records = store.list()
        if args.output_format == "json":
            print(format_json([r.model_dump(mode="json") for r in records]))
        else:
            print(format_creators_table(records))
        return EXIT_OK

    if args.action in ("add", "update"):
        draft = _draft_from_args(args, base)
        if args.action == "add":
            outcome = store.create(draft)
        else:
            outcome = store.update(args.record_id, draft)
        if not outcome.ok or outcome.record is None:
            print(f"Error: {outcome.error}", file=sys.stderr)
            return EXIT_REJECTED
        if args.output_format == "json":
            print(format_json(outcome.record.model_dump(mode="json")))
        else:
            print(f"Saved {outcome.record.name} ({outcome.record.id})")
        return EXIT_OK

    if args.action == "delete":
        store.delete(args.record_id)
        print(f"Deleted {args.record_id}")
        return EXIT_OK

    # show
    record = store.get(args.record_id)
    if record is None or not base.replay(store, args.record_id):
        print(f"Error: no creator with id '{args.record_id}'", file=sys.stderr)
        return EXIT_REJECTED
    _print_record(record, base, args.output_format)
    return EXIT_OK


def _run_offer(args: argparse.Namespace, services: dict[str, Any]) -> int:
    store: CreatorRecordStore = services["creator_store"]
    calc: Calculator = services["calculator"]

    record = store.get(args.record_id)
    if record is None or not calc.replay(store, args.record_id):
        print(f"Error: no creator with id '{args.record_id}'", file=sys.stderr)
        return EXIT_REJECTED

    text = calc.offer_text(creator_name=record.name)
    if args.output_format == "json":
        print(format_json({"record_id": record.id, "offer": text}))
    else:
        print(text)
    return EXIT_OK


def _run_leads(args: argparse.Namespace, services: dict[str, Any]) -> int:
    leads: LeadStore = services["lead_store"]

    if args.action == "list":
        captured = leads.list()
        if args.output_format == "json":
            print(format_json([lead.model_dump(mode="json") for lead in captured]))
        elif not captured:
            print("No leads captured.")
        else:
            for lead in captured:
                print(f"{lead.timestamp}  {lead.email}  ${lead.payout:,}")
        return EXIT_OK

    calc = _calculator_from_args(args, services["calculator"])
    lead = leads.capture(args.email, calc.estimate().funnel.payout)
    if lead is None:
        print("Error: email must not be empty", file=sys.stderr)
        return EXIT_REJECTED
    if args.output_format == "json":
        print(format_json(lead.model_dump(mode="json")))
    else:
        print(f"Captured {lead.email} at ${lead.payout:,}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the selected command, and return an exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.db:
        settings = settings.model_copy(update={"db_path": Path(args.db)})
    configure_logging(production=settings.production)

    if args.command == "estimate":
        defaults = Calculator(
            campaign_type=settings.default_campaign_type,
            payment_package=settings.default_payment_package,
            revenue_share_percent=settings.default_revenue_share_percent,
        )
        return _run_estimate(args, defaults)

    services = initialize_services(settings)
    try:
        if args.command == "creators":
            return _run_creators(args, services)
        if args.command == "offer":
            return _run_offer(args, services)
        return _run_leads(args, services)
    except PersistenceError as exc:
        logger.error("command_failed", command=args.command, reason=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_STORAGE
    finally:
        shutdown_services(services)


if __name__ == "__main__":
    sys.exit(main())
