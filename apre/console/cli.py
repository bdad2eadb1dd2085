"""
Report Console Command Line

Usage:
    apre-console feedback-by-salesperson --salesperson "Roger Rabbit"
    apre-console channel-rating-by-month --month 1
    apre-console sales-by-region --region North
    apre-console salespeople [--source sales]
    apre-console regions
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from apre.config.logging import configure_logging
from apre.console.client import GatewayClient, GatewayError
from apre.console.pages import (
    PAGES,
    ChannelRatingByMonthPage,
    FeedbackBySalespersonPage,
    SalesByRegionPage,
)
from apre.console.render import render_page

EXIT_OK = 0
EXIT_GATEWAY_ERROR = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apre-console", description="APRE report console")
    parser.add_argument("--api-url", help="Gateway base URL, e.g. http://localhost:3000/api")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="report", required=True)

    feedback = subparsers.add_parser(
        FeedbackBySalespersonPage.name,
        help="Feedback totals and average rating per channel for a salesperson",
    )
    feedback.add_argument("--salesperson", required=True)

    rating = subparsers.add_parser(
        ChannelRatingByMonthPage.name,
        help="Average rating per channel for a month",
    )
    rating.add_argument("--month", type=int, required=True, choices=range(1, 13), metavar="1-12")

    region = subparsers.add_parser(
        SalesByRegionPage.name,
        help="Total sales per salesperson within a region",
    )
    region.add_argument("--region", required=True)

    salespeople = subparsers.add_parser("salespeople", help="List distinct salespeople")
    salespeople.add_argument(
        "--source",
        choices=["feedback", "sales"],
        default="feedback",
        help="Collection to list salespeople from (default: feedback)",
    )

    subparsers.add_parser("regions", help="List distinct sales regions")

    return parser


async def run_report(args: argparse.Namespace, client: GatewayClient) -> int:
    if args.report == "salespeople":
        if args.source == "sales":
            names = await client.sales_salespeople()
        else:
            names = await client.feedback_salespeople()
        print("\n".join(names))
        return EXIT_OK

    if args.report == "regions":
        print("\n".join(await client.regions()))
        return EXIT_OK

    page = PAGES[args.report](client)
    page.set_value(getattr(args, page.field_name))

    if not page.is_valid():
        print(f"A {page.field_name} is required", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if not await page.submit():
        print(f"Error: {page.error}", file=sys.stderr)
        return EXIT_GATEWAY_ERROR

    print(render_page(page))
    return EXIT_OK


async def _main(args: argparse.Namespace) -> int:
    async with GatewayClient(base_url=args.api_url) as client:
        try:
            return await run_report(args, client)
        except GatewayError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_GATEWAY_ERROR


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, log_format="text")
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
