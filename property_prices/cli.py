"""CLI for price paid searches and postcode lookups.

Usage:
    python -m property_prices.cli search "PL6 8RU" --limit 5 --sort-by price
    python -m property_prices.cli search --street "pattinson drive" --city plymouth --min-price 150000
    python -m property_prices.cli nearby "AA1 1AA" --radius 2000 --limit 20
    python -m property_prices.cli nearby --easting 615000 --northing 157000
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys

from property_prices.config import settings
from property_prices.data.postcodes import get_postcode_store
from property_prices.engine.nearby import lookup_postcodes
from property_prices.engine.search import search_properties
from property_prices.errors import PropertyPricesError
from property_prices.models.postcode import PostcodeLookupCriteria
from property_prices.models.property import SearchCriteria

logger = logging.getLogger(__name__)


def print_json(result) -> None:
    print(json.dumps(dataclasses.asdict(result), indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UK property prices and postcode lookups")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search price paid transactions")
    search.add_argument("postcode", nargs="?", help="Postcode, e.g. 'PL6 8RU'")
    search.add_argument("--street", help="Street name (with --city)")
    search.add_argument("--city", help="Town or city (with --street)")
    search.add_argument("--min-price", type=int)
    search.add_argument("--max-price", type=int)
    search.add_argument(
        "--type", dest="property_type",
        choices=["detached", "semi-detached", "terraced", "flat", "other"],
    )
    search.add_argument("--from", dest="from_date", help="Earliest date, YYYY-MM-DD")
    search.add_argument("--to", dest="to_date", help="Latest date, YYYY-MM-DD")
    search.add_argument("--sort-by", choices=["date", "price"], default="date")
    search.add_argument("--sort-order", choices=["asc", "desc"], default="desc")
    search.add_argument("--offset", type=int, default=0)
    search.add_argument("--limit", type=int, default=10)
    search.add_argument("--endpoint", default=settings.land_registry_endpoint, help="SPARQL endpoint")

    nearby = sub.add_parser("nearby", help="Nearest postcodes to a postcode or grid reference")
    nearby.add_argument("postcode", nargs="?", help="Centre postcode")
    nearby.add_argument("--easting", type=float)
    nearby.add_argument("--northing", type=float)
    nearby.add_argument("--radius", dest="radius_meters", type=float, help="Search radius in metres")
    nearby.add_argument("--limit", type=int, default=10)
    nearby.add_argument("--include-self", action="store_true", help="Include the centre postcode")
    nearby.add_argument("--admin-district", help="Only postcodes in this admin district code")
    nearby.add_argument("--db", default=settings.postcode_db_path, help="SQLite database path")

    return parser


async def run_search(args: argparse.Namespace) -> None:
    criteria = SearchCriteria(
        postcode=args.postcode,
        street=args.street,
        city=args.city,
        min_price=args.min_price,
        max_price=args.max_price,
        property_type=args.property_type,
        from_date=args.from_date,
        to_date=args.to_date,
        sort_by=args.sort_by,
        sort_order=args.sort_order,
        offset=args.offset,
        limit=args.limit,
    )
    print_json(await search_properties(args.endpoint, criteria))


def run_nearby(args: argparse.Namespace) -> None:
    criteria = PostcodeLookupCriteria(
        postcode=args.postcode,
        easting=args.easting,
        northing=args.northing,
        radius_meters=args.radius_meters,
        limit=args.limit,
        include_self=args.include_self,
        admin_district=args.admin_district,
    )
    print_json(lookup_postcodes(criteria, get_postcode_store(args.db)))


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s - %(name)s - %(asctime)s - %(message)s",
        stream=sys.stderr,
    )
    try:
        if args.command == "search":
            asyncio.run(run_search(args))
        else:
            run_nearby(args)
    except PropertyPricesError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
