# main.py

"""Entry point for the storefront command-line tools."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Recommendation storefront: catalog search and access checks.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser(
        "search", help="Search the product catalog."
    )
    search.add_argument(
        "query",
        nargs="?",
        default="",
        help="Free-text query matched against name and brand.",
    )
    search.add_argument("-b", "--brand", default="", help="Exact brand.")
    search.add_argument("-c", "--category", default="", help="Exact category.")
    search.add_argument(
        "-s", "--subcategory", default="", help="Exact subcategory."
    )
    search.add_argument("-a", "--age", default="", help="Age range tag.")
    search.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )

    facets = commands.add_parser(
        "facets", help="List the available filter options."
    )
    facets.add_argument(
        "-c",
        "--category",
        default=None,
        help="List the subcategories of this category instead.",
    )

    check = commands.add_parser(
        "check-email", help="Check whether an email may log in."
    )
    check.add_argument("email", help="Purchaser email address.")
    return parser


def main() -> None:
    """Dispatch to the requested sub-command."""
    log_file = setup_logging()
    logger.info("storefront starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    from src.cli.runner import cli_check_email, cli_facets, cli_search
    from src.models.filter_query import FilterQuery

    if args.command == "search":
        exit_code = cli_search(
            FilterQuery(
                text=args.query,
                brand=args.brand,
                category=args.category,
                subcategory=args.subcategory,
                age=args.age,
            ),
            output_format=args.output_format,
        )
    elif args.command == "facets":
        exit_code = cli_facets(category=args.category)
    else:
        exit_code = asyncio.run(cli_check_email(args.email))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
