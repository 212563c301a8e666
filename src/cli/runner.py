# src/cli/runner.py

"""Headless CLI for browsing the catalog and checking emails."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from src.filters.catalog_filter import CatalogFacets, CatalogFilter
from src.ingestion.catalog_fetcher import CatalogFetcher
from src.models.filter_query import FilterQuery
from src.models.product import Product
from src.services.email_authorizer import EmailAuthorizer
from src.services.exceptions import InvalidEmailError, StorefrontError

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    """Serialise a product list to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "name": p.name,
            "price": p.price,
            "brand": p.marca,
            "category": p.category,
            "subcategory": p.subcategory,
            "ages": [a for a in p.ages if a],
            "opinion": p.opiniao,
            "link": p.link,
        }
        for p in products
    ]


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Catalog Results",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=50)
    table.add_column("Brand", style="magenta")
    table.add_column("Category")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Link", overflow="fold", style="dim")

    for idx, p in enumerate(products, 1):
        price_str = f"R$ {p.price:,.2f}" if p.price > 0 else "—"
        category = (
            f"{p.category} / {p.subcategory}"
            if p.subcategory
            else p.category
        )
        table.add_row(
            str(idx),
            p.name[:50],
            p.marca or "—",
            category,
            price_str,
            p.link,
        )

    Console().print(table)


def _load_catalog(fetcher: CatalogFetcher | None = None) -> list[Product]:
    fetcher = fetcher or CatalogFetcher()
    products = fetcher.fetch_products()
    if fetcher.last_error:
        _err.print(
            "[red]Failed to load products. "
            f"Please try again later.[/red] [dim]{fetcher.last_error}[/dim]"
        )
    return products


def cli_search(
    query: FilterQuery,
    output_format: str = "json",
    fetcher: CatalogFetcher | None = None,
) -> int:
    """Run one catalog search; returns an exit code (0=ok, 1=nothing)."""
    products = _load_catalog(fetcher)
    result = CatalogFilter.apply(products, query)

    if not result.searched:
        _err.print(
            "[yellow]Nothing to search: give a query or a filter.[/yellow]"
        )
        return 1
    if not result.products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ {len(result.products)} products"
        f" of {len(products)}[/green]"
    )
    if output_format == "table":
        _print_table(result.products)
    else:
        json.dump(
            _products_to_dicts(result.products),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


def cli_facets(
    category: str | None = None,
    fetcher: CatalogFetcher | None = None,
) -> int:
    """Print filter options as JSON (subcategories when *category* is set)."""
    facets = CatalogFacets.from_products(_load_catalog(fetcher))
    if category is not None:
        data: dict[str, list[str]] = {
            "subcategories": facets.subcategories_for(category),
        }
    else:
        data = {
            "brands": facets.brands,
            "categories": facets.categories,
            "ages": facets.ages,
        }
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


async def cli_check_email(
    email: str,
    authorizer: EmailAuthorizer | None = None,
) -> int:
    """Check *email* and print the login response (0=authorized)."""
    authorizer = authorizer or EmailAuthorizer()
    try:
        result = await authorizer.authorize(email)
    except InvalidEmailError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 2
    except StorefrontError as exc:
        logger.error("Email check failed: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 2

    json.dump(
        result.to_response(debug=authorizer.debug),
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")
    return 0 if result.authorized else 1
