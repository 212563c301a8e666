# src/filters/catalog_filter.py

"""In-memory catalog search and facet extraction."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.models.filter_query import FilterQuery, FilterResult
from src.models.product import Product

logger = logging.getLogger("storefront.filters")

# Header/default tokens that leak into option lists from the spreadsheet
_IGNORED_CATEGORIES = frozenset({"categoria", "uncategorized"})
_IGNORED_AGES = frozenset({"idade"})


class CatalogFilter:
    """Answer conjunctive filter queries over the loaded catalog."""

    @staticmethod
    def matches_text(product: Product, words: list[str]) -> bool:
        """Any word is a substring of the name or the brand (or no words)."""
        if not words:
            return True
        name = product.name.lower()
        brand = product.marca.lower()
        return any(w in name or w in brand for w in words)

    @staticmethod
    def matches(product: Product, query: FilterQuery) -> bool:
        """True when *product* satisfies every active dimension of *query*."""
        if not CatalogFilter.matches_text(product, query.words):
            return False
        if query.brand and product.marca != query.brand:
            return False
        if query.category and product.category != query.category:
            return False
        if query.subcategory and product.subcategory != query.subcategory:
            return False
        if query.age and query.age not in product.ages:
            return False
        return True

    @staticmethod
    def apply(
        products: list[Product],
        query: FilterQuery,
    ) -> FilterResult:
        """Filter *products* by *query*.

        An empty query performs no search: the result is empty and
        ``searched`` is ``False``.
        """
        if query.is_empty:
            return FilterResult(products=[], searched=False)

        matched = [
            p for p in products if CatalogFilter.matches(p, query)
        ]
        logger.debug(
            "Query %r matched %d of %d products",
            query,
            len(matched),
            len(products),
        )
        return FilterResult(products=matched, searched=True)


def _unique_sorted(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v and v.strip()})


@dataclass
class CatalogFacets:
    """Option lists offered by the storefront for each filter dimension."""

    brands: list[str] = field(default_factory=lambda: list[str]())
    categories: list[str] = field(default_factory=lambda: list[str]())
    ages: list[str] = field(default_factory=lambda: list[str]())
    products: list[Product] = field(
        default_factory=lambda: list[Product](), repr=False
    )

    @classmethod
    def from_products(cls, products: list[Product]) -> "CatalogFacets":
        """Collect the unique, sorted option values from *products*."""
        brands = _unique_sorted(p.marca for p in products)
        categories = [
            c
            for c in _unique_sorted(p.category for p in products)
            if c.lower() not in _IGNORED_CATEGORIES
        ]
        ages = [
            a
            for a in _unique_sorted(
                age for p in products for age in p.ages
            )
            if a.strip().lower() not in _IGNORED_AGES
        ]
        return cls(
            brands=brands,
            categories=categories,
            ages=ages,
            products=list(products),
        )

    def subcategories_for(self, category: str) -> list[str]:
        """Unique, sorted subcategories of the products in *category*."""
        return _unique_sorted(
            p.subcategory
            for p in self.products
            if p.category == category
        )
