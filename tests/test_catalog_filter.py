# tests/test_catalog_filter.py

"""Tests for CatalogFilter search semantics and CatalogFacets."""

import unittest

from src.filters.catalog_filter import CatalogFacets, CatalogFilter
from src.models.filter_query import FilterQuery
from src.models.product import Product


def _make_product(
    name: str,
    marca: str = "",
    category: str = "",
    subcategory: str = "",
    ages: tuple[str, str, str] = ("", "", ""),
    product_id: int = 1,
) -> Product:
    """Create a Product with only the searchable fields set."""
    return Product(
        id=product_id,
        name=name,
        marca=marca,
        category=category,
        subcategory=subcategory,
        idade=ages[0],
        idade2=ages[1],
        idade3=ages[2],
    )


class TestFilterQuery(unittest.TestCase):
    """FilterQuery helpers."""

    def test_words_are_lowercase_and_split(self) -> None:
        query = FilterQuery(text="  Kit   ENXOVAL\tbody ")
        self.assertEqual(query.words, ["kit", "enxoval", "body"])

    def test_whitespace_only_text_is_empty(self) -> None:
        self.assertTrue(FilterQuery(text="   ").is_empty)

    def test_any_dimension_makes_query_non_empty(self) -> None:
        self.assertFalse(FilterQuery(age="0-3m").is_empty)


class TestCatalogFilter(unittest.TestCase):
    """CatalogFilter.apply behaviour."""

    def setUp(self) -> None:
        self.products = [
            _make_product(
                "Enxoval Kit", "Tip Top", "Enxoval", "Roupas",
                ("0-3m", "3-6m", ""), 1,
            ),
            _make_product(
                "Carrinho Leve", "Burigotto", "Passeio", "Carrinhos",
                ("0-3m", "", ""), 2,
            ),
            _make_product(
                "Mamadeira", "Philips Avent", "Alimentação", "Mamadeiras",
                ("6-12m", "", ""), 3,
            ),
        ]

    def _ids(self, query: FilterQuery) -> list[int]:
        result = CatalogFilter.apply(self.products, query)
        return [p.id for p in result.products]

    def test_empty_query_not_searched(self) -> None:
        """An empty query returns nothing and flags no search."""
        result = CatalogFilter.apply(self.products, FilterQuery())
        self.assertEqual(result.products, [])
        self.assertFalse(result.searched)

    def test_no_match_is_searched(self) -> None:
        result = CatalogFilter.apply(
            self.products, FilterQuery(text="berço")
        )
        self.assertEqual(result.products, [])
        self.assertTrue(result.searched)

    def test_substring_text_match(self) -> None:
        """'enx' matches a product named 'Enxoval Kit'."""
        self.assertEqual(self._ids(FilterQuery(text="enx")), [1])

    def test_text_matches_brand(self) -> None:
        self.assertEqual(self._ids(FilterQuery(text="avent")), [3])

    def test_any_word_matches(self) -> None:
        """Words are OR-ed together."""
        self.assertEqual(
            self._ids(FilterQuery(text="carrinho mamadeira")), [2, 3]
        )

    def test_brand_and_category_conjunction(self) -> None:
        """brand=X and category=Y returns only products with both."""
        products = [
            _make_product("P1", "X", "Y", product_id=1),
            _make_product("P2", "X", "Z", product_id=2),
        ]
        result = CatalogFilter.apply(
            products, FilterQuery(brand="X", category="Y")
        )
        self.assertEqual([p.id for p in result.products], [1])

    def test_brand_is_exact_and_case_sensitive(self) -> None:
        self.assertEqual(self._ids(FilterQuery(brand="Tip Top")), [1])
        self.assertEqual(self._ids(FilterQuery(brand="tip top")), [])
        self.assertEqual(self._ids(FilterQuery(brand="Tip")), [])

    def test_subcategory_filter(self) -> None:
        self.assertEqual(
            self._ids(FilterQuery(subcategory="Carrinhos")), [2]
        )

    def test_age_matches_any_age_column(self) -> None:
        self.assertEqual(self._ids(FilterQuery(age="0-3m")), [1, 2])
        self.assertEqual(self._ids(FilterQuery(age="3-6m")), [1])

    def test_text_and_dimension_combined(self) -> None:
        self.assertEqual(
            self._ids(FilterQuery(text="kit carrinho", age="3-6m")), [1]
        )

    def test_preserves_catalog_order(self) -> None:
        self.assertEqual(self._ids(FilterQuery(age="0-3m")), [1, 2])


class TestCatalogFacets(unittest.TestCase):
    """CatalogFacets option lists."""

    def setUp(self) -> None:
        products = [
            _make_product("A", "Zeta", "Enxoval", "Roupas", ("0-3m", "idade", "")),
            _make_product("B", "Alfa", "Enxoval", "Banho", ("3-6m", "", "")),
            _make_product("C", " ", "Categoria", "", ("Idade", "", "")),
            _make_product("D", "Alfa", "Uncategorized", "X", ("", "", "")),
            _make_product("E", "", "Passeio", "", ("0-3m", "", "")),
        ]
        self.facets = CatalogFacets.from_products(products)

    def test_brands_unique_sorted_non_blank(self) -> None:
        self.assertEqual(self.facets.brands, ["Alfa", "Zeta"])

    def test_categories_skip_header_tokens(self) -> None:
        self.assertEqual(self.facets.categories, ["Enxoval", "Passeio"])

    def test_ages_across_columns(self) -> None:
        self.assertEqual(self.facets.ages, ["0-3m", "3-6m"])

    def test_subcategories_for_category(self) -> None:
        self.assertEqual(
            self.facets.subcategories_for("Enxoval"), ["Banho", "Roupas"]
        )
        self.assertEqual(self.facets.subcategories_for("Passeio"), [])
        self.assertEqual(self.facets.subcategories_for("Nope"), [])

    def test_empty_catalog(self) -> None:
        facets = CatalogFacets.from_products([])
        self.assertEqual(facets.brands, [])
        self.assertEqual(facets.categories, [])
        self.assertEqual(facets.ages, [])


if __name__ == "__main__":
    unittest.main()
