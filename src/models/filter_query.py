# src/models/filter_query.py

"""Filter query and result containers for catalog searches."""

from dataclasses import dataclass, field

from src.models.product import Product


@dataclass(frozen=True)
class FilterQuery:
    """One catalog search: free text plus optional exact-match dimensions."""

    text: str = ""
    brand: str = ""
    category: str = ""
    subcategory: str = ""
    age: str = ""

    @property
    def words(self) -> list[str]:
        """Whitespace-delimited lowercase words of the free-text query."""
        return self.text.lower().split()

    @property
    def is_empty(self) -> bool:
        """True when no dimension of the query is set."""
        return not (
            self.words
            or self.brand
            or self.category
            or self.subcategory
            or self.age
        )


@dataclass
class FilterResult:
    """Outcome of a catalog search.

    ``searched`` is ``False`` when the query was empty and no search was
    performed, which is distinct from a search that matched nothing.
    """

    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    searched: bool = False
