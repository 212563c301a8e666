# src/models/product.py

"""Product data model for catalog records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A single recommended product parsed from the catalog spreadsheet."""

    id: int
    name: str
    description: str = ""
    price: float = 0.0
    image_url: str = "https://via.placeholder.com/150"
    category: str = ""
    subcategory: str = ""
    marca: str = ""
    opiniao: str = ""
    opiniao_consulta: str = ""
    link: str = ""
    idade: str = ""
    idade2: str = ""
    idade3: str = ""

    @property
    def ages(self) -> tuple[str, str, str]:
        """The three age-range tags, in column order."""
        return (self.idade, self.idade2, self.idade3)
