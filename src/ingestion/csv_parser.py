# src/ingestion/csv_parser.py

"""Tolerant CSV parsing for the published catalog spreadsheet.

The spreadsheet is maintained by hand, so column headers drift between
capitalisations and languages (``Nome`` / ``nome`` / ``name``).  Every
product field therefore resolves through an ordered tuple of candidate
column names, and the first non-empty value wins.
"""

import logging
import math

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("storefront.ingestion")

# Candidate column names per Product field, tried in order
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "name": ("Nome", "nome", "name"),
    "description": ("description", "Descricao", "descricao"),
    "price": ("price", "Preco", "preco"),
    "image_url": ("imagem", "Imagem", "imageUrl", "ImageUrl"),
    "category": ("category", "Categoria", "categoria"),
    "subcategory": ("subcategory", "Subcategory", "Subcategoria", "subcategoria"),
    "opiniao": ("Opiniao", "opiniao", "Opinion", "opinion"),
    "link": ("Link", "link", "URL", "url"),
    "marca": ("Marca", "marca", "Brand", "brand"),
    "opiniao_consulta": ("opiniao_consulta", "Opiniao_consulta", "OPINIAO_CONSULTA"),
    "idade": ("idade", "Idade", "IDADE"),
    "idade2": ("idade2", "Idade2", "IDADE2"),
    "idade3": ("idade3", "Idade3", "IDADE3"),
}

# Consultation-opinion token that keeps a row out of the catalog
EXCLUDED_CONSULTATION = "NA"


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into fields, honouring double-quoted sections.

    A ``"`` toggles the in-quotes state and is dropped from the output;
    commas only split fields outside quotes.  A doubled quote inside a
    quoted section is read as a single literal ``"``.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and line[i + 1:i + 2] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    values.append("".join(current))
    return values


def lookup(row: dict[str, str], candidates: tuple[str, ...]) -> str:
    """Return the first non-empty value among *candidates*, or ``""``."""
    for key in candidates:
        value = row.get(key)
        if value:
            return value
    return ""


def _parse_int(text: str, fallback: int) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return fallback


def _parse_float(text: str, fallback: float = 0.0) -> float:
    try:
        value = float(text.strip())
    except ValueError:
        return fallback
    # nan and inf are not prices
    return value if math.isfinite(value) else fallback


def row_to_product(row: dict[str, str], index: int) -> Product:
    """Map a header-keyed row onto a :class:`Product`.

    *index* is the 1-based data row number, used as the id when the
    ``id`` column is absent or not a number.
    """
    def field(name: str) -> str:
        return lookup(row, COLUMN_ALIASES[name])

    raw_id = field("id")
    raw_price = field("price")

    return Product(
        id=_parse_int(raw_id, index) if raw_id else index,
        name=field("name"),
        description=field("description"),
        price=_parse_float(raw_price) if raw_price else 0.0,
        image_url=field("image_url") or Settings.PLACEHOLDER_IMAGE_URL,
        category=field("category") or Settings.DEFAULT_CATEGORY,
        subcategory=field("subcategory"),
        opiniao=field("opiniao"),
        opiniao_consulta=field("opiniao_consulta"),
        link=field("link"),
        marca=field("marca"),
        idade=field("idade"),
        idade2=field("idade2"),
        idade3=field("idade3"),
    )


def is_listed(product: Product) -> bool:
    """False when the consultation opinion is exactly the token ``NA``."""
    return (
        product.opiniao_consulta.strip().upper() != EXCLUDED_CONSULTATION
    )


def parse_csv(csv_text: str) -> list[Product]:
    """Parse catalog CSV text into products, in source row order.

    Rows whose field count differs from the header are dropped, as are
    rows excluded by :func:`is_listed`.
    """
    lines = [
        line.rstrip("\r")
        for line in csv_text.split("\n")
        if line.strip()
    ]
    if not lines:
        return []

    # Exports saved with a UTF-8 BOM would otherwise hide the first column
    header_line = lines[0].lstrip("\ufeff")
    headers = [h.strip() for h in parse_csv_line(header_line)]
    products: list[Product] = []
    skipped = 0
    excluded = 0

    for index, line in enumerate(lines[1:], start=1):
        values = parse_csv_line(line)
        if len(values) != len(headers):
            logger.debug(
                "Skipped malformed row %d (%d fields, expected %d)",
                index,
                len(values),
                len(headers),
            )
            skipped += 1
            continue

        product = row_to_product(dict(zip(headers, values)), index)
        if not is_listed(product):
            logger.debug(
                "Excluded product '%s' (opiniao_consulta=%r)",
                product.name,
                product.opiniao_consulta,
            )
            excluded += 1
            continue
        products.append(product)

    logger.info(
        "Parsed %d products (%d malformed rows skipped, %d excluded)",
        len(products),
        skipped,
        excluded,
    )
    return products
