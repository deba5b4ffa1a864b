# pubstock/order.py
"""Supplier (restock) order export.

Low-stock products are laid out as text runs on A4 pages with a moving
vertical cursor, then painted into a PDF with fpdf2. Layout and painting are
split so pagination can be inspected without reading the PDF back.
"""
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Union

from fpdf import FPDF

from . import config
from .errors import NothingToRestock
from .models import Product
from .stock import low_stock

logger = logging.getLogger(__name__)

TITLE = "SUPPLIER ORDER - PubStock Manager"
CURRENCY = "£"

# page geometry, millimetres
PAGE_TOP = 20
PAGE_BOTTOM = 270
MARGIN_LEFT = 14
MARGIN_DETAIL = 18
ITEM_GAP = 4

TITLE_SIZE = 16
HEADER_SIZE = 10
ITEM_SIZE = 12
DETAIL_SIZE = 10


class OrderLine(NamedTuple):
    number: int
    name: str
    category: str
    current: int
    minimum: int
    to_order: int
    estimated_cost: Optional[Decimal]


class TextRun(NamedTuple):
    page: int
    x: float
    y: float
    size: int
    text: str


class OrderDocument(NamedTuple):
    path: Path
    item_count: int
    page_count: int


def reorder_quantity(product: Product) -> int:
    # not clamped: overstocked items give a negative quantity
    return (product.min_threshold or 0) * 2 - (product.quantity or 0)


def order_line(number: int, product: Product) -> OrderLine:
    to_order = reorder_quantity(product)
    cost = None
    # a price of 0 counts as no price
    if product.price:
        cost = (to_order * product.price).quantize(Decimal("0.01"))
    return OrderLine(
        number=number,
        name=product.name or "Unknown product",
        category=product.category or "N/A",
        current=product.quantity or 0,
        minimum=product.min_threshold or 0,
        to_order=to_order,
        estimated_cost=cost,
    )


def build_order(products: Iterable[Product]) -> List[OrderLine]:
    """Order lines for the low-stock subset of `products`, 1-indexed, input order."""
    eligible = low_stock(products)
    if not eligible:
        raise NothingToRestock()
    return [order_line(i, p) for i, p in enumerate(eligible, start=1)]


def _item_fields(line: OrderLine):
    yield MARGIN_LEFT, ITEM_SIZE, f"{line.number}. {line.name}", 6
    yield MARGIN_DETAIL, DETAIL_SIZE, f"Category: {line.category}", 5
    yield (
        MARGIN_DETAIL,
        DETAIL_SIZE,
        f"Current: {line.current} | Minimum: {line.minimum} | Order: {line.to_order} units",
        5,
    )
    if line.estimated_cost is not None:
        yield MARGIN_DETAIL, DETAIL_SIZE, f"Estimated cost: {CURRENCY}{line.estimated_cost:.2f}", 5


def layout_order(lines: List[OrderLine], generated_on: date) -> List[TextRun]:
    runs = []
    page = 1
    y = PAGE_TOP

    runs.append(TextRun(page, MARGIN_LEFT, y, TITLE_SIZE, TITLE))
    y += 10
    runs.append(TextRun(page, MARGIN_LEFT, y, HEADER_SIZE, f"Generated on: {generated_on.strftime('%d/%m/%Y')}"))
    y += 10

    for line in lines:
        for x, size, text, advance in _item_fields(line):
            if y > PAGE_BOTTOM:
                page += 1
                y = PAGE_TOP
            runs.append(TextRun(page, x, y, size, text))
            y += advance
        y += ITEM_GAP
    return runs


def order_filename(today: date) -> str:
    return f"supplier-order-{today.isoformat()}.pdf"


def _latin1(text: str) -> str:
    # core PDF fonts only cover latin-1
    encoded = text.encode("latin-1", "replace").decode("latin-1")
    if encoded != text:
        logger.warning("characters outside latin-1 replaced in %r", text)
    return encoded


def render_pdf(runs: List[TextRun], path: Union[str, Path]) -> int:
    pdf = FPDF(unit="mm", format="A4")
    pdf.set_font("Helvetica", size=ITEM_SIZE)
    pdf.add_page()
    for run in runs:
        while pdf.page_no() < run.page:
            pdf.add_page()
        pdf.set_font_size(run.size)
        pdf.text(run.x, run.y, _latin1(run.text))
    pdf.output(str(path))
    return pdf.page_no()


def write_supplier_order(
    products: Iterable[Product],
    directory: Union[str, Path] = config.ORDER_DIR,
    today: Optional[date] = None,
) -> OrderDocument:
    """Write the restock order for the low-stock part of `products`.

    Raises NothingToRestock (and writes nothing) when no product qualifies.
    """
    today = today or date.today()
    lines = build_order(products)
    runs = layout_order(lines, today)

    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / order_filename(today)
    pages = render_pdf(runs, path)
    logger.info("wrote %s (%d items, %d pages)", path, len(lines), pages)
    return OrderDocument(path=path, item_count=len(lines), page_count=pages)
