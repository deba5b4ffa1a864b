# pubstock/stock.py
from decimal import Decimal
from typing import Iterable, List, NamedTuple, Sequence

from .models import Product


def is_low_stock(product: Product) -> bool:
    """Strictly below the minimum threshold."""
    return (product.quantity or 0) < (product.min_threshold or 0)


def low_stock(products: Iterable[Product]) -> List[Product]:
    return [p for p in products if is_low_stock(p)]


def stock_value(products: Iterable[Product]) -> Decimal:
    total = Decimal("0")
    for p in products:
        total += (p.price or Decimal("0")) * (p.quantity or 0)
    return total


class InventoryStats(NamedTuple):
    total: int
    low_stock: int
    filtered: int
    stock_value: Decimal


def summarize(products: Sequence[Product], visible: Sequence[Product]) -> InventoryStats:
    return InventoryStats(
        total=len(products),
        low_stock=len(low_stock(products)),
        filtered=len(visible),
        stock_value=stock_value(products),
    )
