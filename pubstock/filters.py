# pubstock/filters.py
from typing import Iterable, List

from .models import Product
from .stock import is_low_stock

ALL_CATEGORIES = "all"


def matches_search(product: Product, search_term: str) -> bool:
    if not search_term:
        return True
    if not product.name:
        return False
    return search_term.lower() in product.name.lower()


def matches_category(product: Product, category: str) -> bool:
    return category == ALL_CATEGORIES or product.category == category


def filter_products(
    products: Iterable[Product],
    search_term: str = "",
    category: str = ALL_CATEGORIES,
    low_stock_only: bool = False,
) -> List[Product]:
    """Stable filter; input order is kept."""
    out = []
    for p in products:
        if not matches_search(p, search_term):
            continue
        if not matches_category(p, category):
            continue
        if low_stock_only and not is_low_stock(p):
            continue
        out.append(p)
    return out
