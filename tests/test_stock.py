# tests/test_stock.py
from decimal import Decimal
from itertools import product as grid

from pubstock.models import Product
from pubstock.stock import is_low_stock, low_stock, stock_value, summarize

def test_low_stock_matches_coalesced_comparison():
    values = [None, -1, 0, 1, 5]
    for qty, minimum in grid(values, values):
        p = Product.model_validate({"id": 1, "quantity": qty, "min_threshold": minimum})
        assert is_low_stock(p) == ((qty or 0) < (minimum or 0))

def test_threshold_itself_is_not_low():
    assert not is_low_stock(Product(id=1, quantity=5, min_threshold=5))
    assert is_low_stock(Product(id=1, quantity=4, min_threshold=5))

def test_low_stock_keeps_order():
    rows = [
        Product(id=1, quantity=0, min_threshold=2),
        Product(id=2, quantity=9, min_threshold=2),
        Product(id=3, quantity=1, min_threshold=2),
    ]
    assert [p.id for p in low_stock(rows)] == [1, 3]

def test_stock_value_treats_missing_price_as_zero():
    rows = [
        Product(id=1, quantity=4, price=Decimal("2.50")),
        Product(id=2, quantity=10, price=None),
    ]
    assert stock_value(rows) == Decimal("10.00")

def test_summarize():
    rows = [Product(id=1, quantity=0, min_threshold=1), Product(id=2, quantity=3, min_threshold=1)]
    stats = summarize(rows, rows[:1])
    assert stats.total == 2
    assert stats.low_stock == 1
    assert stats.filtered == 1
    assert stats.stock_value == Decimal("0")
