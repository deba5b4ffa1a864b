# tests/test_order.py
from datetime import date
from decimal import Decimal

import pytest

from pubstock.errors import NothingToRestock
from pubstock.models import Product
from pubstock.order import (
    PAGE_BOTTOM, PAGE_TOP, build_order, layout_order, order_filename,
    order_line, reorder_quantity, write_supplier_order,
)

DAY = date(2024, 3, 1)

def ipa(**overrides):
    data = dict(id=1, name="IPA", quantity=2, min_threshold=5, category="beer", price=Decimal("3.50"))
    data.update(overrides)
    return Product(**data)

def texts(runs):
    return [r.text for r in runs]

def test_ipa_example():
    (line,) = build_order([ipa()])
    assert line.number == 1
    assert line.to_order == 8
    assert line.estimated_cost == Decimal("28.00")

def test_only_low_stock_products_are_numbered():
    rows = [ipa(id=1), ipa(id=2, name="Stout", quantity=50), ipa(id=3, name="Cider", quantity=0)]
    lines = build_order(rows)
    assert [(l.number, l.name) for l in lines] == [(1, "IPA"), (2, "Cider")]

def test_reorder_quantity_is_not_clamped():
    assert reorder_quantity(ipa(quantity=20, min_threshold=5)) == -10
    assert order_line(1, ipa(quantity=20, min_threshold=5)).estimated_cost == Decimal("-35.00")

def test_zero_price_means_no_cost_line():
    line = order_line(1, ipa(price=Decimal("0")))
    assert line.estimated_cost is None
    assert not any(t.startswith("Estimated cost") for t in texts(layout_order([line], DAY)))

def test_missing_fields_use_placeholders():
    line = order_line(1, ipa(name=None, category=None, price=None))
    assert texts(layout_order([line], DAY))[2:] == [
        "1. Unknown product",
        "Category: N/A",
        "Current: 2 | Minimum: 5 | Order: 8 units",
    ]

def test_layout_of_one_item():
    runs = layout_order(build_order([ipa()]), DAY)
    assert [(r.page, r.x, r.y, r.size) for r in runs] == [
        (1, 14, 20, 16),
        (1, 14, 30, 10),
        (1, 14, 40, 12),
        (1, 18, 46, 10),
        (1, 18, 51, 10),
        (1, 18, 56, 10),
    ]
    assert texts(runs) == [
        "SUPPLIER ORDER - PubStock Manager",
        "Generated on: 01/03/2024",
        "1. IPA",
        "Category: beer",
        "Current: 2 | Minimum: 5 | Order: 8 units",
        "Estimated cost: £28.00",
    ]

def test_page_break_can_split_an_item():
    rows = [ipa(id=i, name=f"Item {i}") for i in range(1, 11)]
    runs = layout_order(build_order(rows), DAY)

    # each priced item takes 25mm from y=40, so item 10 starts at 265
    title = next(r for r in runs if r.text == "10. Item 10")
    assert (title.page, title.y) == (1, 265)
    after = runs[runs.index(title) + 1]
    assert after.text == "Category: beer"
    assert (after.page, after.y) == (2, PAGE_TOP)

    assert all(r.y <= PAGE_BOTTOM for r in runs)

def test_nothing_to_restock(tmp_path):
    with pytest.raises(NothingToRestock):
        build_order([ipa(quantity=9)])
    with pytest.raises(NothingToRestock):
        write_supplier_order([], directory=tmp_path, today=DAY)
    assert list(tmp_path.iterdir()) == []

def test_filename_embeds_date():
    assert order_filename(DAY) == "supplier-order-2024-03-01.pdf"

def test_write_supplier_order(tmp_path):
    rows = [ipa(id=i, name=f"Item {i}") for i in range(1, 11)]
    doc = write_supplier_order(rows, directory=tmp_path, today=DAY)
    assert doc.path == tmp_path / "supplier-order-2024-03-01.pdf"
    assert doc.item_count == 10
    assert doc.page_count == 2
    assert doc.path.read_bytes().startswith(b"%PDF")

def test_write_handles_names_outside_latin1(tmp_path):
    doc = write_supplier_order([ipa(name="Café ☕ Stout")], directory=tmp_path, today=DAY)
    assert doc.path.exists()

def test_non_latin1_names_are_logged(tmp_path, caplog):
    with caplog.at_level("WARNING", logger="pubstock.order"):
        write_supplier_order([ipa(name="Stout ☕")], directory=tmp_path, today=DAY)
    assert any("outside latin-1" in r.getMessage() for r in caplog.records)
