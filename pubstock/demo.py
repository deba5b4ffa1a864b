#!/usr/bin/env python
# pubstock/demo.py
from decimal import Decimal
from typing import List

from rich import print

from .collection import HttpCollection, ProductCollection
from .filters import filter_products
from .models import ProductInput, Product
from .store import InventoryStore

SAMPLE_PRODUCTS = [
    ProductInput(name="IPA", quantity=2, min_threshold=5, category="beer", price=Decimal("3.50")),
    ProductInput(name="Guinness Keg", quantity=1, min_threshold=2, category="beer", price=Decimal("120.00")),
    ProductInput(name="House Red", quantity=12, min_threshold=6, category="wine", price=Decimal("7.25")),
    ProductInput(name="London Dry Gin", quantity=3, min_threshold=4, category="spirits", price=Decimal("18.90")),
    ProductInput(name="Cola (case)", quantity=0, min_threshold=3, category="soft", price=Decimal("0")),
    ProductInput(name="Salted Crisps", quantity=40, min_threshold=20, category="food", price=Decimal("0.45")),
]


def seed(collection: ProductCollection, products: List[ProductInput] = SAMPLE_PRODUCTS) -> List[Product]:
    return [collection.insert(p) for p in products]


def main():
    c = HttpCollection()

    # -----------------------------
    # Seed products
    # -----------------------------
    print("\nSeeding products...")
    for p in seed(c):
        print(p)

    # -----------------------------
    # Load through the store
    # -----------------------------
    store = InventoryStore(c)
    store.notifications.subscribe(lambda note: print(f"[{note.level}] {note.message}"))
    store.load()
    print(f"\nLoaded {len(store.products)} products")

    # -----------------------------
    # Low stock
    # -----------------------------
    low = filter_products(store.products, low_stock_only=True)
    print("\nLow stock:", [p.name for p in low])

    # -----------------------------
    # Supplier order
    # -----------------------------
    doc = store.export_order(store.products)
    if doc:
        print(f"\nWrote {doc.path} ({doc.page_count} page(s))")

if __name__ == "__main__":
    main()
