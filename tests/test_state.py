# tests/test_state.py
from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from pubstock.filters import ALL_CATEGORIES
from pubstock.models import Product, ProductForm, ProductInput
from pubstock.state import (
    ViewState, reduce, SetSearch, SetCategory, SetLowStockOnly, ClearFilters,
    OpenAdd, OpenEdit, EditDraft, CloseModal,
)

PRODUCTS = [
    Product(id=1, name="IPA Beer", quantity=2, min_threshold=5, category="beer"),
    Product(id=2, name="House Red", quantity=12, min_threshold=6, category="wine"),
]

def test_filters_flow_through_reduce():
    view = ViewState()
    view = reduce(view, SetSearch(term="ipa"))
    view = reduce(view, SetCategory(category="beer"))
    view = reduce(view, SetLowStockOnly(enabled=True))
    assert [p.id for p in view.visible(PRODUCTS)] == [1]

    cleared = reduce(view, ClearFilters())
    assert cleared.search_term == ""
    assert cleared.category == ALL_CATEGORIES
    assert cleared.low_stock_only is False
    assert [p.id for p in cleared.visible(PRODUCTS)] == [1, 2]

def test_state_is_immutable():
    view = ViewState()
    with pytest.raises(ValidationError):
        view.search_term = "x"
    after = reduce(view, SetSearch(term="x"))
    assert view.search_term == ""
    assert after.search_term == "x"

def test_open_add_starts_from_defaults():
    view = reduce(ViewState(), OpenAdd())
    assert view.modal == "add"
    assert view.draft == ProductForm(name="", quantity=0, min_threshold=5, category="beer", price=Decimal("0"))
    assert not view.draft.can_submit

def test_open_edit_seeds_draft_from_product():
    product = Product(id=9, name="Cider", quantity=3, min_threshold=0, category=None, price=None)
    view = reduce(ViewState(), OpenEdit(product=product))
    assert view.modal == "edit"
    assert view.editing_id == 9
    # zero threshold and missing category fall back to the form defaults
    assert view.draft == ProductForm(name="Cider", quantity=3, min_threshold=5, category="beer", price=Decimal("0"))

def test_edit_draft_and_submit():
    view = reduce(ViewState(), OpenAdd())
    view = reduce(view, EditDraft(changes={"name": "  ", "quantity": 4}))
    assert not view.draft.can_submit
    view = reduce(view, EditDraft(changes={"name": "Stout", "price": Decimal("4.20")}))
    assert view.draft.can_submit
    assert view.draft.to_input() == ProductInput(
        name="Stout", quantity=4, min_threshold=5, category="beer", price=Decimal("4.20")
    )

def test_close_modal_resets_form():
    view = reduce(reduce(ViewState(), OpenEdit(product=PRODUCTS[0])), CloseModal())
    assert view.modal is None
    assert view.editing_id is None
    assert view.draft == ProductForm()

def test_unknown_action():
    class Bogus(BaseModel):
        pass

    with pytest.raises(ValueError):
        reduce(ViewState(), Bogus())

def test_draft_rejects_price_with_more_than_two_decimals():
    view = reduce(ViewState(), OpenAdd())
    with pytest.raises(ValidationError):
        reduce(view, EditDraft(changes={"price": Decimal("4.205")}))
    with pytest.raises(ValidationError):
        reduce(view, EditDraft(changes={"price": Decimal("-1")}))
    assert view.draft.price == Decimal("0")

def test_open_edit_rounds_stored_price():
    product = Product(id=3, name="Stout", price=Decimal("4.2"))
    view = reduce(ViewState(), OpenEdit(product=product))
    assert view.draft.price == Decimal("4.20")
    assert view.draft.to_input().price == Decimal("4.20")
