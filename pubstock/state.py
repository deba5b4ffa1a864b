# pubstock/state.py
"""View state for the inventory screen.

The state is immutable; every user action goes through `reduce`, which
returns the next state. Nothing else assigns to it.
"""
from typing import Any, Dict, Literal, Optional, Sequence, List

from pydantic import BaseModel

from .filters import ALL_CATEGORIES, filter_products
from .models import Product, ProductForm

Modal = Optional[Literal["add", "edit"]]


class ViewState(BaseModel):
    search_term: str = ""
    category: str = ALL_CATEGORIES
    low_stock_only: bool = False
    modal: Modal = None
    editing_id: Optional[int] = None
    draft: ProductForm = ProductForm()

    model_config = {"frozen": True}

    def visible(self, products: Sequence[Product]) -> List[Product]:
        return filter_products(products, self.search_term, self.category, self.low_stock_only)


class SetSearch(BaseModel):
    term: str

class SetCategory(BaseModel):
    category: str

class SetLowStockOnly(BaseModel):
    enabled: bool

class ClearFilters(BaseModel):
    pass

class OpenAdd(BaseModel):
    pass

class OpenEdit(BaseModel):
    product: Product

class EditDraft(BaseModel):
    changes: Dict[str, Any]

class CloseModal(BaseModel):
    pass


def reduce(state: ViewState, action: BaseModel) -> ViewState:
    if isinstance(action, SetSearch):
        return state.model_copy(update={"search_term": action.term})
    if isinstance(action, SetCategory):
        return state.model_copy(update={"category": action.category})
    if isinstance(action, SetLowStockOnly):
        return state.model_copy(update={"low_stock_only": action.enabled})
    if isinstance(action, ClearFilters):
        return state.model_copy(update={
            "search_term": "",
            "category": ALL_CATEGORIES,
            "low_stock_only": False,
        })
    if isinstance(action, OpenAdd):
        return state.model_copy(update={"modal": "add", "editing_id": None, "draft": ProductForm()})
    if isinstance(action, OpenEdit):
        return state.model_copy(update={
            "modal": "edit",
            "editing_id": action.product.id,
            "draft": ProductForm.from_product(action.product),
        })
    if isinstance(action, EditDraft):
        # merged draft is re-validated
        draft = ProductForm(**{**state.draft.model_dump(), **action.changes})
        return state.model_copy(update={"draft": draft})
    if isinstance(action, CloseModal):
        return state.model_copy(update={"modal": None, "editing_id": None, "draft": ProductForm()})
    raise ValueError(f"unknown action: {action!r}")
