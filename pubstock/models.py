# pubstock/models.py
from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, field_validator

# Suggested values only; the table accepts any category text.
CATEGORIES = ("beer", "wine", "spirits", "soft", "food", "other")
CATEGORY_LABELS = {
    "beer": "Beer",
    "wine": "Wine",
    "spirits": "Spirits",
    "soft": "Soft Drinks",
    "food": "Food",
    "other": "Other",
}

EDITABLE_FIELDS = ("name", "quantity", "min_threshold", "category", "price")


class ProductInput(BaseModel):
    """The editable part of a product, sent on insert and update."""

    name: Optional[str] = None
    quantity: int = 0
    min_threshold: int = 0
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)

    @field_validator("quantity", "min_threshold", mode="before")
    @classmethod
    def _absent_is_zero(cls, value):
        return 0 if value is None else value

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class Product(BaseModel):
    id: int
    name: Optional[str] = None
    quantity: int = 0
    min_threshold: int = 0
    category: Optional[str] = None
    price: Optional[Decimal] = None
    created_at: Optional[datetime] = None

    @field_validator("quantity", "min_threshold", mode="before")
    @classmethod
    def _absent_is_zero(cls, value):
        return 0 if value is None else value

    def editable(self) -> ProductInput:
        return ProductInput(**self.model_dump(include=set(EDITABLE_FIELDS)))

    def with_input(self, data: ProductInput) -> "Product":
        return self.model_copy(update=data.model_dump())

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed"

    @property
    def display_price(self) -> str:
        return f"£{self.price:.2f}" if self.price else "N/A"


class ProductForm(BaseModel):
    """Draft behind the add/edit forms."""

    name: str = ""
    quantity: int = 0
    min_threshold: int = 5
    category: str = "beer"
    price: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)

    model_config = {"frozen": True}

    @classmethod
    def from_product(cls, product: Product) -> "ProductForm":
        return cls(
            name=product.name or "",
            quantity=product.quantity or 0,
            min_threshold=product.min_threshold or 5,
            category=product.category or "beer",
            price=(product.price or Decimal("0")).quantize(Decimal("0.01")),
        )

    @property
    def can_submit(self) -> bool:
        return bool(self.name.strip())

    def to_input(self) -> ProductInput:
        return ProductInput(**self.model_dump())
