# stockserver/models.py
from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field

class ProductIn(BaseModel):
    name: Optional[str] = None
    quantity: Optional[int] = None
    min_threshold: Optional[int] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)

class Product(ProductIn):
    id: int
    created_at: Optional[datetime] = None

def _make_product_dict(product_id: int, p: ProductIn, created_at: datetime) -> Dict[str, Any]:
    row = p.model_dump()
    row["id"] = product_id
    row["created_at"] = created_at
    return row
