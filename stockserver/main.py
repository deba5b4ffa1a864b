# stockserver/main.py
import logging
import os
import time
from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .database import PRODUCTS, _get_lock, next_id, reset_table
from .models import ProductIn, Product, _make_product_dict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("stockserver")

app = FastAPI(title="stockserver (in-memory products table)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

SORTABLE_COLUMNS = ("created_at", "id", "name", "quantity", "min_threshold", "price")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = round((time.time() - start_time) * 1000, 2)
    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )
    return response

# ---------------------------
# Products table
# ---------------------------
@app.get("/products", response_model=List[Product])
async def list_products(
    order_by: str = Query("created_at"),
    descending: bool = True,
):
    if order_by not in SORTABLE_COLUMNS:
        raise HTTPException(status_code=400, detail=f"cannot order by {order_by}")

    def sort_key(row):
        value = row.get(order_by)
        # nulls sort below every value
        return (value is not None, value if value is not None else 0, row["id"])

    return sorted(PRODUCTS.values(), key=sort_key, reverse=descending)

@app.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: int):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p

@app.post("/products", response_model=Product, status_code=201)
async def insert_product(payload: ProductIn):
    lock = _get_lock("products")
    async with lock:
        pid = next_id()
        PRODUCTS[pid] = _make_product_dict(pid, payload, datetime.now(timezone.utc))
        return PRODUCTS[pid]

@app.put("/products/{product_id}", response_model=Product)
async def update_product(product_id: int, payload: ProductIn):
    lock = _get_lock("products")
    async with lock:
        row = PRODUCTS.get(product_id)
        if not row:
            raise HTTPException(status_code=404, detail="product not found")
        row.update(payload.model_dump())
        return row

@app.delete("/products/{product_id}", status_code=204)
async def delete_product(product_id: int):
    lock = _get_lock("products")
    async with lock:
        if product_id not in PRODUCTS:
            raise HTTPException(status_code=404, detail="product not found")
        del PRODUCTS[product_id]
    return Response(status_code=204)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    reset_table()
    return {"status": "reset"}


def run():
    import uvicorn

    host = os.getenv("PUBSTOCK_HOST", "127.0.0.1")
    port = int(os.getenv("PUBSTOCK_PORT", "8085"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
