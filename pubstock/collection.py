# pubstock/collection.py
import logging
from typing import Any, Callable, List, Optional

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError

from . import config
from .errors import RemoteOperationFailed
from .models import Product, ProductInput

logger = logging.getLogger(__name__)


class ProductCollection:
    """The remote products table: list, insert, update-by-id, delete-by-id.

    Every method raises RemoteOperationFailed on any failure; nothing is retried.
    """

    def list(self) -> List[Product]:
        raise NotImplementedError

    def insert(self, data: ProductInput) -> Product:
        raise NotImplementedError

    def update(self, product_id: int, data: ProductInput) -> None:
        raise NotImplementedError

    def delete(self, product_id: int) -> None:
        raise NotImplementedError


def _parse_rows(action: str, rows: Any) -> List[Product]:
    try:
        return [Product.model_validate(row) for row in rows]
    except (ValidationError, TypeError) as e:
        raise RemoteOperationFailed(action, e) from e


class HttpCollection(ProductCollection):
    """Products table served over JSON/HTTP (see stockserver)."""

    def __init__(
        self,
        base_url: str = config.API_URL,
        api_key: Optional[str] = None,
        timeout: float = config.REQUEST_TIMEOUT,
        http: Optional[httpx.Client] = None,
    ):
        if http is None:
            headers = {}
            if api_key:
                headers["Authorization"] = f"Bearer {api_key}"
            http = httpx.Client(base_url=base_url.rstrip("/"), headers=headers, timeout=timeout)
        self.http = http

    def _request(self, action: str, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            r = self.http.request(method, path, **kwargs)
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise RemoteOperationFailed(action, e) from e
        return r

    def _json(self, action: str, r: httpx.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise RemoteOperationFailed(action, e) from e

    def list(self) -> List[Product]:
        r = self._request("list", "GET", "/products", params={"order_by": "created_at", "descending": "true"})
        return _parse_rows("list", self._json("list", r))

    def insert(self, data: ProductInput) -> Product:
        r = self._request("insert", "POST", "/products", json=data.payload())
        return _parse_rows("insert", [self._json("insert", r)])[0]

    def update(self, product_id: int, data: ProductInput) -> None:
        self._request("update", "PUT", f"/products/{product_id}", json=data.payload())

    def delete(self, product_id: int) -> None:
        self._request("delete", "DELETE", f"/products/{product_id}")

    def close(self):
        self.http.close()


class SupabaseCollection(ProductCollection):
    """Products table hosted on Supabase, queried through the PostgREST builder."""

    def __init__(self, client, table: str = config.PRODUCTS_TABLE):
        self.client = client
        self.table = table

    def _query(self):
        return self.client.table(self.table)

    def _execute(self, action: str, build: Callable[[], Any]) -> Any:
        try:
            return build().execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error("supabase %s on %s failed: %s", action, self.table, e)
            raise RemoteOperationFailed(action, e) from e

    def list(self) -> List[Product]:
        resp = self._execute("list", lambda: self._query().select("*").order("created_at", desc=True))
        return _parse_rows("list", resp.data or [])

    def insert(self, data: ProductInput) -> Product:
        resp = self._execute("insert", lambda: self._query().insert(data.payload()))
        if not resp.data:
            raise RemoteOperationFailed("insert", "no row returned")
        return _parse_rows("insert", resp.data[:1])[0]

    def update(self, product_id: int, data: ProductInput) -> None:
        self._execute("update", lambda: self._query().update(data.payload()).eq("id", product_id))

    def delete(self, product_id: int) -> None:
        self._execute("delete", lambda: self._query().delete().eq("id", product_id))


_collection: Optional[ProductCollection] = None

def get_collection() -> ProductCollection:
    global _collection
    if _collection is None:
        if config.BACKEND == "supabase":
            if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
                raise RuntimeError("Supabase URL/Key not configured. See .env")
            from supabase import create_client

            _collection = SupabaseCollection(create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY))
        elif config.BACKEND == "http":
            _collection = HttpCollection()
        else:
            raise RuntimeError(f"Unknown PUBSTOCK_BACKEND: {config.BACKEND}")
    return _collection
