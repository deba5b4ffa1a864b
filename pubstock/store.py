# pubstock/store.py
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from . import config
from .collection import ProductCollection
from .errors import NothingToRestock, RemoteOperationFailed
from .events import NotificationBus
from .models import Product, ProductInput
from .order import OrderDocument, write_supplier_order
from .stock import InventoryStats, summarize

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load products"


class InventoryStore:
    """Local mirror of the remote products collection.

    Every mutation is remote-call-then-mirror: the local sequence only changes
    after the collection reports success. Failures leave it untouched and are
    published on the notification bus.
    """

    def __init__(self, collection: ProductCollection, notifications: Optional[NotificationBus] = None):
        self.collection = collection
        self.notifications = notifications or NotificationBus()
        self.loading = False
        self.error: Optional[str] = None
        self._products: List[Product] = []
        # guards the mirror only; remote calls run outside it
        self._lock = threading.Lock()

    @property
    def products(self) -> Tuple[Product, ...]:
        with self._lock:
            return tuple(self._products)

    def get(self, product_id: int) -> Optional[Product]:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        return None

    def stats(self, visible: Sequence[Product]) -> InventoryStats:
        return summarize(self.products, visible)

    def load(self) -> bool:
        self.loading = True
        try:
            rows = self.collection.list()
        except RemoteOperationFailed:
            logger.exception("Error fetching products")
            self.error = LOAD_ERROR
            return False
        finally:
            self.loading = False
        with self._lock:
            self._products = list(rows)
        self.error = None
        return True

    def create(self, data: ProductInput) -> Optional[Product]:
        try:
            product = self.collection.insert(data)
        except RemoteOperationFailed:
            logger.exception("Error adding product")
            self.notifications.error("Error adding product")
            return None
        with self._lock:
            self._products.insert(0, product)
        self.notifications.success("Product added successfully!")
        return product

    def update(self, product_id: int, data: ProductInput) -> bool:
        try:
            self.collection.update(product_id, data)
        except RemoteOperationFailed:
            logger.exception("Error updating product")
            self.notifications.error("Error updating product")
            return False
        with self._lock:
            # last writer wins; an id deleted meanwhile stays deleted
            self._products = [p.with_input(data) if p.id == product_id else p for p in self._products]
        self.notifications.success("Product updated successfully!")
        return True

    def delete(self, product_id: int, confirm: Callable[[], bool]) -> bool:
        if not confirm():
            return False
        try:
            self.collection.delete(product_id)
        except RemoteOperationFailed:
            logger.exception("Error deleting product")
            self.notifications.error("Error deleting product")
            return False
        with self._lock:
            self._products = [p for p in self._products if p.id != product_id]
        self.notifications.success("Product deleted successfully!")
        return True

    def export_order(
        self,
        visible: Sequence[Product],
        directory: Union[str, Path] = config.ORDER_DIR,
        today: Optional[date] = None,
    ) -> Optional[OrderDocument]:
        try:
            doc = write_supplier_order(visible, directory=directory, today=today)
        except NothingToRestock as e:
            self.notifications.info(str(e))
            return None
        except OSError:
            logger.exception("Error generating supplier order")
            self.notifications.error("Error generating supplier order")
            return None
        self.notifications.success(f"Supplier order generated for {doc.item_count} products!")
        return doc
