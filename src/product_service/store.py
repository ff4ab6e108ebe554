"""Ordered in-memory product collection.

Every operation runs under one lock, so the id assignment in ``create`` and
the find-then-mutate steps in ``update``/``delete`` stay atomic when Flask
serves requests from several threads. Records leave the store as dict
snapshots.
"""
import logging
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

from .errors import InvalidProduct, ProductNotFound
from .models import MISSING, Product, ProductDraft, ProductPatch, as_number, is_blank


logger = logging.getLogger(__name__)

SEED_PRODUCTS = (
    ("Laptop", 50000, 10),
    ("Phone", 25000, 20),
    ("Headphones", 5000, 50),
)


class ProductStore:
    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = Lock()
        self._products: List[Product] = list(products)

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(
            Product(pid, name, price, stock)
            for pid, (name, price, stock) in enumerate(SEED_PRODUCTS, start=1)
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: Optional[int]) -> int:
        # caller holds the lock
        if product_id is not None:
            for index, product in enumerate(self._products):
                if product.id == product_id:
                    return index
        raise ProductNotFound()

    def _next_id(self) -> int:
        if not self._products:
            return 1
        return max(p.id for p in self._products) + 1

    def list_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [p.to_dict() for p in self._products]

    def get(self, product_id: Optional[int]) -> Dict[str, Any]:
        with self._lock:
            return self._products[self._index_of(product_id)].to_dict()

    def create(self, draft: ProductDraft) -> Dict[str, Any]:
        if not draft.is_complete():
            raise InvalidProduct()
        with self._lock:
            product = Product(self._next_id(), draft.name, draft.price, draft.stock)
            self._products.append(product)
            snapshot = product.to_dict()
        logger.debug("Created product %d", snapshot["id"])
        return snapshot

    def update(self, product_id: Optional[int], patch: ProductPatch) -> Dict[str, Any]:
        with self._lock:
            product = self._products[self._index_of(product_id)]
            # an empty name means "keep the current one"; zero price/stock is a real value
            if not is_blank(patch.name):
                product.name = patch.name
            if patch.price is not MISSING:
                product.price = patch.price
            if patch.stock is not MISSING:
                product.stock = patch.stock
            snapshot = product.to_dict()
        logger.debug("Updated product %d", snapshot["id"])
        return snapshot

    def delete(self, product_id: Optional[int]) -> Dict[str, Any]:
        with self._lock:
            product = self._products.pop(self._index_of(product_id))
        logger.debug("Deleted product %d", product.id)
        return product.to_dict()

    def in_price_range(self, min_price: Optional[int], max_price: Optional[int]) -> List[Dict[str, Any]]:
        """Products priced within [min_price, max_price], in insertion order.

        A bound of None (unparseable) matches nothing, and so does an inverted range.
        """
        if min_price is None or max_price is None:
            return []
        with self._lock:
            return [p.to_dict() for p in self._products if _within(p.price, min_price, max_price)]


def _within(price: Any, low: int, high: int) -> bool:
    value = as_number(price)
    return value is not None and low <= value <= high
