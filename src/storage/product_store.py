# src/storage/product_store.py

"""JSON-file-backed product store, the single owner of catalog state."""

import copy
import json
import logging
import threading
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any, cast

from src.config.settings import Settings
from src.models.errors import PersistenceError
from src.models.product import Product

logger = logging.getLogger("catalog.storage")


def generate_product_id() -> str:
    """Return a fresh random product identity."""
    return str(uuid.uuid4())


def _encode(value: object) -> object:
    """JSON fallback encoder; prices are written as strings."""
    if isinstance(value, Decimal):
        return str(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


class ProductStore:
    """In-memory product collection mirrored to a JSON file.

    All reads and mutations go through one re-entrant lock.  Every
    mutation rewrites the whole file before returning; readers get
    deep copies so the stored records can never be changed behind
    the store's back.
    """

    def __init__(
        self,
        data_file: Path | None = None,
        strict: bool | None = None,
    ) -> None:
        self.data_file: Path = data_file or Settings.DATA_FILE
        self.strict: bool = (
            Settings.STRICT_PERSISTENCE if strict is None else strict
        )
        self._lock = threading.RLock()
        self._products: dict[str, Product] = self._load()
        logger.debug(
            "ProductStore initialised, data_file=%s, products=%d",
            self.data_file,
            len(self._products),
        )

    # ── Loading ──────────────────────────────────────────

    def _load(self) -> dict[str, Product]:
        """Read the data file; absent or malformed files yield an empty store."""
        if not self.data_file.exists():
            logger.warning(
                "Data file %s not found, starting with an empty catalog",
                self.data_file,
            )
            return {}

        try:
            with open(self.data_file, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                msg = "top-level JSON value is not a list"
                raise ValueError(msg)
            records = cast(list[dict[str, Any]], data)
            products = [Product.from_dict(r) for r in records]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.error(
                "Failed to load catalog from %s: %s",
                self.data_file,
                exc,
            )
            return {}

        loaded: dict[str, Product] = {}
        for product in products:
            if not product.id:
                product.id = generate_product_id()
            loaded[product.id] = product

        logger.info(
            "Loaded %d products from %s", len(loaded), self.data_file
        )
        return loaded

    # ── Persisting ───────────────────────────────────────

    def _write(self) -> None:
        """Atomically replace the data file with the current collection."""
        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.data_file.with_suffix(
            self.data_file.suffix + ".tmp"
        )
        payload = [p.to_dict() for p in self._products.values()]
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(
                payload, f, ensure_ascii=False, indent=2, default=_encode
            )
        tmp_path.replace(self.data_file)

    def _persist(self, snapshot: dict[str, Product]) -> None:
        """Write the collection to disk.

        ``snapshot`` is the pre-mutation state; in strict mode it is
        restored and :class:`PersistenceError` raised when the write
        fails.  Otherwise the failure is only logged.
        """
        try:
            self._write()
        except (OSError, TypeError, ValueError) as exc:
            if self.strict:
                self._products = snapshot
                logger.error(
                    "Failed to save catalog to %s, mutation rolled back: %s",
                    self.data_file,
                    exc,
                )
                raise PersistenceError(self.data_file, str(exc)) from exc
            logger.error(
                "Failed to save catalog to %s: %s", self.data_file, exc
            )
            return
        logger.debug(
            "Saved %d products to %s",
            len(self._products),
            self.data_file,
        )

    # ── Public API ───────────────────────────────────────

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store lock across a read-modify-write sequence."""
        with self._lock:
            yield

    def get(self, product_id: str) -> Product | None:
        """Return a copy of the product, or ``None`` if absent."""
        with self._lock:
            product = self._products.get(product_id)
            return copy.deepcopy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        """Return a snapshot copy of every stored product."""
        with self._lock:
            return copy.deepcopy(list(self._products.values()))

    def exists(self, product_id: str) -> bool:
        with self._lock:
            return product_id in self._products

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def put(self, product: Product) -> Product:
        """Insert or wholesale-replace a product, then persist.

        A product without an id is assigned a new one.  Returns a
        copy of the stored record.
        """
        return self.put_many([product])[0]

    def put_many(self, products: Iterable[Product]) -> list[Product]:
        """Upsert several products with a single file write."""
        with self._lock:
            snapshot = dict(self._products)
            stored: list[Product] = []
            for product in products:
                if not product.id:
                    product.id = generate_product_id()
                record = copy.deepcopy(product)
                self._products[product.id] = record
                stored.append(copy.deepcopy(record))
            self._persist(snapshot)
            logger.info("Stored %d product(s)", len(stored))
            return stored

    def delete(self, product_id: str) -> bool:
        """Remove a product; ``False`` when it does not exist."""
        with self._lock:
            if product_id not in self._products:
                return False
            snapshot = dict(self._products)
            del self._products[product_id]
            self._persist(snapshot)
            logger.info("Deleted product %s", product_id)
            return True
