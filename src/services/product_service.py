# src/services/product_service.py

"""Product lifecycle: create, partial update, delete and lookup."""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as SchemaValidationError

from src.api.schemas import ProductRecordSchema
from src.config.settings import Settings
from src.models.errors import ProductNotFoundError
from src.models.product import Product, ProductRating
from src.models.requests import CreateProductRequest, UpdateProductRequest
from src.storage.product_store import ProductStore, generate_product_id

logger = logging.getLogger("catalog.service")


def _describe_errors(exc: SchemaValidationError) -> str:
    """Flatten pydantic errors into one "field: message" line."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{loc or 'record'}: {err.get('msg')}")
    return "; ".join(parts)


@dataclass
class ImportSummary:
    """Outcome of a bulk product import."""

    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=lambda: list[str]())


class ProductService:
    """Applies catalog business rules on top of a :class:`ProductStore`."""

    def __init__(self, store: ProductStore) -> None:
        self._store = store

    def get(self, product_id: str) -> Product:
        """Return the product or raise :class:`ProductNotFoundError`."""
        product = self._store.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def create(self, request: CreateProductRequest) -> Product:
        """Create a product with a fresh id, zeroed rating and defaults."""
        product = Product(
            id=generate_product_id(),
            title=request.title,
            description=request.description,
            price=request.price,
            images=list(request.images) if request.images else [],
            seller=request.seller,
            available_stock=(
                request.available_stock
                if request.available_stock is not None
                else 0
            ),
            payment_methods=(
                list(request.payment_methods)
                if request.payment_methods
                else list(Settings.DEFAULT_PAYMENT_METHODS)
            ),
            rating=ProductRating(
                average_rating=0.0, total_ratings=0, reviews=[]
            ),
            category=request.category,
            attributes=dict(request.attributes or {}),
        )
        stored = self._store.put(product)
        logger.info("Created product %s (%s)", stored.id, stored.title)
        return stored

    def update(
        self, product_id: str, request: UpdateProductRequest
    ) -> Product:
        """Overwrite only the fields supplied in ``request``.

        Embedded records (seller, category, attributes, rating) are
        replaced as a whole, never merged.  An empty request leaves
        the data file untouched.
        """
        if request.is_empty():
            logger.debug("Empty update for product %s", product_id)
            return self.get(product_id)

        changes = request.present_fields()
        with self._store.locked():
            existing = self.get(product_id)
            for name, value in changes.items():
                setattr(existing, name, value)
            stored = self._store.put(existing)

        logger.info(
            "Updated product %s (fields=%s)",
            product_id,
            ", ".join(sorted(changes)),
        )
        return stored

    def delete(self, product_id: str) -> None:
        """Delete the product or raise :class:`ProductNotFoundError`."""
        with self._store.locked():
            if not self._store.exists(product_id):
                raise ProductNotFoundError(product_id)
            self._store.delete(product_id)

    def import_products(self, records: list[Any]) -> ImportSummary:
        """Upsert full product records, skipping invalid ones.

        Each record is checked against :class:`ProductRecordSchema`,
        the same field rules the HTTP API applies.  Records without an
        id get a generated one; records with an id replace any stored
        product sharing it.
        """
        summary = ImportSummary()
        products: list[Product] = []

        for idx, record in enumerate(records):
            try:
                product = ProductRecordSchema.model_validate(
                    record
                ).to_product()
            except SchemaValidationError as exc:
                summary.skipped += 1
                summary.errors.append(
                    f"record {idx}: {_describe_errors(exc)}"
                )
                continue
            if not product.payment_methods:
                product.payment_methods = list(
                    Settings.DEFAULT_PAYMENT_METHODS
                )
            products.append(product)

        if products:
            summary.imported = len(self._store.put_many(products))

        if summary.skipped:
            logger.warning(
                "Import skipped %d record(s)", summary.skipped
            )
        logger.info("Imported %d product(s)", summary.imported)
        return summary
