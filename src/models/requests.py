# src/models/requests.py

"""Validated request values consumed by the catalog core."""

from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from src.config.settings import Settings
from src.models.product import Category, ProductRating, Seller

T = TypeVar("T")


class SortDirection(str, Enum):
    """Sort direction for paged queries."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str | None) -> "SortDirection":
        """Parse ``asc``/``desc`` (any case); anything else is ascending."""
        if raw and raw.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


@dataclass(frozen=True)
class Present(Generic[T]):
    """Marks an update field as supplied, carrying its new value.

    ``Present(None)`` clears a nullable field, whereas leaving the
    update field as ``None`` keeps the stored value untouched.
    """

    value: T


@dataclass
class SearchParams:
    """Filters, paging and ordering for a product query."""

    query: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    is_official_store: bool | None = None
    min_rating: float | None = None
    store_name: str | None = None
    page: int = Settings.DEFAULT_PAGE
    size: int = Settings.DEFAULT_PAGE_SIZE
    sort_by: str = Settings.DEFAULT_SORT_FIELD
    direction: SortDirection = SortDirection.ASC


@dataclass
class CreateProductRequest:
    """Data for a new product; optional fields fall back to defaults."""

    title: str
    description: str | None = None
    price: Decimal | None = None
    images: list[str] | None = None
    seller: Seller | None = None
    available_stock: int | None = None
    payment_methods: list[str] | None = None
    category: Category | None = None
    attributes: dict[str, str] | None = None


@dataclass
class UpdateProductRequest:
    """Partial update: only ``Present`` fields overwrite the product.

    Field names match the :class:`~src.models.product.Product`
    attributes they replace.
    """

    title: Present[str] | None = None
    description: Present[str | None] | None = None
    price: Present[Decimal] | None = None
    images: Present[list[str]] | None = None
    seller: Present[Seller] | None = None
    available_stock: Present[int] | None = None
    payment_methods: Present[list[str]] | None = None
    category: Present[Category] | None = None
    attributes: Present[dict[str, str]] | None = None
    rating: Present[ProductRating] | None = None

    def present_fields(self) -> dict[str, object]:
        """Return ``{attribute: new value}`` for every supplied field."""
        changes: dict[str, object] = {}
        for f in fields(self):
            wrapped = getattr(self, f.name)
            if isinstance(wrapped, Present):
                changes[f.name] = wrapped.value
        return changes

    def is_empty(self) -> bool:
        """True when no field was supplied."""
        return not self.present_fields()

