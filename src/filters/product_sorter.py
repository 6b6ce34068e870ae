# src/filters/product_sorter.py

"""Sort-key selection and stable ordering of products."""

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from src.config.settings import Settings
from src.models.product import Product
from src.models.requests import SortDirection

logger = logging.getLogger("catalog.filters")

SortKey = Callable[[Product], Any]


def _by_id(p: Product) -> str:
    return p.id or ""


def _by_price(p: Product) -> tuple[bool, Decimal]:
    # Missing prices sort ahead of every real price
    return (p.price is not None, p.price or Decimal(0))


def _by_rating(p: Product) -> float:
    return p.rating.average_rating if p.rating is not None else 0.0


def _by_title(p: Product) -> str:
    return p.title or ""


_SORT_KEYS: dict[str, SortKey] = {
    "id": _by_id,
    "price": _by_price,
    "rating": _by_rating,
    "title": _by_title,
}


class ProductSorter:
    """Order products by a named field."""

    @staticmethod
    def sort_key(field_name: str | None) -> SortKey:
        """Return the key function for ``field_name``.

        Unknown or empty names fall back to ordering by id.
        """
        name = (field_name or "").strip().lower()
        key = _SORT_KEYS.get(name)
        if key is None:
            if name:
                logger.debug(
                    "Unknown sort field '%s', sorting by %s",
                    field_name,
                    Settings.DEFAULT_SORT_FIELD,
                )
            key = _SORT_KEYS[Settings.DEFAULT_SORT_FIELD]
        return key

    @staticmethod
    def sort(
        products: list[Product],
        field_name: str | None,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[Product]:
        """Return a new list ordered by ``field_name``.

        The sort is stable in both directions: products with equal
        keys keep their relative input order.
        """
        return sorted(
            products,
            key=ProductSorter.sort_key(field_name),
            reverse=direction is SortDirection.DESC,
        )
