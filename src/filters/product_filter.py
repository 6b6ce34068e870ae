# src/filters/product_filter.py

"""Predicate-based product filtering from search parameters."""

import logging
from collections.abc import Callable

from src.models.product import Product
from src.models.requests import SearchParams

logger = logging.getLogger("catalog.filters")

ProductPredicate = Callable[[Product], bool]


def _contains(haystack: str | None, needle_lower: str) -> bool:
    return haystack is not None and needle_lower in haystack.lower()


class ProductFilter:
    """Build and apply the AND of the search sub-predicates.

    Each sub-predicate is only added when its parameter is set, so an
    empty :class:`SearchParams` matches every product.
    """

    @staticmethod
    def build_predicate(params: SearchParams) -> ProductPredicate:
        """Translate ``params`` into a single product predicate."""
        checks: list[ProductPredicate] = []

        if params.query is not None:
            query = params.query.lower()
            checks.append(
                lambda p: _contains(p.title, query)
                or _contains(p.description, query)
            )

        if params.min_price is not None:
            min_price = params.min_price
            checks.append(
                lambda p: p.price is not None and p.price >= min_price
            )

        if params.max_price is not None:
            max_price = params.max_price
            checks.append(
                lambda p: p.price is not None and p.price <= max_price
            )

        if params.is_official_store is not None:
            official = params.is_official_store
            checks.append(
                lambda p: p.seller is not None
                and p.seller.is_official_store == official
            )

        if params.min_rating is not None:
            min_rating = params.min_rating
            checks.append(
                lambda p: p.rating is not None
                and p.rating.average_rating >= min_rating
            )

        if params.store_name is not None:
            store_name = params.store_name.lower()
            checks.append(
                lambda p: p.seller is not None
                and _contains(p.seller.store_name, store_name)
            )

        return lambda product: all(check(product) for check in checks)

    @staticmethod
    def apply(
        products: list[Product],
        params: SearchParams,
    ) -> tuple[list[Product], int]:
        """Keep the products matching ``params``, preserving order.

        Returns the matching list and the count of excluded products.
        """
        predicate = ProductFilter.build_predicate(params)
        kept = [p for p in products if predicate(p)]
        excluded = len(products) - len(kept)

        if excluded:
            logger.debug(
                "Filtered out %d of %d products", excluded, len(products)
            )

        return kept, excluded
