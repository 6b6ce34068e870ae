# src/services/query_engine.py

"""Filter → sort → paginate pipeline over a store snapshot."""

import logging

from src.config.settings import Settings
from src.filters.paginator import Page, Paginator
from src.filters.product_filter import ProductFilter
from src.filters.product_sorter import ProductSorter
from src.models.requests import SearchParams, SortDirection
from src.storage.product_store import ProductStore

logger = logging.getLogger("catalog.query")


class QueryEngine:
    """Answers paged product queries against a :class:`ProductStore`."""

    def __init__(self, store: ProductStore) -> None:
        self._store = store

    def count(self) -> int:
        """Number of stored products, without copying them."""
        return self._store.count()

    def search(self, params: SearchParams) -> Page:
        """Run a filtered, sorted, paginated search.

        The whole pipeline works on one snapshot taken from the
        store, so a concurrent write cannot tear a result page.
        """
        snapshot = self._store.list_all()
        filtered, excluded = ProductFilter.apply(snapshot, params)
        ordered = ProductSorter.sort(
            filtered, params.sort_by, params.direction
        )
        page = Paginator.paginate(ordered, params.page, params.size)

        logger.info(
            "Search matched %d of %d products "
            "(excluded=%d, sort=%s %s, page=%d/%d)",
            len(filtered),
            len(snapshot),
            excluded,
            params.sort_by,
            params.direction.value,
            params.page,
            page.total_pages,
        )
        return page

    def list_products(
        self,
        page: int = Settings.DEFAULT_PAGE,
        size: int = Settings.DEFAULT_PAGE_SIZE,
        sort_by: str = Settings.DEFAULT_SORT_FIELD,
        direction: SortDirection = SortDirection.ASC,
    ) -> Page:
        """Page through every product without filtering."""
        return self.search(
            SearchParams(
                page=page,
                size=size,
                sort_by=sort_by,
                direction=direction,
            )
        )
