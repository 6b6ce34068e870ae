# src/ui/app.py

"""Terminal UI for browsing and pruning the product catalog."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from src.config.settings import Settings
from src.filters.paginator import Page
from src.models.errors import CatalogError
from src.models.product import Product
from src.models.requests import SearchParams, SortDirection
from src.services.product_service import ProductService
from src.services.query_engine import QueryEngine
from src.storage.product_store import ProductStore

logger = logging.getLogger("catalog.ui")


class CatalogApp(App[object]):
    """Terminal UI for the product catalog."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("p", "sort_price", "Price Sort"),
        Binding("r", "sort_rating", "Rating Sort"),
        Binding("t", "sort_title", "Title Sort"),
        Binding("o", "toggle_direction", "Asc/Desc"),
        Binding("n", "next_page", "Next Page"),
        Binding("b", "prev_page", "Prev Page"),
        Binding("d", "delete_selected", "Delete"),
    ]

    def __init__(
        self,
        service: ProductService | None = None,
        engine: QueryEngine | None = None,
    ) -> None:
        super().__init__()
        if service is None or engine is None:
            store = ProductStore()
            service = service or ProductService(store)
            engine = engine or QueryEngine(store)
        self.service = service
        self.engine = engine
        self.products: list[Product] = []
        self.current_query: str = ""
        self.page_number: int = 0
        self.sort_by: str = Settings.DEFAULT_SORT_FIELD
        self.direction: SortDirection = SortDirection.ASC
        self.last_page: Page | None = None

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("🛒 Product Catalog", id="title"),

            # Search Bar
            Horizontal(
                Input(
                    placeholder="Search title or description...",
                    id="search_input",
                ),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),

            Horizontal(
                Checkbox(
                    "Official stores only", value=False, id="official_only"
                ),
                id="filter_toggles",
            ),

            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the table columns and show the first page."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.add_columns("Title", "Price", "Rating", "Store", "Stock")
        self.refresh_results()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "search_btn":
            self.perform_search()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the search input."""
        if event.input.id == "search_input":
            self.perform_search()

    def perform_search(self) -> None:
        """Start a new search from the first page."""
        search_input = self.query_one("#search_input", Input)
        self.current_query = search_input.value.strip()
        self.page_number = 0
        self.refresh_results()

    def _build_params(self) -> SearchParams:
        official = self.query_one("#official_only", Checkbox).value
        return SearchParams(
            query=self.current_query or None,
            is_official_store=True if official else None,
            page=self.page_number,
            size=Settings.DEFAULT_PAGE_SIZE,
            sort_by=self.sort_by,
            direction=self.direction,
        )

    def refresh_results(self) -> None:
        """Re-run the current query and redraw the table."""
        status = self.query_one("#status", Static)
        try:
            page = self.engine.search(self._build_params())
        except CatalogError as e:
            logger.error("Search failed: %s", e, exc_info=True)
            self.notify(f"Search failed: {e}", severity="error")
            return

        self.last_page = page
        self.products = list(page.content)
        self.populate_table()

        if not page.total_elements:
            status.update("❌ No products found")
        else:
            status.update(
                f"✅ {page.total_elements} products, page "
                f"{page.page_number + 1}/{max(page.total_pages, 1)} "
                f"(sorted by {self.sort_by} {self.direction.value})"
            )

    def populate_table(self) -> None:
        """Fill the DataTable with the current page of products."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()

        for p in self.products:
            price = Text(
                f"{p.price:,.2f}" if p.price is not None else "N/A",
                style="bold green" if p.price is not None else "dim",
            )
            rating = (
                f"⭐ {p.rating.average_rating:.1f}"
                if p.rating and p.rating.total_ratings
                else ""
            )
            store = ""
            if p.seller:
                store = p.seller.store_name or p.seller.name or ""
                if p.seller.is_official_store:
                    store += " ✓"
            table.add_row(
                p.title[:60],
                price,
                rating,
                store,
                str(p.available_stock),
            )

    def _resort(self, field_name: str) -> None:
        self.sort_by = field_name
        self.page_number = 0
        self.refresh_results()

    def action_sort_price(self) -> None:
        """Sort products by price."""
        self._resort("price")

    def action_sort_rating(self) -> None:
        """Sort products by average rating."""
        self._resort("rating")

    def action_sort_title(self) -> None:
        """Sort products by title."""
        self._resort("title")

    def action_toggle_direction(self) -> None:
        """Flip between ascending and descending order."""
        self.direction = (
            SortDirection.ASC
            if self.direction is SortDirection.DESC
            else SortDirection.DESC
        )
        self.refresh_results()

    def action_next_page(self) -> None:
        """Move to the next page when one exists."""
        if self.last_page is None or self.last_page.last:
            self.notify("Already on the last page", severity="warning")
            return
        self.page_number += 1
        self.refresh_results()

    def action_prev_page(self) -> None:
        """Move to the previous page when one exists."""
        if self.page_number == 0:
            self.notify("Already on the first page", severity="warning")
            return
        self.page_number -= 1
        self.refresh_results()

    def action_delete_selected(self) -> None:
        """Delete the product under the table cursor."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        row = table.cursor_row
        if not 0 <= row < len(self.products):
            self.notify("No product selected", severity="warning")
            return

        product = self.products[row]
        try:
            self.service.delete(product.id or "")
        except CatalogError as e:
            logger.error("Failed to delete %s", product.id, exc_info=True)
            self.notify(f"Delete failed: {e}", severity="error")
            return

        logger.info("Deleted product %s from the TUI", product.id)
        self.notify(f"Deleted '{product.title}'")
        if len(self.products) == 1 and self.page_number > 0:
            self.page_number -= 1
        self.refresh_results()
