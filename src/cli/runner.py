# src/cli/runner.py

"""Headless CLI commands over the catalog service."""

import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import ValidationError as SchemaValidationError
from rich.console import Console
from rich.table import Table

from src.api.schemas import CreateProductSchema, UpdateProductSchema
from src.filters.paginator import Page
from src.models.errors import CatalogError, ProductNotFoundError
from src.models.product import Product
from src.models.requests import SearchParams
from src.services.product_service import ProductService
from src.services.query_engine import QueryEngine

logger = logging.getLogger("catalog.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _encode(value: object) -> object:
    if isinstance(value, Decimal):
        return float(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _emit_json(payload: object) -> None:
    json.dump(
        payload, sys.stdout, ensure_ascii=False, indent=2, default=_encode
    )
    sys.stdout.write("\n")


def _read_json(path: str) -> Any:
    """Load a JSON document, reporting problems on stderr."""
    try:
        with open(Path(path), encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read %s: %s", path, exc)
        _err.print(f"[red]Could not read {path}: {exc}[/red]")
        return None


def _report_schema_errors(exc: SchemaValidationError) -> None:
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        _err.print(f"[red]{loc or 'body'}: {err.get('msg')}[/red]")


def _format_price(product: Product) -> str:
    return f"{product.price:,.2f}" if product.price is not None else "N/A"


def _print_table(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", overflow="fold")
    table.add_column("Title", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Store", style="magenta")
    table.add_column("Stock", justify="right")

    for p in products:
        rating = (
            f"{p.rating.average_rating:.1f} ({p.rating.total_ratings})"
            if p.rating
            else "—"
        )
        store = ""
        if p.seller:
            store = p.seller.store_name or p.seller.name or ""
            if p.seller.is_official_store:
                store += " ✓"
        table.add_row(
            p.id or "",
            p.title[:50],
            _format_price(p),
            rating,
            store,
            str(p.available_stock),
        )

    Console().print(table)


def _output_page(page: Page, output_format: str) -> None:
    if output_format == "table":
        _print_table(
            page.content,
            f"Products (page {page.page_number + 1} of "
            f"{max(page.total_pages, 1)}, {page.total_elements} total)",
        )
    else:
        _emit_json(page.to_dict())


def _output_product(product: Product, output_format: str) -> None:
    if output_format == "table":
        _print_table([product], "Product")
    else:
        _emit_json(product.to_dict())


def run_search(
    engine: QueryEngine,
    params: SearchParams,
    output_format: str = "json",
) -> int:
    """Run a paged search and print the page."""
    try:
        page = engine.search(params)
    except CatalogError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    _err.print(
        f"[green]✓ {page.total_elements} matching products[/green]"
    )
    _output_page(page, output_format)
    return 0


def run_get(
    service: ProductService,
    product_id: str,
    output_format: str = "json",
) -> int:
    """Print a single product."""
    try:
        product = service.get(product_id)
    except ProductNotFoundError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1
    _output_product(product, output_format)
    return 0


def run_create(
    service: ProductService,
    json_path: str,
    output_format: str = "json",
) -> int:
    """Create a product from a JSON request file."""
    payload = _read_json(json_path)
    if payload is None:
        return 1
    try:
        request = CreateProductSchema.model_validate(payload).to_request()
        product = service.create(request)
    except SchemaValidationError as exc:
        _report_schema_errors(exc)
        return 1
    except CatalogError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    _err.print(f"[green]✓ Created product {product.id}[/green]")
    _output_product(product, output_format)
    return 0


def run_update(
    service: ProductService,
    product_id: str,
    json_path: str,
    output_format: str = "json",
) -> int:
    """Apply a partial update read from a JSON file."""
    payload = _read_json(json_path)
    if payload is None:
        return 1
    try:
        request = UpdateProductSchema.model_validate(payload).to_request()
        product = service.update(product_id, request)
    except SchemaValidationError as exc:
        _report_schema_errors(exc)
        return 1
    except CatalogError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    _err.print(f"[green]✓ Updated product {product.id}[/green]")
    _output_product(product, output_format)
    return 0


def run_delete(service: ProductService, product_id: str) -> int:
    """Delete a product by id."""
    try:
        service.delete(product_id)
    except CatalogError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1
    _err.print(f"[green]✓ Deleted product {product_id}[/green]")
    return 0


def run_import(service: ProductService, json_path: str) -> int:
    """Bulk-upsert products from a JSON array of product records."""
    from rich.progress import Progress

    payload = _read_json(json_path)
    if payload is None:
        return 1
    if not isinstance(payload, list):
        _err.print("[red]Import file must contain a JSON array.[/red]")
        return 1

    _err.print(
        f"[bold]Importing {len(payload)} record(s) from {json_path}...[/bold]"
    )
    with Progress(console=_err, transient=True) as progress:
        task = progress.add_task("Importing...", total=None)
        try:
            summary = service.import_products(payload)
        except CatalogError as exc:
            _err.print(f"[red]Import failed: {exc}[/red]")
            return 1
        progress.update(task, completed=1, total=1)

    for message in summary.errors:
        _err.print(f"[yellow]Skipped {message}[/yellow]")
    _err.print(
        f"[green]✓ Imported {summary.imported:,} product(s)"
        f" ({summary.skipped} skipped)[/green]"
    )
    return 0 if summary.imported or not payload else 1
