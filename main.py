# main.py

"""Entry point for the product catalog (TUI, headless CLI or HTTP API)."""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.requests import SearchParams, SortDirection

logger = logging.getLogger("catalog.main")


def _add_output_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )


def _add_paging_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--page", type=int, default=Settings.DEFAULT_PAGE,
        help="Zero-based page number (default: 0).",
    )
    parser.add_argument(
        "--size", type=int, default=Settings.DEFAULT_PAGE_SIZE,
        help="Page size (default: 10).",
    )
    parser.add_argument(
        "--sort-by",
        default=Settings.DEFAULT_SORT_FIELD,
        dest="sort_by",
        help=f"Sort field: {', '.join(Settings.SORTABLE_FIELDS)} (default: id).",
    )
    parser.add_argument(
        "--desc",
        action="store_true",
        default=False,
        help="Sort in descending order.",
    )


def _price_arg(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        msg = f"invalid price '{raw}'"
        raise argparse.ArgumentTypeError(msg) from None
    if not value.is_finite():
        msg = f"price must be a finite number, got '{raw}'"
        raise argparse.ArgumentTypeError(msg)
    return value


def _official_flag(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in {"true", "yes", "1"}:
        return True
    if lowered in {"false", "no", "0"}:
        return False
    msg = f"expected true/false, got '{raw}'"
    raise argparse.ArgumentTypeError(msg)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalog",
        description="Product catalog with filtered, paged search.",
        epilog=f"Data file: {Settings.DATA_FILE}",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("tui", help="Launch the interactive TUI (default).")

    list_p = sub.add_parser("list", help="List products page by page.")
    _add_paging_flags(list_p)
    _add_output_flag(list_p)

    search_p = sub.add_parser("search", help="Search products with filters.")
    search_p.add_argument(
        "query", nargs="?", default=None,
        help="Text matched against title and description.",
    )
    search_p.add_argument("--min-price", type=_price_arg, dest="min_price")
    search_p.add_argument("--max-price", type=_price_arg, dest="max_price")
    search_p.add_argument(
        "--official", type=_official_flag, dest="is_official_store",
        help="Only official (true) or unofficial (false) stores.",
    )
    search_p.add_argument("--min-rating", type=float, dest="min_rating")
    search_p.add_argument("--store", dest="store_name")
    _add_paging_flags(search_p)
    _add_output_flag(search_p)

    get_p = sub.add_parser("get", help="Show one product.")
    get_p.add_argument("product_id")
    _add_output_flag(get_p)

    create_p = sub.add_parser("create", help="Create a product from a JSON file.")
    create_p.add_argument("file")
    _add_output_flag(create_p)

    update_p = sub.add_parser(
        "update", help="Partially update a product from a JSON file."
    )
    update_p.add_argument("product_id")
    update_p.add_argument("file")
    _add_output_flag(update_p)

    delete_p = sub.add_parser("delete", help="Delete a product.")
    delete_p.add_argument("product_id")

    import_p = sub.add_parser(
        "import", help="Bulk-import a JSON array of product records."
    )
    import_p.add_argument("file")

    serve_p = sub.add_parser("serve", help="Run the HTTP API.")
    serve_p.add_argument("--host", default=Settings.API_HOST)
    serve_p.add_argument("--port", type=int, default=Settings.API_PORT)

    return parser


def _search_params(args: argparse.Namespace) -> SearchParams:
    return SearchParams(
        query=getattr(args, "query", None),
        min_price=getattr(args, "min_price", None),
        max_price=getattr(args, "max_price", None),
        is_official_store=getattr(args, "is_official_store", None),
        min_rating=getattr(args, "min_rating", None),
        store_name=getattr(args, "store_name", None),
        page=args.page,
        size=args.size,
        sort_by=args.sort_by,
        direction=SortDirection.DESC if args.desc else SortDirection.ASC,
    )


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import CatalogApp

    try:
        app = CatalogApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("catalog TUI shutting down")


def _run_server(host: str, port: int) -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from src.api.app import create_app

    logger.info("Starting HTTP API on %s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port)


def _run_cli(args: argparse.Namespace) -> int:
    """Dispatch a headless subcommand and return its exit code."""
    from src.cli import runner
    from src.services.product_service import ProductService
    from src.services.query_engine import QueryEngine
    from src.storage.product_store import ProductStore

    store = ProductStore()
    service = ProductService(store)
    engine = QueryEngine(store)

    if args.command in ("list", "search"):
        return runner.run_search(
            engine, _search_params(args), args.output_format
        )
    if args.command == "get":
        return runner.run_get(service, args.product_id, args.output_format)
    if args.command == "create":
        return runner.run_create(service, args.file, args.output_format)
    if args.command == "update":
        return runner.run_update(
            service, args.product_id, args.file, args.output_format
        )
    if args.command == "delete":
        return runner.run_delete(service, args.product_id)
    return runner.run_import(service, args.file)


def main() -> None:
    """Route to TUI (no args), the HTTP server, or a CLI command."""
    log_file = setup_logging()
    logger.info("catalog starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.command in (None, "tui"):
        _run_tui()
    elif args.command == "serve":
        _run_server(args.host, args.port)
    else:
        sys.exit(_run_cli(args))


if __name__ == "__main__":
    main()
