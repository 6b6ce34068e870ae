# tests/test_main.py

"""Tests for argument parsing and CLI dispatch in main.py."""

import argparse
import io
import json
import unittest
from contextlib import redirect_stdout
from decimal import Decimal

from main import _build_parser, _run_cli, _search_params
from src.config.settings import Settings
from src.models.product import Product
from src.models.requests import SortDirection
from src.storage.product_store import ProductStore


class TestParser(unittest.TestCase):
    """Argument parsing."""

    def test_no_command_defaults_to_tui(self) -> None:
        """A bare invocation has no subcommand."""
        args = _build_parser().parse_args([])
        self.assertIsNone(args.command)

    def test_search_flags(self) -> None:
        """Search flags populate SearchParams."""
        args = _build_parser().parse_args(
            [
                "search", "phone",
                "--min-price", "10.50",
                "--official", "yes",
                "--min-rating", "4",
                "--store", "apple",
                "--page", "2",
                "--size", "5",
                "--sort-by", "price",
                "--desc",
            ]
        )
        params = _search_params(args)
        self.assertEqual(params.query, "phone")
        self.assertEqual(params.min_price, Decimal("10.50"))
        self.assertIsNone(params.max_price)
        self.assertTrue(params.is_official_store)
        self.assertEqual(params.min_rating, 4.0)
        self.assertEqual(params.store_name, "apple")
        self.assertEqual((params.page, params.size), (2, 5))
        self.assertEqual(params.sort_by, "price")
        self.assertIs(params.direction, SortDirection.DESC)

    def test_list_defaults(self) -> None:
        """list uses the configured paging defaults."""
        params = _search_params(_build_parser().parse_args(["list"]))
        self.assertIsNone(params.query)
        self.assertEqual(params.size, Settings.DEFAULT_PAGE_SIZE)
        self.assertIs(params.direction, SortDirection.ASC)

    def test_bad_official_flag_exits(self) -> None:
        """Unrecognised booleans are a usage error."""
        with self.assertRaises(SystemExit):
            _build_parser().parse_args(["search", "--official", "maybe"])

    def test_non_finite_price_flag_exits(self) -> None:
        """NaN or infinite price bounds are a usage error."""
        for raw in ("NaN", "Infinity", "cheap"):
            with self.subTest(raw=raw), self.assertRaises(SystemExit):
                _build_parser().parse_args(["search", "--max-price", raw])

    def test_serve_defaults(self) -> None:
        """serve picks up the configured host and port."""
        args = _build_parser().parse_args(["serve"])
        self.assertEqual(args.host, Settings.API_HOST)
        self.assertEqual(args.port, Settings.API_PORT)


class TestRunCli(unittest.TestCase):
    """Dispatch against the configured data file."""

    def test_list_reads_configured_store(self) -> None:
        """list prints the products stored in Settings.DATA_FILE."""
        ProductStore().put(Product(id="a", title="Alpha"))
        args = _build_parser().parse_args(["list"])
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = _run_cli(args)
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(buf.getvalue())["content"][0]["id"], "a")

    def test_delete_unknown_returns_one(self) -> None:
        """Failures surface as a non-zero exit code."""
        args = argparse.Namespace(command="delete", product_id="missing")
        self.assertEqual(_run_cli(args), 1)


if __name__ == "__main__":
    unittest.main()
