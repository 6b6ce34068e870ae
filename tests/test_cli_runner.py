# tests/test_cli_runner.py

"""Tests for the headless CLI commands."""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from decimal import Decimal
from pathlib import Path
from typing import Any

from src.cli.runner import (
    run_create,
    run_delete,
    run_get,
    run_import,
    run_search,
    run_update,
)
from src.models.product import Product
from src.models.requests import SearchParams
from src.services.product_service import ProductService
from src.services.query_engine import QueryEngine
from src.storage.product_store import ProductStore


class TestCliRunner(unittest.TestCase):
    """Exit codes and stdout payloads of the runner functions."""

    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmpdir.name)
        self.store = ProductStore(self.tmp / "products.json")
        self.service = ProductService(self.store)
        self.engine = QueryEngine(self.store)

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _json_file(self, name: str, payload: Any) -> str:
        path = self.tmp / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    def _capture(self, func: Any, *args: Any) -> tuple[int, str]:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = func(*args)
        return code, buf.getvalue()

    def _seed(self) -> None:
        self.store.put_many(
            [
                Product(id="a", title="Alpha", price=Decimal("5.25")),
                Product(id="b", title="Beta", price=Decimal("15")),
            ]
        )

    def test_search_emits_page_json(self) -> None:
        """Search prints the page as JSON with numeric prices."""
        self._seed()
        code, out = self._capture(
            run_search,
            self.engine,
            SearchParams(min_price=Decimal("10")),
        )
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["totalElements"], 1)
        self.assertEqual(data["content"][0]["id"], "b")
        self.assertEqual(data["content"][0]["price"], 15.0)

    def test_search_table_output(self) -> None:
        """Table output renders product titles."""
        self._seed()
        code, out = self._capture(
            run_search, self.engine, SearchParams(), "table"
        )
        self.assertEqual(code, 0)
        self.assertIn("Alpha", out)

    def test_search_bad_paging_fails(self) -> None:
        """A zero page size is reported as a failure."""
        code, out = self._capture(
            run_search, self.engine, SearchParams(size=0)
        )
        self.assertEqual(code, 1)
        self.assertEqual(out, "")

    def test_get(self) -> None:
        """Get prints the product, or fails for unknown ids."""
        self._seed()
        code, out = self._capture(run_get, self.service, "a")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["title"], "Alpha")

        code, _ = self._capture(run_get, self.service, "missing")
        self.assertEqual(code, 1)

    def test_create_from_file(self) -> None:
        """A valid request file creates a product."""
        path = self._json_file(
            "new.json",
            {
                "title": "Lamp",
                "description": "Desk lamp",
                "price": "19.99",
                "images": ["https://img.example.com/lamp.jpg"],
                "seller": {"name": "Lights"},
                "category": {"id": "HOME", "name": "Home"},
            },
        )
        code, out = self._capture(run_create, self.service, path)
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["title"], "Lamp")
        self.assertEqual(self.store.count(), 1)

    def test_create_invalid_file(self) -> None:
        """Schema violations and unreadable files exit with 1."""
        bad = self._json_file("bad.json", {"title": ""})
        code, _ = self._capture(run_create, self.service, bad)
        self.assertEqual(code, 1)

        code, _ = self._capture(
            run_create, self.service, str(self.tmp / "absent.json")
        )
        self.assertEqual(code, 1)
        self.assertEqual(self.store.count(), 0)

    def test_update_from_file(self) -> None:
        """A partial update file changes only the given fields."""
        self._seed()
        path = self._json_file("patch.json", {"availableStock": 9})
        code, out = self._capture(run_update, self.service, "a", path)
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["availableStock"], 9)
        self.assertEqual(data["title"], "Alpha")

    def test_update_unknown_fails(self) -> None:
        """Updating a missing product exits with 1."""
        path = self._json_file("patch.json", {"title": "X"})
        code, _ = self._capture(run_update, self.service, "missing", path)
        self.assertEqual(code, 1)

    def test_delete(self) -> None:
        """Delete succeeds once, then fails."""
        self._seed()
        self.assertEqual(run_delete(self.service, "a"), 0)
        self.assertEqual(run_delete(self.service, "a"), 1)
        self.assertFalse(self.store.exists("a"))

    def test_import(self) -> None:
        """Import upserts a JSON array of product records."""
        path = self._json_file(
            "bulk.json",
            [
                {"id": "x", "title": "X", "price": 1},
                {"id": "y", "title": "Y"},
            ],
        )
        self.assertEqual(run_import(self.service, path), 0)
        self.assertEqual(self.store.count(), 2)

    def test_import_skips_invalid_records(self) -> None:
        """Invalid records are skipped and later price searches still work."""
        path = self._json_file(
            "bulk.json",
            [
                {"id": "ok", "title": "OK", "price": "10"},
                {"id": "nan", "title": "Bad", "price": "NaN"},
                {"id": "neg", "title": "Bad", "availableStock": -3},
            ],
        )
        self.assertEqual(run_import(self.service, path), 0)
        self.assertEqual(self.store.count(), 1)
        code, out = self._capture(
            run_search, self.engine, SearchParams(sort_by="price")
        )
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["content"][0]["id"], "ok")

    def test_import_rejects_non_array(self) -> None:
        """Import files must hold a JSON array."""
        path = self._json_file("bulk.json", {"id": "x", "title": "X"})
        self.assertEqual(run_import(self.service, path), 1)
        self.assertEqual(self.store.count(), 0)


if __name__ == "__main__":
    unittest.main()
