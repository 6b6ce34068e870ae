# tests/test_paginator.py

"""Tests for offset pagination and page metadata."""

import unittest

from src.filters.paginator import Page, Paginator
from src.models.errors import ValidationError
from src.models.product import Product


def _products(n: int) -> list[Product]:
    return [Product(id=f"p{i}", title=f"Item {i}") for i in range(n)]


class TestPaginator(unittest.TestCase):
    """Paginator.paginate behaviour."""

    def test_middle_page(self) -> None:
        """N=5, page 1 of size 2 holds items 2 and 3."""
        page = Paginator.paginate(_products(5), page=1, size=2)
        self.assertEqual([p.id for p in page.content], ["p2", "p3"])
        self.assertFalse(page.first)
        self.assertFalse(page.last)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.total_elements, 5)
        self.assertEqual(page.page_number, 1)
        self.assertEqual(page.page_size, 2)

    def test_last_partial_page(self) -> None:
        """N=5, page 2 of size 2 holds one item and is last."""
        page = Paginator.paginate(_products(5), page=2, size=2)
        self.assertEqual([p.id for p in page.content], ["p4"])
        self.assertTrue(page.last)
        self.assertFalse(page.first)

    def test_first_page(self) -> None:
        """Page 0 is flagged first."""
        page = Paginator.paginate(_products(5), page=0, size=2)
        self.assertTrue(page.first)
        self.assertFalse(page.last)
        self.assertEqual(len(page.content), 2)

    def test_single_page(self) -> None:
        """When everything fits, the page is both first and last."""
        page = Paginator.paginate(_products(3), page=0, size=10)
        self.assertTrue(page.first)
        self.assertTrue(page.last)
        self.assertEqual(page.total_pages, 1)

    def test_empty_sequence(self) -> None:
        """N=0 gives zero pages, an empty first page, and last=True."""
        page = Paginator.paginate([], page=0, size=10)
        self.assertEqual(page.content, [])
        self.assertEqual(page.total_pages, 0)
        self.assertEqual(page.total_elements, 0)
        self.assertTrue(page.first)
        self.assertTrue(page.last)

    def test_out_of_range_page_is_empty(self) -> None:
        """Pages past the end are empty rather than an error."""
        page = Paginator.paginate(_products(5), page=7, size=2)
        self.assertEqual(page.content, [])
        self.assertEqual(page.total_pages, 3)
        self.assertTrue(page.last)
        self.assertFalse(page.first)

    def test_exact_multiple(self) -> None:
        """N=4, size=2 gives exactly two pages."""
        page = Paginator.paginate(_products(4), page=1, size=2)
        self.assertEqual(page.total_pages, 2)
        self.assertTrue(page.last)

    def test_zero_size_rejected(self) -> None:
        """A page size of zero is a validation error."""
        with self.assertRaises(ValidationError) as ctx:
            Paginator.paginate(_products(2), page=0, size=0)
        self.assertIn("size", ctx.exception.details)

    def test_negative_page_rejected(self) -> None:
        """A negative page index is a validation error."""
        with self.assertRaises(ValidationError):
            Paginator.paginate(_products(2), page=-1, size=2)

    def test_to_dict_layout(self) -> None:
        """The page serialises with the paged-result keys."""
        data = Paginator.paginate(_products(3), page=0, size=2).to_dict()
        self.assertEqual(
            set(data),
            {
                "content",
                "pageNumber",
                "pageSize",
                "totalElements",
                "totalPages",
                "first",
                "last",
            },
        )
        self.assertEqual(len(data["content"]), 2)
        self.assertEqual(data["content"][0]["id"], "p0")

    def test_default_page_is_empty(self) -> None:
        """A bare Page describes an empty result."""
        page = Page()
        self.assertEqual(page.content, [])
        self.assertTrue(page.first)
        self.assertTrue(page.last)


if __name__ == "__main__":
    unittest.main()
