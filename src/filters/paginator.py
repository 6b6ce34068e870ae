# src/filters/paginator.py

"""Offset pagination over an ordered product sequence."""

import math
from dataclasses import dataclass, field
from typing import Any

from src.models.errors import ValidationError
from src.models.product import Product


@dataclass
class Page:
    """One page of results plus the metadata describing it."""

    content: list[Product] = field(default_factory=lambda: list[Product]())
    page_number: int = 0
    page_size: int = 0
    total_elements: int = 0
    total_pages: int = 0
    first: bool = True
    last: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [p.to_dict() for p in self.content],
            "pageNumber": self.page_number,
            "pageSize": self.page_size,
            "totalElements": self.total_elements,
            "totalPages": self.total_pages,
            "first": self.first,
            "last": self.last,
        }


class Paginator:
    """Slice ordered sequences into zero-based pages."""

    @staticmethod
    def paginate(
        products: list[Product],
        page: int,
        size: int,
    ) -> Page:
        """Return page ``page`` of ``size`` items.

        Pages past the end are empty rather than an error.  ``last``
        is true whenever no further page exists, which covers both
        the empty sequence and out-of-range page numbers.
        """
        if size <= 0:
            raise ValidationError(
                "Page size must be greater than zero",
                {"size": f"must be > 0, got {size}"},
            )
        if page < 0:
            raise ValidationError(
                "Page number must not be negative",
                {"page": f"must be >= 0, got {page}"},
            )

        total = len(products)
        start = page * size
        end = min(start + size, total)
        content = products[start:end] if start < total else []
        total_pages = math.ceil(total / size)

        return Page(
            content=content,
            page_number=page,
            page_size=size,
            total_elements=total,
            total_pages=total_pages,
            first=page == 0,
            last=page >= total_pages - 1,
        )
