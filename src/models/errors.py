# src/models/errors.py

"""Typed failures raised by the catalog core."""

from pathlib import Path


class CatalogError(Exception):
    """Base class for catalog failures."""


class ProductNotFoundError(CatalogError):
    """The requested product id does not exist."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found with id: {product_id}")
        self.product_id = product_id


class ValidationError(CatalogError, ValueError):
    """A request carried malformed or out-of-range values."""

    def __init__(
        self,
        message: str,
        details: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, str] = details or {}


class PersistenceError(CatalogError):
    """The data file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to persist catalog to {path}: {reason}")
        self.path = path
        self.reason = reason
