# src/models/product.py

"""Product data model and its embedded sub-records.

Every record converts to and from the camelCase dict layout used
both by the JSON data file and by the HTTP API.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any


def _to_decimal(raw: Any) -> Decimal | None:
    """Parse a price from a JSON number or string."""
    if raw is None:
        return None
    try:
        value = Decimal(str(raw))
    except InvalidOperation as exc:
        msg = f"Invalid price value: {raw!r}"
        raise ValueError(msg) from exc
    if not value.is_finite():
        msg = f"Price must be a finite number, got {raw!r}"
        raise ValueError(msg)
    return value


def _to_bool(raw: Any, default: bool) -> bool:
    """Read a JSON boolean, also accepting "true"/"false" strings."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    msg = f"Invalid boolean value: {raw!r}"
    raise ValueError(msg)


@dataclass
class Seller:
    """Seller embedded in a product listing."""

    id: str | None = None
    name: str | None = None
    store_name: str | None = None
    is_official_store: bool = False
    rating: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "storeName": self.store_name,
            "isOfficialStore": self.is_official_store,
            "rating": self.rating,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Seller":
        rating = data.get("rating")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            store_name=data.get("storeName"),
            is_official_store=_to_bool(data.get("isOfficialStore"), False),
            rating=float(rating) if rating is not None else None,
        )


@dataclass
class Review:
    """A single customer review."""

    user_id: str | None = None
    comment: str | None = None
    rating: int = 0
    date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "comment": self.comment,
            "rating": self.rating,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Review":
        return cls(
            user_id=data.get("userId"),
            comment=data.get("comment"),
            rating=int(data.get("rating", 0)),
            date=data.get("date"),
        )


@dataclass
class ProductRating:
    """Aggregate rating summary with the reviews behind it."""

    average_rating: float = 0.0
    total_ratings: int = 0
    reviews: list[Review] = field(default_factory=lambda: list[Review]())

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageRating": self.average_rating,
            "totalRatings": self.total_ratings,
            "reviews": [r.to_dict() for r in self.reviews],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductRating":
        return cls(
            average_rating=float(data.get("averageRating") or 0.0),
            total_ratings=int(data.get("totalRatings") or 0),
            reviews=[
                Review.from_dict(r) for r in data.get("reviews") or []
            ],
        )


@dataclass
class Category:
    """Product category, optionally nested under a parent category."""

    id: str
    name: str
    description: str | None = None
    parent_id: str | None = None
    attributes: list[str] = field(default_factory=lambda: list[str]())
    active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "parentId": self.parent_id,
            "attributes": list(self.attributes),
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=data.get("description"),
            parent_id=data.get("parentId"),
            attributes=list(data.get("attributes") or []),
            active=_to_bool(data.get("active"), True),
        )


@dataclass
class Product:
    """A catalog product listing."""

    title: str
    id: str | None = None
    description: str | None = None
    price: Decimal | None = None
    images: list[str] = field(default_factory=lambda: list[str]())
    seller: Seller | None = None
    available_stock: int = 0
    payment_methods: list[str] = field(default_factory=lambda: list[str]())
    rating: ProductRating | None = None
    category: Category | None = None
    attributes: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase layout (price stays a ``Decimal``)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "images": list(self.images),
            "seller": self.seller.to_dict() if self.seller else None,
            "availableStock": self.available_stock,
            "paymentMethods": list(self.payment_methods),
            "rating": self.rating.to_dict() if self.rating else None,
            "category": (
                self.category.to_dict() if self.category else None
            ),
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a product from its camelCase dict layout.

        Raises ``KeyError`` / ``ValueError`` / ``TypeError`` on records
        that cannot be interpreted.
        """
        seller = data.get("seller")
        rating = data.get("rating")
        category = data.get("category")
        return cls(
            id=data.get("id"),
            title=str(data.get("title") or ""),
            description=data.get("description"),
            price=_to_decimal(data.get("price")),
            images=list(data.get("images") or []),
            seller=Seller.from_dict(seller) if seller else None,
            available_stock=int(data.get("availableStock") or 0),
            payment_methods=list(data.get("paymentMethods") or []),
            rating=ProductRating.from_dict(rating) if rating else None,
            category=Category.from_dict(category) if category else None,
            attributes={
                str(k): str(v)
                for k, v in (data.get("attributes") or {}).items()
            },
        )
