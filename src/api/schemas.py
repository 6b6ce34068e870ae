# src/api/schemas.py

"""Request validation schemas shared by the HTTP API and the CLI.

Schemas accept the camelCase wire layout (snake_case names work too)
and convert into the plain request dataclasses the core consumes.
"""

from decimal import Decimal
from typing import Any
from urllib.parse import urlparse

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.models.product import (
    Category,
    Product,
    ProductRating,
    Review,
    Seller,
)
from src.models.requests import (
    CreateProductRequest,
    Present,
    UpdateProductRequest,
)

# Update fields that an explicit null clears instead of rejecting
CLEARABLE_FIELDS: frozenset[str] = frozenset({"description", "attributes"})


def _is_valid_url(value: str) -> bool:
    """Accept absolute http(s) URLs with a host."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _check_urls(urls: list[str] | None) -> list[str] | None:
    if urls is None:
        return urls
    for url in urls:
        if not _is_valid_url(url):
            msg = f"The URL '{url}' is not valid"
            raise ValueError(msg)
    return urls


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SellerSchema(_CamelModel):
    id: str | None = None
    name: str | None = None
    store_name: str | None = None
    is_official_store: bool = False
    rating: float | None = None

    def to_model(self) -> Seller:
        return Seller(
            id=self.id,
            name=self.name,
            store_name=self.store_name,
            is_official_store=self.is_official_store,
            rating=self.rating,
        )


class ReviewSchema(_CamelModel):
    user_id: str | None = None
    comment: str | None = None
    rating: int
    date: str | None = None

    def to_model(self) -> Review:
        return Review(
            user_id=self.user_id,
            comment=self.comment,
            rating=self.rating,
            date=self.date,
        )


class RatingSchema(_CamelModel):
    average_rating: float = 0.0
    total_ratings: int = Field(default=0, ge=0)
    reviews: list[ReviewSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_ranges(self) -> "RatingSchema":
        """The average and every review must lie within 0–5."""
        if not 0.0 <= self.average_rating <= 5.0:
            msg = "Average rating must be between 0 and 5"
            raise ValueError(msg)
        for review in self.reviews:
            if not 0 <= review.rating <= 5:
                msg = "Every review rating must be between 0 and 5"
                raise ValueError(msg)
        return self

    def to_model(self) -> ProductRating:
        return ProductRating(
            average_rating=self.average_rating,
            total_ratings=self.total_ratings,
            reviews=[r.to_model() for r in self.reviews],
        )


class CategorySchema(_CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    parent_id: str | None = None
    attributes: list[str] = Field(default_factory=list)
    active: bool = True

    def to_model(self) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            description=self.description,
            parent_id=self.parent_id,
            attributes=list(self.attributes),
            active=self.active,
        )


class CreateProductSchema(_CamelModel):
    """Body of a product creation request."""

    title: str
    description: str
    price: Decimal = Field(gt=0)
    images: list[str] = Field(min_length=1)
    seller: SellerSchema
    available_stock: int | None = Field(default=None, ge=0)
    payment_methods: list[str] = Field(default_factory=list)
    category: CategorySchema
    attributes: dict[str, str] | None = None

    @field_validator("title", "description")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("images")
    @classmethod
    def check_images(cls, value: list[str]) -> list[str]:
        _check_urls(value)
        return value

    def to_request(self) -> CreateProductRequest:
        return CreateProductRequest(
            title=self.title,
            description=self.description,
            price=self.price,
            images=list(self.images),
            seller=self.seller.to_model(),
            available_stock=self.available_stock,
            payment_methods=list(self.payment_methods),
            category=self.category.to_model(),
            attributes=(
                dict(self.attributes)
                if self.attributes is not None
                else None
            ),
        )


class UpdateProductSchema(_CamelModel):
    """Body of a partial update; every field is optional."""

    title: str | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, gt=0)
    images: list[str] | None = None
    seller: SellerSchema | None = None
    available_stock: int | None = Field(default=None, ge=0)
    payment_methods: list[str] | None = None
    category: CategorySchema | None = None
    attributes: dict[str, str] | None = None
    rating: RatingSchema | None = None

    @field_validator("images")
    @classmethod
    def check_images(cls, value: list[str] | None) -> list[str] | None:
        return _check_urls(value)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def reject_nulls(self) -> "UpdateProductSchema":
        """Only clearable fields may be sent as an explicit null."""
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in CLEARABLE_FIELDS:
                msg = f"'{to_camel(name)}' cannot be null"
                raise ValueError(msg)
        return self

    def to_request(self) -> UpdateProductRequest:
        """Wrap every field the client actually sent in :class:`Present`."""
        values: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if isinstance(value, BaseModel):
                value = value.to_model()  # type: ignore[attr-defined]
            elif name == "attributes" and value is None:
                value = {}
            elif isinstance(value, (list, dict)):
                value = type(value)(value)
            values[name] = Present(value)
        return UpdateProductRequest(**values)


class ProductRecordSchema(_CamelModel):
    """A complete stored product record, as found in bulk import files.

    Applies the same field rules as the create body, but keeps a
    supplied id and rating and lets most sections be omitted.
    """

    id: str | None = None
    title: str
    description: str | None = None
    price: Decimal | None = Field(default=None, gt=0)
    images: list[str] = Field(default_factory=list)
    seller: SellerSchema | None = None
    available_stock: int = Field(default=0, ge=0)
    payment_methods: list[str] = Field(default_factory=list)
    rating: RatingSchema | None = None
    category: CategorySchema | None = None
    attributes: dict[str, str] | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("images")
    @classmethod
    def check_images(cls, value: list[str]) -> list[str]:
        _check_urls(value)
        return value

    def to_product(self) -> Product:
        return Product(
            id=self.id or None,
            title=self.title,
            description=self.description,
            price=self.price,
            images=list(self.images),
            seller=self.seller.to_model() if self.seller else None,
            available_stock=self.available_stock,
            payment_methods=list(self.payment_methods),
            rating=self.rating.to_model() if self.rating else None,
            category=self.category.to_model() if self.category else None,
            attributes=dict(self.attributes or {}),
        )
