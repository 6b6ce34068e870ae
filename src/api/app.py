# src/api/app.py

"""FastAPI application exposing the catalog over HTTP."""

import logging
import uuid
from collections.abc import Awaitable, Callable
from datetime import datetime
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, FastAPI, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.schemas import CreateProductSchema, UpdateProductSchema
from src.config.logging_config import request_id_var
from src.config.settings import Settings
from src.models.errors import (
    PersistenceError,
    ProductNotFoundError,
    ValidationError,
)
from src.models.requests import SearchParams, SortDirection
from src.services.product_service import ProductService
from src.services.query_engine import QueryEngine
from src.storage.product_store import ProductStore

logger = logging.getLogger("catalog.api")

REQUEST_ID_HEADER = "X-Request-ID"


def _error_body(
    status: int,
    error: str,
    message: str,
    details: dict[str, str] | None = None,
) -> dict[str, Any]:
    return {
        "status": status,
        "error": error,
        "message": message,
        "timestamp": datetime.now().isoformat(),
        "details": details or {},
    }


def _validation_details(exc: RequestValidationError) -> dict[str, str]:
    """Flatten pydantic errors into ``{field: message}``."""
    details: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details[".".join(loc) or "body"] = str(err.get("msg", ""))
    return details


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProductNotFoundError)
    async def _not_found(
        request: Request, exc: ProductNotFoundError
    ) -> JSONResponse:
        logger.info("Product %s not found", exc.product_id)
        return JSONResponse(
            status_code=404,
            content=_error_body(404, "Product not found", str(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = _validation_details(exc)
        logger.warning(
            "Validation failed for %s %s: %s",
            request.method,
            request.url.path,
            details,
        )
        return JSONResponse(
            status_code=400,
            content=_error_body(
                400,
                "Validation error",
                "The request contains invalid data",
                details,
            ),
        )

    @app.exception_handler(ValidationError)
    async def _invalid_value(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                400, "Validation error", exc.message, exc.details
            ),
        )

    @app.exception_handler(PersistenceError)
    async def _persistence(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        logger.error("Persistence failure: %s", exc)
        return JSONResponse(
            status_code=503,
            content=_error_body(
                503, "Storage unavailable", "The change could not be saved"
            ),
        )


def _build_router(
    service: ProductService, engine: QueryEngine
) -> APIRouter:
    router = APIRouter(prefix=f"{Settings.API_PREFIX}/products")

    @router.get("")
    def list_products(
        page: int = Query(Settings.DEFAULT_PAGE, ge=0),
        size: int = Query(Settings.DEFAULT_PAGE_SIZE, ge=1),
        sort_by: str = Query(Settings.DEFAULT_SORT_FIELD, alias="sortBy"),
        sort_direction: str = Query("asc", alias="sortDirection"),
    ) -> Any:
        """List every product, paged and sorted."""
        result = engine.list_products(
            page=page,
            size=size,
            sort_by=sort_by,
            direction=SortDirection.parse(sort_direction),
        )
        return jsonable_encoder(result.to_dict())

    @router.get("/search")
    def search_products(
        query: str | None = Query(None),
        min_price: Decimal | None = Query(None, alias="minPrice"),
        max_price: Decimal | None = Query(None, alias="maxPrice"),
        is_official_store: bool | None = Query(None, alias="isOfficialStore"),
        min_rating: float | None = Query(None, alias="minRating"),
        store_name: str | None = Query(None, alias="storeName"),
        page: int = Query(Settings.DEFAULT_PAGE, ge=0),
        size: int = Query(Settings.DEFAULT_PAGE_SIZE, ge=1),
        sort_by: str = Query(Settings.DEFAULT_SORT_FIELD, alias="sortBy"),
        sort_direction: str = Query("asc", alias="sortDirection"),
    ) -> Any:
        """Search products with filters, sorting and paging."""
        params = SearchParams(
            query=query,
            min_price=min_price,
            max_price=max_price,
            is_official_store=is_official_store,
            min_rating=min_rating,
            store_name=store_name,
            page=page,
            size=size,
            sort_by=sort_by,
            direction=SortDirection.parse(sort_direction),
        )
        return jsonable_encoder(engine.search(params).to_dict())

    @router.get("/{product_id}")
    def get_product(product_id: str) -> Any:
        """Fetch one product by id."""
        return jsonable_encoder(service.get(product_id).to_dict())

    @router.post("", status_code=201)
    def create_product(
        body: CreateProductSchema, response: Response
    ) -> Any:
        """Create a product; the rating starts zeroed."""
        product = service.create(body.to_request())
        response.headers["Location"] = (
            f"{Settings.API_PREFIX}/products/{product.id}"
        )
        return jsonable_encoder(product.to_dict())

    @router.patch("/{product_id}")
    def update_product(product_id: str, body: UpdateProductSchema) -> Any:
        """Partially update a product; omitted fields are kept."""
        product = service.update(product_id, body.to_request())
        return jsonable_encoder(product.to_dict())

    @router.delete("/{product_id}", status_code=204)
    def delete_product(product_id: str) -> Response:
        """Permanently delete a product."""
        service.delete(product_id)
        return Response(status_code=204)

    return router


def create_app(
    service: ProductService | None = None,
    engine: QueryEngine | None = None,
) -> FastAPI:
    """Build the API around the given service and query engine.

    When neither is supplied both share a store over
    ``Settings.DATA_FILE``.
    """
    if service is None or engine is None:
        store = ProductStore()
        service = service or ProductService(store)
        engine = engine or QueryEngine(store)

    app = FastAPI(
        title="Product Catalog API",
        version="1.0.0",
        description="CRUD and filtered, paged search over a product catalog",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _request_context(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(
            uuid.uuid4()
        )
        token = request_id_var.set(request_id)
        try:
            logger.debug(
                "%s %s from %s",
                request.method,
                request.url.path,
                request.client.host if request.client else "-",
            )
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.get(f"{Settings.API_PREFIX}/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "products": engine.count()}

    _register_error_handlers(app)
    app.include_router(_build_router(service, engine))
    return app
