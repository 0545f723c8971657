import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import info_router, orders_router
from config import Settings, settings
from errors import (
    DuplicateOrderId,
    NotFound,
    OrderServiceError,
    StoreUnavailable,
    ValidationFailed,
)
from repositories.order_store import OrderStore
from schemas import ErrorResponse
from services.orders_service import OrderService
from stores import build_store

logger = logging.getLogger("food-delivery")

ERROR_STATUS = (
    (ValidationFailed, status.HTTP_400_BAD_REQUEST),
    (DuplicateOrderId, status.HTTP_409_CONFLICT),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def configure_logging(config: Settings) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _status_for(exc: OrderServiceError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _register_error_handlers(app: FastAPI, config: Settings) -> None:
    @app.exception_handler(OrderServiceError)
    async def _order_service_error(request: Request, exc: OrderServiceError):
        if isinstance(exc, ValidationFailed):
            body = ErrorResponse(message=exc.message, errors=exc.errors)
        else:
            body = ErrorResponse(message=exc.message, error=exc.detail)
        return _error_response(_status_for(exc), body)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        errors = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item.get("loc", ()) if part != "body")
            errors.append(f"{location}: {item.get('msg')}" if location else item.get("msg"))
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(message="Validation failed", errors=errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "success": False,
                    "message": "Route not found",
                    "path": request.url.path,
                    "method": request.method,
                },
            )
        return _error_response(exc.status_code, ErrorResponse(message=str(exc.detail)))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        detail = "Something went wrong" if config.is_production else str(exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(message="Internal server error", error=detail),
        )


def create_app(store: Optional[OrderStore] = None, config: Settings = settings) -> FastAPI:
    app = FastAPI(title="Food Delivery Order Manager API")
    app.state.order_service = OrderService(store if store is not None else build_store(config))

    allow_origins = ["*"] if config.allowed_origins == ["*"] else config.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(info_router)
    app.include_router(orders_router)
    _register_error_handlers(app, config)

    if not config.is_production:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            logger.info("%s %s", request.method, request.url.path)
            return await call_next(request)

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "Food Delivery Order Manager API started (environment=%s, store=%s)",
            config.environment,
            type(app.state.order_service.store).__name__,
        )
        if allow_origins == ["*"]:
            logger.warning(
                "CORS is set to allow all origins; set ALLOWED_ORIGINS to explicit values outside local dev."
            )

    return app


configure_logging(settings)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
