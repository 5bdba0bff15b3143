# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: main.py
# -----------------------------------------------------------------------------
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.AppContainer import AppContainer
from api.routers import health, products
from product.errors import ProductNotFoundError, ProductValidationError
from utility.logging_utils import get_logger

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = get_logger("api")

# baseline response hardening, the same set helmet applies by default
SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'self'; object-src 'none'",
}


def _error(status_code: int, message: str, errors: Optional[List[Dict[str, str]]] = None) -> JSONResponse:
    content: Dict[str, Any] = {"status": "error", "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProductValidationError)
    async def on_validation_error(request: Request, exc: ProductValidationError):
        return _error(400, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def on_request_validation_error(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            loc = [str(p) for p in err.get("loc", ())]
            if loc and loc[0] == "body":
                loc = loc[1:]
            errors.append({"path": ".".join(loc), "message": err.get("msg", "Invalid value")})
        return _error(400, "Invalid request", errors)

    @app.exception_handler(ProductNotFoundError)
    async def on_not_found(request: Request, exc: ProductNotFoundError):
        return _error(404, "Product not found")

    @app.exception_handler(StarletteHTTPException)
    async def on_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Internal Server Error")


def create_app(container: Optional[AppContainer] = None) -> FastAPI:
    """
    Build the FastAPI application. Without a container, one is built from
    the environment; a ConfigError here stops the process before it serves.
    """
    container = container or AppContainer()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # store initialisation failure propagates and aborts startup
        await container.start()
        logger.info("Products API ready")
        try:
            yield
        finally:
            await container.stop()

    app = FastAPI(title="Products Vector Search API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(container.cfg.cors_allow_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def secure_and_log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000.0,
        )
        return response

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router, prefix="/api")
    return app


def __getattr__(name: str) -> Any:
    # `uvicorn api.main:app` builds the app from the environment on first access
    if name == "app":
        application = create_app()
        globals()["app"] = application
        return application
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main() -> None:
    container = AppContainer()
    uvicorn.run(create_app(container), host="0.0.0.0", port=container.cfg.port)


if __name__ == "__main__":
    main()
