# Main application file

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smartstore.core.config import settings
from smartstore.core.exceptions import (
    ConstraintViolation,
    NotFoundError,
    SmartStoreError,
    TransactionFailure,
    ValidationError,
)
from smartstore.routers import (
    employees,
    expenses,
    ingredients,
    products,
    recipes,
    reports,
    sales,
)
from smartstore.store import Store, bootstrap


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("smartstore")


# ERROR MAPPING

STATUS_CODES = (
    (ValidationError, 422),
    (NotFoundError, 404),
    (ConstraintViolation, 409),
    (TransactionFailure, 500),
)


def status_for(exc: SmartStoreError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app(store: Optional[Store] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "store", None) is None
        if owned:
            # MigrationFailure propagates and aborts startup
            app.state.store = bootstrap(settings)
        yield
        if owned:
            app.state.store.close()

    app = FastAPI(
        title="SmartStore API",
        description="Point-of-sale backend: ingredients, recipes, products, sales and reports",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    # CORS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    # REQUEST LOGGING MIDDLEWARE

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = round((time.time() - start_time) * 1000, 2)

        logger.info(
            f"{request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Time: {duration}ms"
        )

        return response

    @app.exception_handler(SmartStoreError)
    async def smartstore_error_handler(request: Request, exc: SmartStoreError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=status_code, content={"detail": exc.to_dict()})

    # ROUTERS

    app.include_router(ingredients.router)
    app.include_router(recipes.router)
    app.include_router(products.router)
    app.include_router(sales.router)
    app.include_router(reports.router)
    app.include_router(employees.router)
    app.include_router(expenses.router)

    # ROOT

    @app.get("/")
    def root():
        logger.info("Health check endpoint called")
        return {"message": "SmartStore API is running"}

    return app


app = create_app()
