# storefront/api/__init__.py
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from storefront.api.errors import validation_exception_handler
from storefront.api.routers import carts, health, orders, users


def register(app: FastAPI) -> FastAPI:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    return app
