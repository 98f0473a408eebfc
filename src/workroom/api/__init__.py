"""Workroom API package."""

from workroom.api.routes import orders_router, production_router, register_store_error_handler

__all__ = ["orders_router", "production_router", "register_store_error_handler"]
