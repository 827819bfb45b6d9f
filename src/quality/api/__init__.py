"""Quality domain API package."""

from quality.api.handlers import register_error_handlers
from quality.api.routes import assessment_router, product_router, seller_router

__all__ = ["assessment_router", "product_router", "seller_router", "register_error_handlers"]
