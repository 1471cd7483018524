from stockroom.api.errors import register_exception_handlers
from stockroom.api.routes import item_router, take_router, transaction_router

__all__ = ["item_router", "take_router", "transaction_router", "register_exception_handlers"]
