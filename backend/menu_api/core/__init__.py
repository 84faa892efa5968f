"""
Application wiring: lifespan, CORS, middlewares and exception handlers.
"""

from .cors import configure_cors
from .errors import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_middlewares

__all__ = [
    "configure_cors",
    "lifespan",
    "register_exception_handlers",
    "register_middlewares",
]
