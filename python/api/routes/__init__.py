"""
API Routes Package

Contains all route modules for the parser API.
"""

from .messages import router as messages_router
from .merchants import router as merchants_router

__all__ = [
    "messages_router",
    "merchants_router",
]
