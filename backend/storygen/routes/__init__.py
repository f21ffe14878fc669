"""
Routes module - contains all API route handlers
"""

from .stories import router as stories_router
from .campaigns import router as campaigns_router

__all__ = [
    "stories_router",
    "campaigns_router",
]
