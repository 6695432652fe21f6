"""
Routers package for Reports module
"""

from .financial import router as financial_router
from .performance import router as performance_router

__all__ = [
    "financial_router",
    "performance_router",
]
