"""API route modules."""
from .entries import router as entries_router
from .statistics import router as statistics_router
from .suggestions import router as suggestions_router
from .maintenance import router as maintenance_router

__all__ = [
    "entries_router",
    "statistics_router",
    "suggestions_router",
    "maintenance_router",
]
