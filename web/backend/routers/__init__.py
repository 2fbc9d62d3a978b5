"""API route handlers."""

from .matches import router as matches_router
from .pipeline import router as pipeline_router
