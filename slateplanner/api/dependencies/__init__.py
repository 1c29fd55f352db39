"""FastAPI dependency helpers."""
from .catalog import get_plan_catalog

__all__ = ["get_plan_catalog"]
