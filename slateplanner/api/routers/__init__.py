"""Expose API routers."""
from . import estimate, plans

__all__ = ["estimate", "plans"]
