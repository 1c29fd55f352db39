"""Catalog dependency for request handlers."""
from __future__ import annotations

from slateplanner.core.plans import PlanCatalog, get_catalog


def get_plan_catalog() -> PlanCatalog:
    return get_catalog()
