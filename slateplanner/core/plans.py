"""Subscription plan catalog, add-on credit packages and price lookup."""
from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field, ValidationError

from slateplanner.core.logging import get_logger
from slateplanner.core.settings import get_settings

logger = get_logger(__name__)


class CatalogError(ValueError):
    """Raised when a plan catalog breaks its ordering invariants."""


class UnknownPlanError(KeyError):
    """Raised when a plan name is not part of the catalog."""


@dataclass(frozen=True, slots=True)
class PlanTier:
    name: str
    credits: int
    monthly_price: float
    has_ai: bool
    has_voicemail: bool
    has_sms: bool
    has_dialer: bool
    credit_cost: float
    pings_per_day: int
    emails_per_day: int
    enforce_email_cap: bool = False

    def capabilities(self) -> frozenset[str]:
        gates = {
            "ai": self.has_ai,
            "voicemail": self.has_voicemail,
            "sms": self.has_sms,
            "dialer": self.has_dialer,
        }
        return frozenset(gate for gate, enabled in gates.items() if enabled)

    def supports(self, capability: str | None) -> bool:
        return capability is None or capability in self.capabilities()


@dataclass(frozen=True, slots=True)
class AddOnTier:
    credits: int
    cost_per_credit: float

    @property
    def package_price(self) -> float:
        return self.credits * self.cost_per_credit


class PlanCatalog:
    """Ordered subscription tiers plus the add-on credit package table.

    Tiers are sorted by price and allowance, each one a capability superset
    of the one below it. Add-on packages are sorted by credit quantity with a
    strictly decreasing per-credit rate. Both sequences are immutable.
    """

    def __init__(self, plan_tiers: Iterable[PlanTier], add_ons: Iterable[AddOnTier]) -> None:
        self._tiers = tuple(plan_tiers)
        self._add_ons = tuple(add_ons)
        self._validate()

    def _validate(self) -> None:
        if not self._tiers:
            raise CatalogError("Catalog needs at least one plan tier")
        if not self._add_ons:
            raise CatalogError("Catalog needs at least one add-on package")

        names = [tier.name.lower() for tier in self._tiers]
        if len(set(names)) != len(names):
            raise CatalogError("Plan tier names must be unique")

        for lower, upper in zip(self._tiers, self._tiers[1:]):
            if upper.monthly_price <= lower.monthly_price or upper.credits <= lower.credits:
                raise CatalogError(
                    f"Tier {upper.name!r} must cost more and grant more credits than {lower.name!r}"
                )
            if not lower.capabilities() <= upper.capabilities():
                raise CatalogError(f"Tier {upper.name!r} must include every capability of {lower.name!r}")

        for smaller, larger in zip(self._add_ons, self._add_ons[1:]):
            if larger.credits <= smaller.credits:
                raise CatalogError("Add-on packages must be ordered by ascending credit quantity")
            if larger.cost_per_credit >= smaller.cost_per_credit:
                raise CatalogError(
                    f"Add-on rate must drop as quantity grows ({larger.credits} credits)"
                )

    # ------------------------------------------------------------------
    def tiers(self) -> tuple[PlanTier, ...]:
        return self._tiers

    def add_on_tiers(self) -> tuple[AddOnTier, ...]:
        return self._add_ons

    @property
    def entry(self) -> PlanTier:
        return self._tiers[0]

    @property
    def top(self) -> PlanTier:
        return self._tiers[-1]

    def tier(self, name: str) -> PlanTier:
        key = name.lower()
        for tier in self._tiers:
            if tier.name.lower() == key:
                return tier
        raise UnknownPlanError(name)

    def next_tier(self, tier: PlanTier) -> PlanTier | None:
        index = self._tiers.index(tier)
        if index + 1 < len(self._tiers):
            return self._tiers[index + 1]
        return None

    def price_for(self, shortfall: float) -> float:
        """Return the monthly cost of covering ``shortfall`` credits with add-ons.

        The buyer pays for the smallest whole package that covers the
        shortfall. Beyond the largest package the largest package's rate is
        applied to the exact shortfall.
        """
        if shortfall <= 0:
            return 0.0
        for package in self._add_ons:
            if package.credits >= shortfall:
                return package.package_price
        return shortfall * self._add_ons[-1].cost_per_credit


DEFAULT_TIERS: tuple[PlanTier, ...] = (
    PlanTier(
        name="Prospect",
        credits=250,
        monthly_price=200,
        has_ai=False,
        has_voicemail=False,
        has_sms=False,
        has_dialer=False,
        credit_cost=0.1812,
        pings_per_day=50,
        emails_per_day=50,
        enforce_email_cap=True,
    ),
    PlanTier(
        name="Rookie",
        credits=500,
        monthly_price=295,
        has_ai=True,
        has_voicemail=False,
        has_sms=False,
        has_dialer=False,
        credit_cost=0.1531,
        pings_per_day=100,
        emails_per_day=1000,
    ),
    PlanTier(
        name="Legend",
        credits=1000,
        monthly_price=395,
        has_ai=True,
        has_voicemail=True,
        has_sms=True,
        has_dialer=True,
        credit_cost=0.1234,
        pings_per_day=200,
        emails_per_day=1000,
    ),
)

DEFAULT_ADD_ONS: tuple[AddOnTier, ...] = (
    AddOnTier(credits=250, cost_per_credit=0.1812),
    AddOnTier(credits=500, cost_per_credit=0.1531),
    AddOnTier(credits=1000, cost_per_credit=0.1234),
    AddOnTier(credits=2000, cost_per_credit=0.1164),
    AddOnTier(credits=5000, cost_per_credit=0.0934),
    AddOnTier(credits=10000, cost_per_credit=0.0780),
)

DEFAULT_CATALOG = PlanCatalog(DEFAULT_TIERS, DEFAULT_ADD_ONS)


def tiers() -> tuple[PlanTier, ...]:
    return DEFAULT_CATALOG.tiers()


def add_on_tiers() -> tuple[AddOnTier, ...]:
    return DEFAULT_CATALOG.add_on_tiers()


def price_for(shortfall: float) -> float:
    return DEFAULT_CATALOG.price_for(shortfall)


# ----------------------------------------------------------------------
# Externalised catalog files


class _TierDocument(BaseModel):
    name: str
    credits: int = Field(gt=0)
    monthly_price: float = Field(gt=0)
    has_ai: bool = False
    has_voicemail: bool = False
    has_sms: bool = False
    has_dialer: bool = False
    credit_cost: float = Field(gt=0)
    pings_per_day: int = Field(ge=0)
    emails_per_day: int = Field(ge=0)
    enforce_email_cap: bool = False


class _AddOnDocument(BaseModel):
    credits: int = Field(gt=0)
    cost_per_credit: float = Field(gt=0)


class CatalogDocument(BaseModel):
    tiers: list[_TierDocument]
    add_ons: list[_AddOnDocument]

    def to_catalog(self) -> PlanCatalog:
        return PlanCatalog(
            [PlanTier(**tier.model_dump()) for tier in self.tiers],
            [AddOnTier(**package.model_dump()) for package in self.add_ons],
        )


def load_catalog(path: str | Path) -> PlanCatalog:
    """Load and validate a catalog JSON file."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Unable to read catalog file {path}") from exc
    try:
        document = CatalogDocument.model_validate(payload)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog file {path}: {exc.error_count()} error(s)") from exc
    return document.to_catalog()


@lru_cache()
def get_catalog() -> PlanCatalog:
    """Return the process-wide catalog, loaded once from settings."""
    settings = get_settings()
    if settings.catalog_path is None:
        logger.info("catalog_loaded", source="default", tiers=len(DEFAULT_TIERS))
        return DEFAULT_CATALOG
    catalog = load_catalog(settings.catalog_path)
    logger.info("catalog_loaded", source=str(settings.catalog_path), tiers=len(catalog.tiers()))
    return catalog


__all__ = [
    "AddOnTier",
    "CatalogDocument",
    "CatalogError",
    "DEFAULT_CATALOG",
    "PlanCatalog",
    "PlanTier",
    "UnknownPlanError",
    "add_on_tiers",
    "get_catalog",
    "load_catalog",
    "price_for",
    "tiers",
]
