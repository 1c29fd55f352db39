"""Plan suitability and recommendation for an estimated credit load."""
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from slateplanner.core.features import get_feature
from slateplanner.core.plans import DEFAULT_CATALOG, PlanCatalog, PlanTier
from slateplanner.services.estimator import FREE_AI_REPLY_CREDITS, CreditEstimate, FeatureConfiguration

ECONOMICAL_FREE_SHARE = 0.60


@dataclass(frozen=True, slots=True)
class PlanSuitability:
    can_handle: bool
    first_month_ok: bool
    credit_shortfall: float
    emails_exceeded: bool


@dataclass(frozen=True, slots=True)
class Recommendation:
    plan: PlanTier
    required_floor: PlanTier
    email_limit_exceeded: bool
    needs_add_on: bool
    add_on_credits_needed: float
    add_on_cost_monthly: float
    suitability: Mapping[str, PlanSuitability]
    economical_ai_replies_per_day: int
    economical_ai_reply_credits: int


def _emails_exceeded(tier: PlanTier, config: FeatureConfiguration) -> bool:
    return tier.enforce_email_cap and config.emails_per_day > tier.emails_per_day


def assess_tier(tier: PlanTier, estimate: CreditEstimate, config: FeatureConfiguration) -> PlanSuitability:
    emails_exceeded = _emails_exceeded(tier, config)
    return PlanSuitability(
        can_handle=estimate.ongoing_total <= tier.credits and not emails_exceeded,
        first_month_ok=estimate.first_month_total <= tier.credits,
        credit_shortfall=max(0, estimate.ongoing_total - tier.credits),
        emails_exceeded=emails_exceeded,
    )


def capability_floor(config: FeatureConfiguration, catalog: PlanCatalog = DEFAULT_CATALOG) -> tuple[PlanTier, bool]:
    """Return the cheapest tier able to run the selected features.

    The second item tells whether the floor was raised because the daily
    email volume is above a capped tier's limit.
    """
    needed = {get_feature(key).capability for key in config.enabled_features()}
    floor = next(
        (tier for tier in catalog.tiers() if all(tier.supports(gate) for gate in needed)),
        catalog.top,
    )
    email_limit_exceeded = False
    while _emails_exceeded(floor, config):
        upper = catalog.next_tier(floor)
        if upper is None:
            break
        email_limit_exceeded = True
        floor = upper
    return floor, email_limit_exceeded


def choose_between(
    current: PlanTier, upper: PlanTier, ongoing_total: float, catalog: PlanCatalog = DEFAULT_CATALOG
) -> tuple[PlanTier, float]:
    """Pick the cheaper of topping up ``current`` with add-ons or moving to ``upper``.

    Returns the chosen tier and the add-on credits it needs (0 on upgrade).
    """
    shortfall = ongoing_total - current.credits
    add_on_cost = catalog.price_for(shortfall)
    upgrade_cost = upper.monthly_price - current.monthly_price
    if add_on_cost < upgrade_cost:
        return current, shortfall
    return upper, 0


def recommend(
    estimate: CreditEstimate, config: FeatureConfiguration, catalog: PlanCatalog = DEFAULT_CATALOG
) -> Recommendation:
    """Recommend the cheapest tier, with optional add-on credits, for a load."""
    suitability = MappingProxyType(
        {tier.name: assess_tier(tier, estimate, config) for tier in catalog.tiers()}
    )
    floor, email_limit_exceeded = capability_floor(config, catalog)

    plan = floor
    add_on_credits = 0.0
    while not suitability[plan.name].can_handle:
        upper = catalog.next_tier(plan)
        if upper is None:
            break
        chosen, add_on_credits = choose_between(plan, upper, estimate.ongoing_total, catalog)
        if chosen is plan:
            break
        plan = chosen

    needs_add_on = add_on_credits > 0
    if estimate.ongoing_total > plan.credits:
        needs_add_on = True
        add_on_credits = estimate.ongoing_total - plan.credits

    return Recommendation(
        plan=plan,
        required_floor=floor,
        email_limit_exceeded=email_limit_exceeded,
        needs_add_on=needs_add_on,
        add_on_credits_needed=add_on_credits if needs_add_on else 0,
        add_on_cost_monthly=catalog.price_for(add_on_credits) if needs_add_on else 0.0,
        suitability=suitability,
        economical_ai_replies_per_day=math.floor(FREE_AI_REPLY_CREDITS * ECONOMICAL_FREE_SHARE / config.working_days),
        economical_ai_reply_credits=math.floor(FREE_AI_REPLY_CREDITS * ECONOMICAL_FREE_SHARE),
    )


__all__ = [
    "PlanSuitability",
    "Recommendation",
    "assess_tier",
    "capability_floor",
    "choose_between",
    "recommend",
]
