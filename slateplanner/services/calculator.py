"""Single entry point tying the estimator and the recommender together."""
from __future__ import annotations

import math
from dataclasses import dataclass

from slateplanner.core.plans import DEFAULT_CATALOG, PlanCatalog
from slateplanner.services.estimator import CreditEstimate, FeatureConfiguration, estimate
from slateplanner.services.recommender import Recommendation, recommend


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class CalculationResult:
    config: FeatureConfiguration
    estimate: CreditEstimate
    recommendation: Recommendation

    @property
    def first_month_total(self) -> int:
        return round_half_up(self.estimate.first_month_total)

    @property
    def ongoing_total(self) -> int:
        return round_half_up(self.estimate.ongoing_total)

    @property
    def add_on_credits(self) -> int:
        return math.ceil(self.recommendation.add_on_credits_needed)

    @property
    def add_on_cost(self) -> float:
        return round(self.recommendation.add_on_cost_monthly, 2)


def calculate(config: FeatureConfiguration, catalog: PlanCatalog | None = None) -> CalculationResult:
    """Estimate credits for ``config`` and recommend a plan from ``catalog``."""
    catalog = catalog or DEFAULT_CATALOG
    credits = estimate(config)
    return CalculationResult(
        config=config,
        estimate=credits,
        recommendation=recommend(credits, config, catalog),
    )


__all__ = ["CalculationResult", "calculate", "round_half_up"]
