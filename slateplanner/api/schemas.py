"""Pydantic schemas for API requests and responses."""
from __future__ import annotations

from pydantic import BaseModel, Field

from slateplanner.core.features import FeatureInfo
from slateplanner.core.plans import AddOnTier, PlanTier
from slateplanner.services.calculator import CalculationResult
from slateplanner.services.estimator import FeatureConfiguration


class EstimateRequest(BaseModel):
    """Feature flags and volumes.

    Out-of-range numbers are accepted here and clamped by
    ``FeatureConfiguration.clamped`` when the configuration is built.
    """

    ai_magic_campaigns: bool = False
    auto_contact_data_enrichment: bool = False
    dialer: bool = False
    ai_icebreakers: bool = False
    ai_labels: bool = False
    ai_replies: bool = False
    ai_comments: bool = False
    ai_inbox: bool = False
    voicemail: bool = False
    sms: bool = False
    new_positions_per_month: int = 0
    sms_messages_per_day: float = 0
    pings_per_day: float = 50
    emails_per_day: float = 25
    linkedin_requests_per_day: float = 25
    connection_acceptance_rate: float = 0.30
    working_days: int = 22

    def to_configuration(self) -> FeatureConfiguration:
        return FeatureConfiguration.clamped(**self.model_dump())


class FeatureCredits(BaseModel):
    magic_campaigns: float
    icebreakers: float
    labels: float
    inbox: float
    comments: float
    replies: float
    paid_replies: float
    voicemail: float
    sms: float
    enrichment: float
    domain_setup: float


class DailyMetrics(BaseModel):
    linkedin_connections: float
    ai_replied_connections: float
    email_replies: float
    total_replies: float
    domains: int


class PlanSuitabilityResponse(BaseModel):
    can_handle: bool
    first_month_ok: bool
    credit_shortfall: float
    emails_exceeded: bool


class AddOnResponse(BaseModel):
    needed: bool
    credits: int
    monthly_cost: float


class Diagnostics(BaseModel):
    economical_ai_replies_per_day: int
    economical_ai_reply_credits: int
    domains_daily: int


class EstimateResponse(BaseModel):
    recommended_plan: str
    required_plan: str
    plan_price: float
    plan_credits: int
    first_month_total: int
    ongoing_total: int
    email_limit_exceeded: bool
    add_on: AddOnResponse
    credits: FeatureCredits
    daily: DailyMetrics
    suitability: dict[str, PlanSuitabilityResponse]
    diagnostics: Diagnostics

    @classmethod
    def from_result(cls, result: CalculationResult) -> "EstimateResponse":
        credits = result.estimate
        recommendation = result.recommendation
        return cls(
            recommended_plan=recommendation.plan.name,
            required_plan=recommendation.required_floor.name,
            plan_price=recommendation.plan.monthly_price,
            plan_credits=recommendation.plan.credits,
            first_month_total=result.first_month_total,
            ongoing_total=result.ongoing_total,
            email_limit_exceeded=recommendation.email_limit_exceeded,
            add_on=AddOnResponse(
                needed=recommendation.needs_add_on,
                credits=result.add_on_credits,
                monthly_cost=result.add_on_cost,
            ),
            credits=FeatureCredits(
                magic_campaigns=credits.magic_campaigns,
                icebreakers=credits.icebreakers,
                labels=credits.labels,
                inbox=credits.inbox,
                comments=credits.comments,
                replies=credits.replies,
                paid_replies=credits.paid_replies,
                voicemail=credits.voicemail,
                sms=credits.sms,
                enrichment=credits.enrichment,
                domain_setup=credits.domain_setup,
            ),
            daily=DailyMetrics(
                linkedin_connections=credits.linkedin_connections,
                ai_replied_connections=credits.ai_replied_connections,
                email_replies=credits.email_replies_daily,
                total_replies=credits.total_replies_daily,
                domains=credits.domains_daily,
            ),
            suitability={
                name: PlanSuitabilityResponse(
                    can_handle=item.can_handle,
                    first_month_ok=item.first_month_ok,
                    credit_shortfall=item.credit_shortfall,
                    emails_exceeded=item.emails_exceeded,
                )
                for name, item in recommendation.suitability.items()
            },
            diagnostics=Diagnostics(
                economical_ai_replies_per_day=recommendation.economical_ai_replies_per_day,
                economical_ai_reply_credits=recommendation.economical_ai_reply_credits,
                domains_daily=credits.domains_daily,
            ),
        )


class PlanResponse(BaseModel):
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

    @classmethod
    def from_tier(cls, tier: PlanTier) -> "PlanResponse":
        return cls(
            name=tier.name,
            credits=tier.credits,
            monthly_price=tier.monthly_price,
            has_ai=tier.has_ai,
            has_voicemail=tier.has_voicemail,
            has_sms=tier.has_sms,
            has_dialer=tier.has_dialer,
            credit_cost=tier.credit_cost,
            pings_per_day=tier.pings_per_day,
            emails_per_day=tier.emails_per_day,
        )


class AddOnPackageResponse(BaseModel):
    credits: int
    cost_per_credit: float
    package_price: float

    @classmethod
    def from_tier(cls, package: AddOnTier) -> "AddOnPackageResponse":
        return cls(
            credits=package.credits,
            cost_per_credit=package.cost_per_credit,
            package_price=round(package.package_price, 2),
        )


class CatalogResponse(BaseModel):
    plans: list[PlanResponse]
    add_ons: list[AddOnPackageResponse] = Field(default_factory=list)


class FeatureResponse(BaseModel):
    key: str
    label: str
    description: str
    available_on: str
    assumptions: str
    capability: str | None = None

    @classmethod
    def from_info(cls, info: FeatureInfo) -> "FeatureResponse":
        return cls(
            key=info.key,
            label=info.label,
            description=info.description,
            available_on=info.available_on,
            assumptions=info.assumptions,
            capability=info.capability,
        )
