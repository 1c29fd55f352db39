"""Monthly credit estimation for a feature and volume configuration."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

FREE_AI_REPLY_CREDITS = 250
CREDITS_PER_MAGIC_CAMPAIGN = 25
AI_REPLY_RATE = 0.25
COMMENT_ENGAGEMENT_RATE = 0.485
EMAIL_REPLY_RATE = 0.05
PING_REPLY_RATE = 0.05
LINKEDIN_REPLY_RATE = 0.15
SMS_REPLY_RATE = 0.03
EMAILS_PER_SEQUENCE = 4
EMAILS_PER_DOMAIN = 69

FEATURE_FLAGS = (
    "ai_magic_campaigns",
    "auto_contact_data_enrichment",
    "dialer",
    "ai_icebreakers",
    "ai_labels",
    "ai_replies",
    "ai_comments",
    "ai_inbox",
    "voicemail",
    "sms",
)


def _clamp(value: float, lower: float, upper: float | None = None) -> float:
    value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value


@dataclass(frozen=True, slots=True)
class FeatureConfiguration:
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

    @classmethod
    def clamped(cls, **values: Any) -> "FeatureConfiguration":
        """Build a configuration with every numeric field pulled into range.

        Volumes floor at zero, the acceptance rate is bounded to [0, 1] and
        working days to [1, 30]. Unset fields keep their defaults.
        """
        config = cls(**values)
        return cls(
            **{flag: getattr(config, flag) for flag in FEATURE_FLAGS},
            new_positions_per_month=int(_clamp(config.new_positions_per_month, 0)),
            sms_messages_per_day=_clamp(config.sms_messages_per_day, 0),
            pings_per_day=_clamp(config.pings_per_day, 0),
            emails_per_day=_clamp(config.emails_per_day, 0),
            linkedin_requests_per_day=_clamp(config.linkedin_requests_per_day, 0),
            connection_acceptance_rate=_clamp(config.connection_acceptance_rate, 0, 1),
            working_days=int(_clamp(config.working_days, 1, 30)),
        )

    def enabled_features(self) -> tuple[str, ...]:
        return tuple(flag for flag in FEATURE_FLAGS if getattr(self, flag))


@dataclass(frozen=True, slots=True)
class CreditEstimate:
    # daily metrics
    linkedin_connections: float
    ai_replied_connections: float
    email_replies_daily: float
    ping_replies_daily: float
    linkedin_replies_daily: float
    sms_replies_daily: float
    domains_daily: int
    # monthly credits per feature
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
    # unrounded totals
    first_month_total: float
    ongoing_total: float

    @property
    def total_replies_daily(self) -> float:
        return (
            self.email_replies_daily
            + self.ping_replies_daily
            + self.linkedin_replies_daily
            + self.sms_replies_daily
        )

    def per_feature(self) -> dict[str, float]:
        """Billable monthly credits keyed by feature."""
        return {
            "ai_magic_campaigns": self.magic_campaigns,
            "ai_icebreakers": self.icebreakers,
            "ai_labels": self.labels,
            "ai_inbox": self.inbox,
            "ai_comments": self.comments,
            "ai_replies": self.paid_replies,
            "voicemail": self.voicemail,
            "sms": self.sms,
            "auto_contact_data_enrichment": self.enrichment,
        }


def estimate(config: FeatureConfiguration) -> CreditEstimate:
    """Convert a configuration into per-feature monthly credits and totals."""
    days = config.working_days

    linkedin_connections = config.linkedin_requests_per_day * config.connection_acceptance_rate
    ai_replied_connections = linkedin_connections * AI_REPLY_RATE

    email_replies_daily = config.emails_per_day * EMAIL_REPLY_RATE
    ping_replies_daily = config.pings_per_day * PING_REPLY_RATE
    linkedin_replies_daily = linkedin_connections * LINKEDIN_REPLY_RATE
    sms_replies_daily = config.sms_messages_per_day * SMS_REPLY_RATE
    total_replies_daily = email_replies_daily + ping_replies_daily + linkedin_replies_daily + sms_replies_daily

    magic_campaigns = config.new_positions_per_month * CREDITS_PER_MAGIC_CAMPAIGN if config.ai_magic_campaigns else 0
    icebreakers = linkedin_connections * days if config.ai_icebreakers else 0
    labels = total_replies_daily * days if config.ai_labels else 0
    inbox = email_replies_daily * days if config.ai_inbox else 0
    comments = linkedin_connections * COMMENT_ENGAGEMENT_RATE * days if config.ai_comments else 0
    replies = ai_replied_connections * days if config.ai_replies else 0
    paid_replies = max(0, replies - FREE_AI_REPLY_CREDITS)
    voicemail = linkedin_connections * days if config.voicemail else 0
    sms = config.sms_messages_per_day * days if config.sms else 0
    # only the first email of a sequence is enriched
    enrichment = (
        math.ceil((config.emails_per_day / EMAILS_PER_SEQUENCE) * days)
        if config.auto_contact_data_enrichment
        else 0
    )
    domain_setup = 0

    ongoing_total = (
        magic_campaigns
        + icebreakers
        + labels
        + comments
        + inbox
        + paid_replies
        + voicemail
        + sms
        + enrichment
    )

    return CreditEstimate(
        linkedin_connections=linkedin_connections,
        ai_replied_connections=ai_replied_connections,
        email_replies_daily=email_replies_daily,
        ping_replies_daily=ping_replies_daily,
        linkedin_replies_daily=linkedin_replies_daily,
        sms_replies_daily=sms_replies_daily,
        domains_daily=math.ceil(config.emails_per_day / EMAILS_PER_DOMAIN),
        magic_campaigns=magic_campaigns,
        icebreakers=icebreakers,
        labels=labels,
        inbox=inbox,
        comments=comments,
        replies=replies,
        paid_replies=paid_replies,
        voicemail=voicemail,
        sms=sms,
        enrichment=enrichment,
        domain_setup=domain_setup,
        first_month_total=domain_setup + ongoing_total,
        ongoing_total=ongoing_total,
    )


__all__ = ["CreditEstimate", "FEATURE_FLAGS", "FREE_AI_REPLY_CREDITS", "FeatureConfiguration", "estimate"]
