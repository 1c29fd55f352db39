"""Optional product features, the capability each one needs and how it bills."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Capability = Literal["ai", "voicemail", "sms", "dialer"]


@dataclass(frozen=True, slots=True)
class FeatureInfo:
    key: str
    label: str
    description: str
    available_on: str
    assumptions: str
    capability: Capability | None = None


FEATURES: tuple[FeatureInfo, ...] = (
    FeatureInfo(
        key="auto_contact_data_enrichment",
        label="Auto Contact Data Enrichment",
        description="Automatically enrich email contacts for first email in sequence",
        available_on="All Plans",
        assumptions="1 credit per 4 emails sent (enriches first email in sequence)",
    ),
    FeatureInfo(
        key="ai_magic_campaigns",
        label="AI Magic Campaigns",
        description="Auto-generate campaigns for new job positions",
        available_on="Rookie+",
        assumptions="25 credits per new job position posted",
        capability="ai",
    ),
    FeatureInfo(
        key="ai_icebreakers",
        label="AI Icebreakers",
        description="Personalized opening message on LinkedIn connections",
        available_on="Rookie+",
        assumptions="1 credit per LinkedIn connection made",
        capability="ai",
    ),
    FeatureInfo(
        key="ai_labels",
        label="AI Labels",
        description="Auto-categorize all inbox replies across channels (email, LinkedIn, Pings, SMS)",
        available_on="Rookie+",
        assumptions="1 credit per reply received: Email (5%), Pings (5%), LinkedIn (15%), SMS (3%)",
        capability="ai",
    ),
    FeatureInfo(
        key="ai_replies",
        label="AI Replies",
        description="AI-generated responses to inbox replies",
        available_on="Rookie+",
        assumptions="1 credit per AI-generated reply (first 250 credits free per month)",
        capability="ai",
    ),
    FeatureInfo(
        key="ai_comments",
        label="AI Powered Comments",
        description="Auto-comment on LinkedIn posts from connections",
        available_on="Rookie+",
        assumptions="1 credit per connection (48.5% engagement rate on connections)",
        capability="ai",
    ),
    FeatureInfo(
        key="ai_inbox",
        label="AI Employee Assist in Inbox",
        description="AI assistance for email inbox management",
        available_on="Rookie+",
        assumptions="1 credit per email reply received",
        capability="ai",
    ),
    FeatureInfo(
        key="dialer",
        label="Dialer",
        description="Make outbound calls directly from the platform",
        available_on="Legend+",
        assumptions="Available on Legend plan and higher",
        capability="dialer",
    ),
    FeatureInfo(
        key="voicemail",
        label="Voicemail Drops",
        description="Personalized voicemail left with connections",
        available_on="Legend+",
        assumptions="1 credit per Voicemail Drop sent",
        capability="voicemail",
    ),
    FeatureInfo(
        key="sms",
        label="SMS Messages",
        description="Send SMS text messages to prospects",
        available_on="Legend+",
        assumptions="1 credit per SMS message sent",
        capability="sms",
    ),
)

_FEATURE_REGISTRY: dict[str, FeatureInfo] = {feature.key: feature for feature in FEATURES}


def get_feature(key: str) -> FeatureInfo:
    """Return the feature registered under ``key``."""
    return _FEATURE_REGISTRY[key]


__all__ = ["Capability", "FEATURES", "FeatureInfo", "get_feature"]
