from __future__ import annotations

import itertools

import pytest

from slateplanner.services.estimator import FEATURE_FLAGS, FeatureConfiguration, estimate


def _everything_on(**overrides) -> FeatureConfiguration:
    values = {flag: True for flag in FEATURE_FLAGS}
    values.update(overrides)
    return FeatureConfiguration(**values)


def test_defaults_with_no_features_cost_nothing() -> None:
    result = estimate(FeatureConfiguration())
    assert result.ongoing_total == 0
    assert result.first_month_total == 0
    assert result.linkedin_connections == pytest.approx(7.5)
    assert result.domains_daily == 1


def test_disabled_features_contribute_zero_regardless_of_volume() -> None:
    config = FeatureConfiguration(
        new_positions_per_month=50,
        sms_messages_per_day=500,
        pings_per_day=200,
        emails_per_day=1000,
        linkedin_requests_per_day=50,
        connection_acceptance_rate=1.0,
    )
    result = estimate(config)
    assert all(value == 0 for value in result.per_feature().values())
    assert result.replies == 0
    assert result.ongoing_total == 0


def test_per_feature_formulas_with_default_volumes() -> None:
    result = estimate(_everything_on())

    assert result.magic_campaigns == 0
    assert result.icebreakers == pytest.approx(7.5 * 22)
    assert result.labels == pytest.approx((1.25 + 2.5 + 1.125 + 0) * 22)
    assert result.inbox == pytest.approx(27.5)
    assert result.comments == pytest.approx(7.5 * 0.485 * 22)
    assert result.replies == pytest.approx(7.5 * 0.25 * 22)
    assert result.paid_replies == 0
    assert result.voicemail == pytest.approx(165)
    assert result.sms == 0
    assert result.enrichment == 138
    assert result.domain_setup == 0


def test_magic_campaigns_bill_per_position() -> None:
    result = estimate(FeatureConfiguration(ai_magic_campaigns=True, new_positions_per_month=12))
    assert result.magic_campaigns == 300
    assert result.ongoing_total == 300


def test_labels_sum_every_channel() -> None:
    config = FeatureConfiguration(
        ai_labels=True,
        emails_per_day=100,
        pings_per_day=100,
        linkedin_requests_per_day=40,
        connection_acceptance_rate=0.5,
        sms_messages_per_day=100,
        working_days=20,
    )
    result = estimate(config)
    assert result.total_replies_daily == pytest.approx(5 + 5 + 3 + 3)
    assert result.labels == pytest.approx(16 * 20)


def test_ai_replies_first_250_credits_are_free() -> None:
    under = estimate(FeatureConfiguration(ai_replies=True, linkedin_requests_per_day=40, connection_acceptance_rate=1.0))
    assert under.replies == pytest.approx(220)
    assert under.paid_replies == 0
    assert under.ongoing_total == 0

    over = estimate(FeatureConfiguration(ai_replies=True, linkedin_requests_per_day=50, connection_acceptance_rate=1.0))
    assert over.replies == pytest.approx(275)
    assert over.paid_replies == pytest.approx(25)
    assert over.ongoing_total == pytest.approx(25)


def test_enrichment_rounds_up_to_whole_credits() -> None:
    result = estimate(FeatureConfiguration(auto_contact_data_enrichment=True, emails_per_day=25, working_days=22))
    assert result.enrichment == 138


@pytest.mark.parametrize("emails, domains", [(0, 0), (1, 1), (69, 1), (70, 2), (1000, 15)])
def test_sending_domains_per_day(emails: int, domains: int) -> None:
    assert estimate(FeatureConfiguration(emails_per_day=emails)).domains_daily == domains


def test_first_month_total_matches_ongoing_total() -> None:
    result = estimate(_everything_on(new_positions_per_month=3, sms_messages_per_day=40))
    assert result.first_month_total == result.ongoing_total


def test_estimate_is_deterministic() -> None:
    config = _everything_on(new_positions_per_month=7, sms_messages_per_day=120, emails_per_day=333)
    assert estimate(config) == estimate(config)


@pytest.mark.parametrize(
    "emails, linkedin, rate, sms, days",
    list(itertools.product([0, 25, 1000], [0, 50], [0.0, 0.3, 1.0], [0, 500], [1, 22, 30])),
)
def test_credits_never_negative(emails: int, linkedin: int, rate: float, sms: int, days: int) -> None:
    result = estimate(
        _everything_on(
            emails_per_day=emails,
            linkedin_requests_per_day=linkedin,
            connection_acceptance_rate=rate,
            sms_messages_per_day=sms,
            working_days=days,
        )
    )
    assert all(value >= 0 for value in result.per_feature().values())
    assert result.first_month_total >= 0
    assert result.ongoing_total >= 0


@pytest.mark.parametrize("flag", ["auto_contact_data_enrichment", "ai_labels", "ai_inbox"])
def test_more_emails_never_lowers_the_total(flag: str) -> None:
    totals = [
        estimate(FeatureConfiguration(**{flag: True}, emails_per_day=emails)).ongoing_total
        for emails in range(0, 1001, 25)
    ]
    assert totals == sorted(totals)


def test_clamped_pulls_numbers_into_range() -> None:
    config = FeatureConfiguration.clamped(
        sms=True,
        new_positions_per_month=-3,
        sms_messages_per_day=-1,
        pings_per_day=-5,
        emails_per_day=-25,
        linkedin_requests_per_day=-10,
        connection_acceptance_rate=1.7,
        working_days=45,
    )
    assert config.sms is True
    assert config.new_positions_per_month == 0
    assert config.sms_messages_per_day == 0
    assert config.pings_per_day == 0
    assert config.emails_per_day == 0
    assert config.linkedin_requests_per_day == 0
    assert config.connection_acceptance_rate == 1
    assert config.working_days == 30

    assert FeatureConfiguration.clamped(working_days=0, connection_acceptance_rate=-0.2).working_days == 1
    assert FeatureConfiguration.clamped(connection_acceptance_rate=-0.2).connection_acceptance_rate == 0


def test_enabled_features_lists_only_selected_flags() -> None:
    config = FeatureConfiguration(sms=True, ai_labels=True)
    assert set(config.enabled_features()) == {"sms", "ai_labels"}
