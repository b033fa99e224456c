"""Tests for score aggregation and labels."""

import itertools

import pytest

from urwarden.exceptions import ConfigError
from urwarden.schemas.result_schemas import Label, Reason, RuleName
from urwarden.services.score_service import ScoreAggregator, aggregate


def reason(rule, weight):
    return Reason(rule=rule, weight=weight, detail="x")


class TestLabelBoundaries:
    """Tests for exact threshold boundaries (defaults 70 / 30)."""

    @pytest.mark.parametrize(
        "score, label",
        [
            (0, "benign"),
            (29, "benign"),
            (30, "suspicious"),
            (69, "suspicious"),
            (70, "malicious"),
            (100, "malicious"),
        ],
    )
    def test_default_thresholds(self, score, label):
        assert ScoreAggregator().label_of(score) == label


class TestAggregate:
    """Tests for summing reason weights."""

    def test_empty_reasons(self):
        """No reasons is a valid, benign outcome."""
        assert aggregate([]) == (0, Label.BENIGN)

    def test_sum_without_cap(self):
        reasons = [
            reason(RuleName.BLOCKLIST_HIT, 70),
            reason(RuleName.SUSPICIOUS_TLD, 20),
            reason(RuleName.PATH_HAS_LOGIN_LIKE, 10),
        ]
        assert aggregate(reasons) == (100, "malicious")

    def test_tld_and_login_is_suspicious(self):
        reasons = [reason(RuleName.SUSPICIOUS_TLD, 20), reason(RuleName.PATH_HAS_LOGIN_LIKE, 10)]
        assert aggregate(reasons) == (30, "suspicious")

    def test_order_independent(self):
        """Permuting reasons never changes score or label."""
        reasons = [
            reason(RuleName.BLOCKLIST_HIT, 70),
            reason(RuleName.SUSPICIOUS_TLD, 20),
            reason(RuleName.PATH_HAS_LOGIN_LIKE, 10),
        ]
        expected = aggregate(reasons)
        for perm in itertools.permutations(reasons):
            assert aggregate(list(perm)) == expected


class TestCustomThresholds:
    """Tests for configurable thresholds."""

    def test_custom_thresholds(self):
        aggregator = ScoreAggregator(malicious_threshold=90, suspicious_threshold=10)
        assert aggregator.label_of(9) == "benign"
        assert aggregator.label_of(10) == "suspicious"
        assert aggregator.label_of(89) == "suspicious"
        assert aggregator.label_of(90) == "malicious"

    def test_equal_thresholds_allowed(self):
        aggregator = ScoreAggregator(malicious_threshold=50, suspicious_threshold=50)
        assert aggregator.label_of(49) == "benign"
        assert aggregator.label_of(50) == "malicious"

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ConfigError):
            ScoreAggregator(malicious_threshold=20, suspicious_threshold=30)

    def test_from_settings(self, settings):
        aggregator = ScoreAggregator.from_settings(settings)
        assert aggregator.malicious_threshold == 70
        assert aggregator.suspicious_threshold == 30
