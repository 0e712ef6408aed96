"""Tests for profit-sharing validation."""

from decimal import Decimal

import pytest

from expense_tracker.models.project import ProfitShare, ProfitSharingType
from expense_tracker.validators.profit_sharing import ProfitSharingValidator


def shares(*pairs):
    return [{"name": name, "percentage": pct} for name, pct in pairs]


class TestProfitSharingValidator:
    """Test profit-sharing rules."""

    def test_disabled_accepts_anything(self):
        report = ProfitSharingValidator.validate(
            False, ProfitSharingType.NONE, shares(("Ana", 10))
        )
        assert report.is_valid()
        assert report.warning_count == 1

    def test_disabled_without_shares_is_clean(self):
        report = ProfitSharingValidator.validate(False, None, [])
        assert report.issues == []

    def test_enabled_requires_type(self):
        report = ProfitSharingValidator.validate(True, ProfitSharingType.NONE, [])
        assert not report.is_valid()
        assert report.get_errors()[0].field == "profitSharingType"

    def test_valid_two_way(self):
        report = ProfitSharingValidator.validate(
            True, ProfitSharingType.TWO_WAY, shares(("Ana", 60), ("Ben", 40))
        )
        assert report.is_valid()

    def test_valid_three_way_with_decimals(self):
        report = ProfitSharingValidator.validate(
            True,
            "three-way",
            shares(("A", "33.33"), ("B", "33.33"), ("C", "33.34")),
        )
        assert report.is_valid()

    def test_models_accepted(self):
        report = ProfitSharingValidator.validate(
            True,
            ProfitSharingType.CUSTOM,
            [ProfitShare(name="Ana", percentage=Decimal("100"))],
        )
        assert report.is_valid()

    def test_sum_must_be_100(self):
        report = ProfitSharingValidator.validate(
            True, ProfitSharingType.TWO_WAY, shares(("Ana", 50), ("Ben", 40))
        )
        messages = [issue.message for issue in report.get_errors()]
        assert messages == ["Profit share percentages must add up to 100%, got 90%"]

    def test_rounding_tolerance(self):
        report = ProfitSharingValidator.validate(
            True,
            ProfitSharingType.THREE_WAY,
            shares(("A", "33.333"), ("B", "33.333"), ("C", "33.333")),
        )
        assert report.is_valid()

    @pytest.mark.parametrize(
        "sharing_type,count",
        [(ProfitSharingType.TWO_WAY, 3), (ProfitSharingType.THREE_WAY, 2)],
    )
    def test_share_count_must_match_type(self, sharing_type, count):
        split = [("P%d" % i, Decimal(100) / count) for i in range(count)]
        report = ProfitSharingValidator.validate(True, sharing_type, shares(*split))
        assert any("needs exactly" in issue.message for issue in report.get_errors())

    def test_custom_needs_a_partner(self):
        report = ProfitSharingValidator.validate(True, ProfitSharingType.CUSTOM, [])
        assert report.get_errors()[0].message == (
            "Custom profit sharing needs at least one partner"
        )

    def test_partner_name_required(self):
        report = ProfitSharingValidator.validate(
            True, ProfitSharingType.TWO_WAY, shares(("Ana", 50), ("  ", 50))
        )
        errors = report.get_errors()
        assert len(errors) == 1
        assert errors[0].context == {"share": 2}

    def test_percentage_out_of_range(self):
        report = ProfitSharingValidator.validate(
            True, ProfitSharingType.TWO_WAY, shares(("Ana", 120), ("Ben", -20))
        )
        range_errors = [
            issue for issue in report.get_errors() if "between 0 and 100" in issue.message
        ]
        assert len(range_errors) == 2

    def test_non_numeric_percentage(self):
        report = ProfitSharingValidator.validate(
            True, ProfitSharingType.CUSTOM, shares(("Ana", "half"))
        )
        assert "must be a number" in report.get_errors()[0].message
