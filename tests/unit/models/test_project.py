"""Unit tests for project models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from expense_tracker.models.project import (
    ProfitShare,
    ProfitSharingType,
    ProjectCreate,
    ProjectUpdate,
)


class TestProjectCreate:
    """Test project creation payloads."""

    def test_defaults(self):
        """Test only the name is required."""
        project = ProjectCreate(name="Kitchen remodel")
        assert project.gross_income == Decimal("0")
        assert project.profit_sharing_enabled is False
        assert project.profit_sharing_type == ProfitSharingType.NONE
        assert project.profit_shares == []

    def test_client_payload(self):
        """Test a payload as sent by the web client."""
        project = ProjectCreate.model_validate(
            {
                "name": " Deck ",
                "grossIncome": "15000",
                "profitSharingEnabled": True,
                "profitSharingType": "two-way",
                "profitShares": [
                    {"name": "Ana", "percentage": 60},
                    {"name": "Ben", "percentage": 40},
                ],
            }
        )
        assert project.name == "Deck"
        assert project.gross_income == Decimal("15000")
        assert project.profit_sharing_type == ProfitSharingType.TWO_WAY
        assert [s.name for s in project.profit_shares] == ["Ana", "Ben"]

    @pytest.mark.parametrize("income", [None, ""])
    def test_missing_income_is_zero(self, income):
        """Test null or empty income defaults to zero."""
        assert ProjectCreate(name="Deck", gross_income=income).gross_income == 0

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="   ")

    def test_negative_income_rejected(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Deck", gross_income=-1)

    def test_unknown_sharing_type_rejected(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Deck", profit_sharing_type="four-way")


class TestProfitShare:
    """Test profit share entries."""

    @pytest.mark.parametrize("percentage", [-1, 101])
    def test_percentage_bounds(self, percentage):
        with pytest.raises(ValidationError):
            ProfitShare(name="Ana", percentage=percentage)

    def test_name_stripped(self):
        assert ProfitShare(name=" Ana ", percentage=50).name == "Ana"


class TestProjectUpdate:
    """Test partial project updates."""

    def test_only_sent_fields_are_set(self):
        update = ProjectUpdate.model_validate({"grossIncome": 500})
        assert update.model_dump(exclude_unset=True) == {"gross_income": Decimal("500")}

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ProjectUpdate(name="")
