"""
Unit tests for the estimate service.
"""

from decimal import Decimal

import pytest

from expense_tracker.errors import ConflictError, NotFoundError
from expense_tracker.models.estimate import (
    EstimateCreate,
    EstimateItem,
    EstimateStatus,
    EstimateUpdate,
)
from expense_tracker.services import EstimateService
from expense_tracker.services.estimate_service import escape_like


@pytest.fixture
def estimate_service(db_session, test_config):
    return EstimateService(db_session, test_config)


def new_estimate(**overrides) -> EstimateCreate:
    values = dict(
        customer_name="Jane Customer",
        project_title="Kitchen remodel",
        items=[
            EstimateItem(
                description="Cabinets",
                amount=Decimal("2"),
                unit_price=Decimal("500"),
                total=Decimal("9999"),
            ),
            EstimateItem(description="Labor", amount=None, unit_price=Decimal("250")),
        ],
    )
    values.update(overrides)
    return EstimateCreate(**values)


class TestEscapeLike:
    def test_wildcards(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestEstimateCreate:
    """Test numbering and totals on create."""

    def test_totals_recomputed(self, estimate_service, user):
        estimate = estimate_service.create(user.id, new_estimate())

        assert [item.total for item in estimate.items] == [
            Decimal("1000.00"),
            Decimal("250.00"),
        ]
        assert estimate.items[1].amount == Decimal("1")
        assert estimate.subtotal == Decimal("1250.00")
        assert estimate.tax_rate == Decimal("16")
        assert estimate.tax_amount == Decimal("200.00")
        assert estimate.total == Decimal("1450.00")
        assert estimate.status == EstimateStatus.DRAFT

    def test_zero_tax_rate(self, estimate_service, user):
        estimate = estimate_service.create(user.id, new_estimate(tax_rate=Decimal("0")))

        assert estimate.tax_amount == Decimal("0.00")
        assert estimate.total == Decimal("1250.00")

    def test_sequential_numbers(self, estimate_service, user):
        first = estimate_service.create(user.id, new_estimate())
        second = estimate_service.create(user.id, new_estimate())

        assert first.estimate_number == "EST-0001"
        assert second.estimate_number == "EST-0002"

    def test_numbers_not_reused_after_delete(self, estimate_service, user):
        estimate_service.create(user.id, new_estimate())
        second = estimate_service.create(user.id, new_estimate())
        third = estimate_service.create(user.id, new_estimate())
        estimate_service.delete(user.id, second.id)

        fourth = estimate_service.create(user.id, new_estimate())
        assert third.estimate_number == "EST-0003"
        assert fourth.estimate_number == "EST-0004"

    def test_numbers_per_user(self, estimate_service, user, other_user):
        estimate_service.create(user.id, new_estimate())
        theirs = estimate_service.create(other_user.id, new_estimate())

        assert theirs.estimate_number == "EST-0001"

    def test_custom_number_then_sequence(self, estimate_service, user):
        estimate_service.create(user.id, new_estimate(estimate_number="EST-0010"))
        estimate_service.create(user.id, new_estimate(estimate_number="Q-ABC"))

        following = estimate_service.create(user.id, new_estimate())
        assert following.estimate_number == "EST-0011"

    def test_duplicate_number(self, estimate_service, user):
        estimate_service.create(user.id, new_estimate(estimate_number="EST-0005"))
        with pytest.raises(ConflictError, match="EST-0005"):
            estimate_service.create(user.id, new_estimate(estimate_number="EST-0005"))


class TestEstimateUpdate:
    """Test partial updates and recalculation."""

    def test_update_items_recalculates(self, estimate_service, user):
        estimate = estimate_service.create(user.id, new_estimate())

        updated = estimate_service.update(
            user.id,
            estimate.id,
            EstimateUpdate(
                items=[
                    EstimateItem(
                        description="Paint", amount=Decimal("4"), unit_price=Decimal("25")
                    )
                ]
            ),
        )

        assert updated.subtotal == Decimal("100.00")
        assert updated.total == Decimal("116.00")

    def test_update_tax_rate_keeps_items(self, estimate_service, user):
        estimate = estimate_service.create(user.id, new_estimate())

        updated = estimate_service.update(
            user.id, estimate.id, EstimateUpdate(tax_rate=Decimal("10"))
        )

        assert len(updated.items) == 2
        assert updated.tax_amount == Decimal("125.00")
        assert updated.total == Decimal("1375.00")

    def test_null_tax_rate_resets_default(self, estimate_service, user):
        estimate = estimate_service.create(user.id, new_estimate(tax_rate=Decimal("0")))

        updated = estimate_service.update(
            user.id, estimate.id, EstimateUpdate(tax_rate=None)
        )

        assert updated.tax_rate == Decimal("16")
        assert updated.total == Decimal("1450.00")

    def test_status_only(self, estimate_service, user):
        estimate = estimate_service.create(user.id, new_estimate(tax_rate=Decimal("0")))

        updated = estimate_service.update(
            user.id,
            estimate.id,
            EstimateUpdate(status=EstimateStatus.SENT, customer_name=None),
        )

        assert updated.status == EstimateStatus.SENT
        assert updated.customer_name == "Jane Customer"
        assert updated.tax_rate == Decimal("0")
        assert updated.total == Decimal("1250.00")

    def test_other_user(self, estimate_service, user, other_user):
        estimate = estimate_service.create(user.id, new_estimate())
        with pytest.raises(NotFoundError, match="Estimate not found"):
            estimate_service.update(
                other_user.id, estimate.id, EstimateUpdate(status=EstimateStatus.SENT)
            )


class TestEstimateQueries:
    """Test listing, search, summary and PDF rendering."""

    @pytest.fixture
    def estimates(self, estimate_service, user):
        return [
            estimate_service.create(user.id, new_estimate()),
            estimate_service.create(
                user.id,
                new_estimate(
                    customer_name="Bob Builder",
                    project_title="100% tile job",
                    status=EstimateStatus.APPROVED,
                    approved_amount=Decimal("900"),
                ),
            ),
            estimate_service.create(
                user.id,
                new_estimate(
                    customer_name="Carla",
                    project_title="Roof",
                    status=EstimateStatus.APPROVED,
                    tax_rate=Decimal("0"),
                ),
            ),
        ]

    def test_filter_by_status(self, estimate_service, user, estimates):
        approved = estimate_service.list(user.id, status=EstimateStatus.APPROVED)
        assert {e.customer_name for e in approved} == {"Bob Builder", "Carla"}

    def test_search_is_case_insensitive(self, estimate_service, user, estimates):
        found = estimate_service.list(user.id, search="kitchen")
        assert [e.customer_name for e in found] == ["Jane Customer"]

    def test_search_by_number(self, estimate_service, user, estimates):
        found = estimate_service.list(user.id, search="est-0002")
        assert [e.customer_name for e in found] == ["Bob Builder"]

    def test_search_wildcards_are_literal(self, estimate_service, user, estimates):
        assert len(estimate_service.list(user.id, search="100%")) == 1
        assert estimate_service.list(user.id, search="%") == estimate_service.list(
            user.id, search="100%"
        )

    def test_get_by_number(self, estimate_service, user, estimates):
        assert estimate_service.get_by_number(user.id, "EST-0003").customer_name == "Carla"
        with pytest.raises(NotFoundError):
            estimate_service.get_by_number(user.id, "EST-0099")

    def test_summary(self, estimate_service, user, estimates):
        summary = estimate_service.summary(user.id)

        assert summary.total == 3
        assert summary.drafts == 1
        assert summary.approved == 2
        assert summary.sent == 0
        assert summary.approved_amount == Decimal("2150.00")

    def test_render_pdf(self, estimate_service, user, estimates):
        content, filename = estimate_service.render_pdf(user.id, estimates[0].id)

        assert content.startswith(b"%PDF-")
        assert filename.startswith("Estimate-EST-0001-")
        assert filename.endswith(".pdf")
