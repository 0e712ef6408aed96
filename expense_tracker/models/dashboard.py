"""Dashboard metric models."""

from decimal import Decimal
from typing import List

from pydantic import Field

from expense_tracker.models.base import ApiModel, Money


class DashboardMetrics(ApiModel):
    """Business-wide totals across all of a user's projects.

    Attributes:
        total_revenue: Sum of project gross income
        payroll_expenses: Sum of payroll expenses
        operating_expenses: Sum of operating expenses
        material_expenses: Sum of material expenses net of returns
        total_expenses: payroll + operating + material
        net_profit: total_revenue - total_expenses
        profit_margin: net_profit / total_revenue x 100 (0 without revenue)
    """

    total_revenue: Money = Decimal("0")
    payroll_expenses: Money = Decimal("0")
    operating_expenses: Money = Decimal("0")
    material_expenses: Money = Decimal("0")
    total_expenses: Money = Decimal("0")
    net_profit: Money = Decimal("0")
    profit_margin: Money = Decimal("0")
    project_count: int = 0
    expense_count: int = 0


class BreakdownRow(ApiModel):
    """Expense totals of one project, by expense type."""

    project: str
    payroll: Money
    operating: Money
    material: Money
    total_expenses: Money
    gross_income: Money
    net: Money


class ExpenseBreakdown(ApiModel):
    """Per-project expense table."""

    rows: List[BreakdownRow] = Field(default_factory=list)
