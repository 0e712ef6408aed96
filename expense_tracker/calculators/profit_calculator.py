"""Project and business-wide financial calculations.

This module implements:
- Expense totals by type (material expenses net of returns)
- Project summary: admin fee, net profit and profit-share allocations
- Dashboard metrics: revenue, expenses, net profit and margin

Inputs are duck-typed: ORM records and API models both work as long as
they expose the attributes used here.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

from expense_tracker.calculators.estimate_calculator import to_money
from expense_tracker.models.dashboard import DashboardMetrics
from expense_tracker.models.expense import ExpenseType
from expense_tracker.models.project import ProjectSummary, ShareAllocation

DEFAULT_ADMIN_FEE_PERCENTAGE = Decimal("5")
HUNDRED = Decimal("100")


@dataclass
class ExpenseTotals:
    """Expense sums by type.

    Attributes:
        payroll: Sum of payroll amounts
        operating: Sum of operating amounts
        material: Sum of material amounts minus returned amounts
        count: Number of expenses summed
    """

    payroll: Decimal = Decimal("0.00")
    operating: Decimal = Decimal("0.00")
    material: Decimal = Decimal("0.00")
    count: int = 0

    @property
    def total(self) -> Decimal:
        return to_money(self.payroll + self.operating + self.material)


def expense_net_amount(expense) -> Decimal:
    """Amount an expense actually costs.

    Material purchases are reduced by what was returned to the supplier;
    other expense types cost their full amount.
    """
    amount = Decimal(expense.amount or 0)
    if ExpenseType(expense.type) == ExpenseType.MATERIAL:
        return amount - Decimal(expense.return_amount or 0)
    return amount


def calculate_expense_totals(expenses: Iterable) -> ExpenseTotals:
    """Sum expenses by type.

    Args:
        expenses: Expense records or models

    Returns:
        ExpenseTotals rounded to cents
    """
    payroll = Decimal("0")
    operating = Decimal("0")
    material = Decimal("0")
    count = 0

    for expense in expenses:
        count += 1
        expense_type = ExpenseType(expense.type)
        if expense_type == ExpenseType.PAYROLL:
            payroll += expense_net_amount(expense)
        elif expense_type == ExpenseType.OPERATING:
            operating += expense_net_amount(expense)
        else:
            material += expense_net_amount(expense)

    return ExpenseTotals(
        payroll=to_money(payroll),
        operating=to_money(operating),
        material=to_money(material),
        count=count,
    )


def allocate_profit(net_profit: Decimal, shares: Iterable) -> List[ShareAllocation]:
    """Split a net profit between partners by percentage.

    Args:
        net_profit: Profit to distribute (may be negative)
        shares: Objects or dicts with ``name`` and ``percentage``

    Returns:
        One ShareAllocation per share, in input order

    Example:
        >>> [a.amount for a in allocate_profit(Decimal("1000"), [
        ...     {"name": "A", "percentage": 60}, {"name": "B", "percentage": 40}])]
        [Decimal('600.00'), Decimal('400.00')]
    """
    allocations = []
    for share in shares:
        if isinstance(share, dict):
            name, percentage = share.get("name", ""), share.get("percentage", 0)
        else:
            name, percentage = share.name, share.percentage
        percentage = Decimal(str(percentage or 0))
        allocations.append(
            ShareAllocation(
                name=name or "Partner",
                percentage=percentage,
                amount=to_money(Decimal(net_profit) * percentage / HUNDRED),
            )
        )
    return allocations


def calculate_project_summary(
    project,
    expenses: Iterable,
    admin_fee_percentage: Decimal = DEFAULT_ADMIN_FEE_PERCENTAGE,
) -> ProjectSummary:
    """Calculate the financial summary of a project.

    - total expenses = labor + operating + material (net of returns)
    - admin fee = total expenses x admin fee percentage
    - net profit = gross income - total expenses - admin fee
    - share amounts = net profit x share percentage (profit sharing enabled only)

    Args:
        project: Project record or model
        expenses: The project's expenses
        admin_fee_percentage: Fee charged on total expenses, in percent

    Returns:
        ProjectSummary

    Example:
        >>> summary = calculate_project_summary(project, expenses)
        >>> summary.net_profit
        Decimal('6850.00')
    """
    totals = calculate_expense_totals(expenses)
    gross_income = to_money(project.gross_income or 0)
    total_expenses = totals.total
    admin_fee = to_money(total_expenses * Decimal(admin_fee_percentage) / HUNDRED)
    net_profit = to_money(gross_income - total_expenses - admin_fee)

    shares: List[ShareAllocation] = []
    if project.profit_sharing_enabled and project.profit_shares:
        shares = allocate_profit(net_profit, project.profit_shares)

    return ProjectSummary(
        project_id=project.id,
        name=project.name,
        gross_income=gross_income,
        labor_expenses=totals.payroll,
        operating_expenses=totals.operating,
        material_expenses=totals.material,
        total_expenses=total_expenses,
        admin_fee_percentage=Decimal(admin_fee_percentage),
        admin_fee=admin_fee,
        net_profit=net_profit,
        expense_count=totals.count,
        shares=shares,
    )


def calculate_dashboard_metrics(projects: Iterable, expenses: Iterable) -> DashboardMetrics:
    """Calculate business-wide totals for the dashboard.

    Args:
        projects: All of a user's projects
        expenses: All of a user's expenses

    Returns:
        DashboardMetrics; the profit margin is 0 when there is no revenue
    """
    projects = list(projects)
    totals = calculate_expense_totals(expenses)

    total_revenue = to_money(
        sum((Decimal(p.gross_income or 0) for p in projects), Decimal("0"))
    )
    net_profit = to_money(total_revenue - totals.total)
    if total_revenue > 0:
        profit_margin = to_money(net_profit / total_revenue * HUNDRED)
    else:
        profit_margin = Decimal("0.00")

    return DashboardMetrics(
        total_revenue=total_revenue,
        payroll_expenses=totals.payroll,
        operating_expenses=totals.operating,
        material_expenses=totals.material,
        total_expenses=totals.total,
        net_profit=net_profit,
        profit_margin=profit_margin,
        project_count=len(projects),
        expense_count=totals.count,
    )
