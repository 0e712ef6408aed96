"""Calculator modules for the expense tracker."""

from expense_tracker.calculators.estimate_calculator import (
    EstimateTotals,
    calculate_estimate_totals,
    calculate_item_total,
    format_estimate_number,
    next_estimate_number,
    parse_estimate_sequence,
    summarize_estimates,
    to_money,
)
from expense_tracker.calculators.profit_calculator import (
    ExpenseTotals,
    allocate_profit,
    calculate_dashboard_metrics,
    calculate_expense_totals,
    calculate_project_summary,
    expense_net_amount,
)

__all__ = [
    # estimate_calculator
    "EstimateTotals",
    "calculate_estimate_totals",
    "calculate_item_total",
    "format_estimate_number",
    "next_estimate_number",
    "parse_estimate_sequence",
    "summarize_estimates",
    "to_money",
    # profit_calculator
    "ExpenseTotals",
    "allocate_profit",
    "calculate_dashboard_metrics",
    "calculate_expense_totals",
    "calculate_project_summary",
    "expense_net_amount",
]
