"""Per-project expense breakdown built with pandas.

The breakdown has one row per project and the columns:
Project, Payroll, Operating, Material, Total Expenses, Gross Income, Net.
Material is net of returns; Net is gross income minus total expenses.
"""

import logging
from typing import Iterable, List

import pandas as pd

from expense_tracker.calculators.estimate_calculator import to_money
from expense_tracker.calculators.profit_calculator import expense_net_amount
from expense_tracker.models.dashboard import BreakdownRow, ExpenseBreakdown
from expense_tracker.models.expense import ExpenseType

logger = logging.getLogger(__name__)

PROJECT_COLUMN = "Project"
TYPE_COLUMNS = {
    ExpenseType.PAYROLL.value: "Payroll",
    ExpenseType.OPERATING.value: "Operating",
    ExpenseType.MATERIAL.value: "Material",
}
TOTAL_COLUMN = "Total Expenses"
INCOME_COLUMN = "Gross Income"
NET_COLUMN = "Net"

BREAKDOWN_COLUMNS = [
    PROJECT_COLUMN,
    *TYPE_COLUMNS.values(),
    TOTAL_COLUMN,
    INCOME_COLUMN,
    NET_COLUMN,
]


class ExpenseAggregator:
    """Pivots expenses into a per-project table.

    Example:
        >>> df = ExpenseAggregator(projects, expenses).build_frame()
        >>> list(df.columns)
        ['Project', 'Payroll', 'Operating', 'Material', 'Total Expenses', 'Gross Income', 'Net']
    """

    def __init__(self, projects: Iterable, expenses: Iterable):
        """Initialize with records or models.

        Args:
            projects: Projects to report on, in display order
            expenses: Expenses; those of projects not listed are ignored
        """
        self.projects = list(projects)
        self.expenses = list(expenses)

    def _expense_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "project_id": expense.project_id,
                    "type": ExpenseType(expense.type).value,
                    "amount": float(expense_net_amount(expense)),
                }
                for expense in self.expenses
            ],
            columns=["project_id", "type", "amount"],
        )

    def build_frame(self) -> pd.DataFrame:
        """Build the breakdown DataFrame, rounded to cents."""
        project_ids = [project.id for project in self.projects]
        type_keys = list(TYPE_COLUMNS)

        expense_df = self._expense_frame()
        if expense_df.empty:
            pivot = pd.DataFrame(0.0, index=project_ids, columns=type_keys)
        else:
            pivot = expense_df.pivot_table(
                index="project_id",
                columns="type",
                values="amount",
                aggfunc="sum",
                fill_value=0.0,
            )
        pivot = pivot.reindex(index=project_ids, columns=type_keys, fill_value=0.0)
        pivot = pivot.fillna(0.0).rename(columns=TYPE_COLUMNS)

        frame = pd.DataFrame(
            {
                PROJECT_COLUMN: [project.name for project in self.projects],
                INCOME_COLUMN: [
                    float(project.gross_income or 0) for project in self.projects
                ],
            },
            index=project_ids,
        )
        frame = frame.join(pivot)
        frame[TOTAL_COLUMN] = frame[list(TYPE_COLUMNS.values())].sum(axis=1)
        frame[NET_COLUMN] = frame[INCOME_COLUMN] - frame[TOTAL_COLUMN]

        logger.debug(
            f"Built expense breakdown: {len(frame)} project(s), "
            f"{len(self.expenses)} expense(s)"
        )
        return frame[BREAKDOWN_COLUMNS].round(2).reset_index(drop=True)

    def to_rows(self) -> List[BreakdownRow]:
        frame = self.build_frame()
        return [
            BreakdownRow(
                project=row[PROJECT_COLUMN],
                payroll=to_money(row["Payroll"]),
                operating=to_money(row["Operating"]),
                material=to_money(row["Material"]),
                total_expenses=to_money(row[TOTAL_COLUMN]),
                gross_income=to_money(row[INCOME_COLUMN]),
                net=to_money(row[NET_COLUMN]),
            )
            for _, row in frame.iterrows()
        ]

    def to_breakdown(self) -> ExpenseBreakdown:
        return ExpenseBreakdown(rows=self.to_rows())
