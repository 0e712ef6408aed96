"""Report command: per-project expense breakdown in the terminal."""

import click

from expense_tracker.aggregators.expense_aggregator import (
    BREAKDOWN_COLUMNS,
    PROJECT_COLUMN,
)
from expense_tracker.cli.error_handlers import ErrorHandler
from expense_tracker.cli.utils.formatters import (
    format_info,
    format_money,
    format_table,
)
from expense_tracker.db.session import session_scope
from expense_tracker.services.auth_service import AuthService
from expense_tracker.services.dashboard_service import DashboardService


@click.command(name="report")
@click.option("--email", required=True, help="Account to report on")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def report(email: str, debug: bool):
    """Show expenses by project and type, then business-wide totals.

    Example:
        expense-tracker report --email owner@example.com
    """
    with ErrorHandler(debug):
        with session_scope() as db:
            user = AuthService(db).get_user_by_email(email)
            service = DashboardService(db)
            rows = service.breakdown(user.id).rows
            metrics = service.metrics(user.id)

        if not rows:
            click.echo(format_info("No projects yet."))
            return

        table_rows = [
            [
                row.project,
                format_money(row.payroll),
                format_money(row.operating),
                format_money(row.material),
                format_money(row.total_expenses),
                format_money(row.gross_income),
                format_money(row.net),
            ]
            for row in rows
        ]
        amount_columns = [
            i for i, name in enumerate(BREAKDOWN_COLUMNS) if name != PROJECT_COLUMN
        ]
        click.echo()
        click.echo(format_table(BREAKDOWN_COLUMNS, table_rows, align_right=amount_columns))
        click.echo()
        click.echo(f"Total revenue:  {format_money(metrics.total_revenue)}")
        click.echo(f"Total expenses: {format_money(metrics.total_expenses)}")
        click.echo(f"Net profit:     {format_money(metrics.net_profit)}")
        click.echo(f"Profit margin:  {metrics.profit_margin}%")
