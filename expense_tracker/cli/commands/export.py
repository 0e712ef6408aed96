"""Export commands: data downloads and estimate PDFs."""

from pathlib import Path
from typing import Optional

import click

from expense_tracker.cli.error_handlers import ErrorHandler
from expense_tracker.cli.utils.formatters import format_info, format_success
from expense_tracker.cli.utils.progress import ProgressTracker
from expense_tracker.db.session import session_scope
from expense_tracker.models.expense import ExpenseType
from expense_tracker.services.auth_service import AuthService
from expense_tracker.services.estimate_service import EstimateService
from expense_tracker.services.export_service import ExportService
from expense_tracker.writers.csv_export import expenses_csv, export_filename, to_json
from expense_tracker.writers.estimate_pdf import EstimatePdfWriter, estimate_pdf_filename


@click.command(name="export")
@click.option("--email", required=True, help="Account whose data is exported")
@click.option(
    "--format",
    "export_format",
    type=click.Choice(["json", "csv"]),
    default="json",
    show_default=True,
)
@click.option(
    "--type",
    "expense_type",
    type=click.Choice([t.value for t in ExpenseType]),
    default=None,
    help="Export only expenses of this type",
)
@click.option(
    "--year",
    type=click.IntRange(1, 9999),
    default=None,
    help="Only expenses created in this year",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Output file (default: dated filename in the current directory)",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def export_data(
    email: str,
    export_format: str,
    expense_type: Optional[str],
    year: Optional[int],
    output: Optional[str],
    debug: bool,
):
    """Write a year-end export, or one expense type, to a file.

    Example:
        expense-tracker export --email owner@example.com --format csv --year 2024
        expense-tracker export --email owner@example.com --type payroll
    """
    with ErrorHandler(debug):
        tracker = ProgressTracker(["Load records", "Write file"])
        tracker.start()

        with session_scope() as db:
            user = AuthService(db).get_user_by_email(email)
            service = ExportService(db)
            if expense_type:
                parsed_type = ExpenseType(expense_type)
                rows = service.export_expenses(user.id, parsed_type, year=year)
                base = f"{parsed_type.value}-expenses"
                content = (
                    expenses_csv(rows, parsed_type)
                    if export_format == "csv"
                    else to_json(rows)
                )
                tracker.advance(f"{len(rows)} expense(s)")
            else:
                bundle = service.export_all(user.id, year=year)
                base = "expense-tracking-export"
                content = (
                    bundle.to_csv()
                    if export_format == "csv"
                    else to_json(bundle.to_document())
                )
                tracker.advance(
                    f"{len(bundle.projects)} project(s), "
                    f"{len(bundle.expenses)} expense(s), "
                    f"{len(bundle.employees)} employee(s)"
                )

        tracker.start()
        path = Path(output or export_filename(base, year, export_format))
        path.write_text(content, encoding="utf-8")
        tracker.advance()
        click.echo(format_success(f"Export written to {path}"))


@click.command(name="estimate-pdf")
@click.argument("estimate_number")
@click.option("--email", required=True, help="Account that owns the estimate")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Output file (default: Estimate-<number>-<date>.pdf)",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def estimate_pdf(estimate_number: str, email: str, output: Optional[str], debug: bool):
    """Render an estimate as a PDF.

    Example:
        expense-tracker estimate-pdf EST-0007 --email owner@example.com
    """
    with ErrorHandler(debug):
        with session_scope() as db:
            user = AuthService(db).get_user_by_email(email)
            estimate = EstimateService(db).get_by_number(user.id, estimate_number)

        click.echo(format_info(f"Rendering {estimate.estimate_number}..."))
        content = EstimatePdfWriter().render(estimate)
        path = Path(output or estimate_pdf_filename(estimate))
        path.write_bytes(content)
        click.echo(format_success(f"PDF written to {path} ({len(content)} bytes)"))
