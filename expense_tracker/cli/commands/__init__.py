"""CLI commands."""

from expense_tracker.cli.commands.export import estimate_pdf, export_data
from expense_tracker.cli.commands.report import report
from expense_tracker.cli.commands.serve import init_database, serve

__all__ = ["estimate_pdf", "export_data", "init_database", "report", "serve"]
