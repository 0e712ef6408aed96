"""Expense tracker CLI.

Commands for running the API, preparing the database, exporting data,
rendering estimate PDFs and printing expense reports.
"""

import click

from expense_tracker import __version__
from expense_tracker.cli.commands import (
    estimate_pdf,
    export_data,
    init_database,
    report,
    serve,
)


@click.group(help="Expense Tracker CLI - Run the API and work with tracked data")
@click.version_option(version=__version__)
def cli():
    """Expense tracker main entry point."""


cli.add_command(serve)
cli.add_command(init_database)
cli.add_command(export_data)
cli.add_command(estimate_pdf)
cli.add_command(report)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
