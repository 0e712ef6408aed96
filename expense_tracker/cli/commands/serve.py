"""Database and server commands."""

from typing import Optional

import click
import uvicorn

from expense_tracker.cli.error_handlers import ErrorHandler
from expense_tracker.cli.utils.formatters import format_info, format_success
from expense_tracker.config.logging_config import LoggingConfig, configure_logging
from expense_tracker.config.settings import get_config
from expense_tracker.db.session import get_engine, init_db


@click.command(name="serve")
@click.option("--host", type=str, default=None, help="Bind address (default: API_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: API_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def serve(host: Optional[str], port: Optional[int], reload: bool, debug: bool):
    """Run the REST API with uvicorn.

    Example:
        expense-tracker serve --port 8000
    """
    with ErrorHandler(debug):
        config = get_config()
        configure_logging(LoggingConfig.from_env(config))
        bind_host = host or config.api_host
        bind_port = port or config.api_port
        click.echo(format_info(f"Serving API on http://{bind_host}:{bind_port}"))
        uvicorn.run(
            "expense_tracker.api.app:create_app",
            factory=True,
            host=bind_host,
            port=bind_port,
            reload=reload,
            log_config=None,
            log_level=config.log_level.lower(),
        )


@click.command(name="init-db")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def init_database(debug: bool):
    """Create any missing database tables.

    Example:
        expense-tracker init-db
    """
    with ErrorHandler(debug):
        init_db()
        url = get_engine().url.render_as_string(hide_password=True)
        click.echo(format_success(f"Database ready: {url}"))
