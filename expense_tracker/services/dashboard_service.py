"""Business-wide dashboard figures."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from expense_tracker.aggregators.expense_aggregator import ExpenseAggregator
from expense_tracker.calculators.profit_calculator import calculate_dashboard_metrics
from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import ExpenseRecord, ProjectRecord
from expense_tracker.models.dashboard import DashboardMetrics, ExpenseBreakdown

logger = logging.getLogger(__name__)


class DashboardService:
    """Totals across all of a user's projects and expenses."""

    def __init__(self, db: Session, config: Optional[TrackerConfig] = None):
        self.db = db
        self.config = config or get_config()

    def _load(self, user_id: str):
        projects = self.db.scalars(
            select(ProjectRecord)
            .where(ProjectRecord.user_id == user_id)
            .order_by(ProjectRecord.name)
        ).all()
        expenses = self.db.scalars(
            select(ExpenseRecord).where(ExpenseRecord.user_id == user_id)
        ).all()
        return projects, expenses

    def metrics(self, user_id: str) -> DashboardMetrics:
        projects, expenses = self._load(user_id)
        metrics = calculate_dashboard_metrics(projects, expenses)
        logger.debug(
            f"Dashboard for user {user_id}: revenue={metrics.total_revenue}, "
            f"expenses={metrics.total_expenses}"
        )
        return metrics

    def breakdown(self, user_id: str) -> ExpenseBreakdown:
        """Per-project expense totals by type."""
        projects, expenses = self._load(user_id)
        return ExpenseAggregator(projects, expenses).to_breakdown()
