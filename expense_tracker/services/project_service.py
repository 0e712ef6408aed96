"""Project service: CRUD, profit-sharing checks and financial summary."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from expense_tracker.calculators.profit_calculator import calculate_project_summary
from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import ProjectRecord, to_document
from expense_tracker.errors import NotFoundError
from expense_tracker.models.project import (
    Project,
    ProjectCreate,
    ProjectSummary,
    ProjectUpdate,
)
from expense_tracker.validators.profit_sharing import ProfitSharingValidator

logger = logging.getLogger(__name__)

PROFIT_SHARING_FIELDS = (
    "profit_sharing_enabled",
    "profit_sharing_type",
    "profit_shares",
)


class ProjectService:
    """CRUD operations on a user's projects.

    Profit-sharing settings are validated whenever they are created or
    changed; an invalid split is rejected with ``ValidationFailedError``.
    """

    def __init__(self, db: Session, config: Optional[TrackerConfig] = None):
        self.db = db
        self.config = config or get_config()

    def _get_record(self, user_id: str, project_id: str) -> ProjectRecord:
        record = self.db.scalar(
            select(ProjectRecord).where(
                ProjectRecord.id == project_id, ProjectRecord.user_id == user_id
            )
        )
        if record is None:
            raise NotFoundError("Project not found")
        return record

    def _validate_profit_sharing(self, enabled, sharing_type, shares) -> None:
        report = ProfitSharingValidator.validate(enabled, sharing_type, shares)
        if report.issues:
            logger.warning(report.format())
        report.raise_if_invalid("Invalid profit sharing configuration")

    def list(self, user_id: str) -> List[Project]:
        """All projects of the user, newest first."""
        records = self.db.scalars(
            select(ProjectRecord)
            .where(ProjectRecord.user_id == user_id)
            .order_by(ProjectRecord.created_at.desc())
        ).all()
        return [Project.model_validate(record) for record in records]

    def get(self, user_id: str, project_id: str) -> Project:
        return Project.model_validate(self._get_record(user_id, project_id))

    def create(self, user_id: str, data: ProjectCreate) -> Project:
        self._validate_profit_sharing(
            data.profit_sharing_enabled, data.profit_sharing_type, data.profit_shares
        )
        record = ProjectRecord(
            user_id=user_id,
            name=data.name,
            gross_income=data.gross_income,
            profit_sharing_enabled=data.profit_sharing_enabled,
            profit_sharing_type=data.profit_sharing_type.value,
            profit_shares=to_document(
                [share.model_dump() for share in data.profit_shares]
            ),
        )
        self.db.add(record)
        self.db.commit()
        logger.info(f"Created project {record.id} ({record.name}) for user {user_id}")
        return Project.model_validate(record)

    def update(self, user_id: str, project_id: str, data: ProjectUpdate) -> Project:
        """Apply a partial update.

        Profit-sharing fields missing from the update are taken from the
        stored project before validating, so a request that only flips
        ``profitSharingEnabled`` is checked against the existing shares.
        """
        record = self._get_record(user_id, project_id)
        # null means "leave unchanged" for every project field
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }

        if any(field in changes for field in PROFIT_SHARING_FIELDS):
            self._validate_profit_sharing(
                changes.get("profit_sharing_enabled", record.profit_sharing_enabled),
                changes.get("profit_sharing_type", record.profit_sharing_type),
                changes.get("profit_shares", record.profit_shares),
            )

        for field, value in changes.items():
            if field in PROFIT_SHARING_FIELDS:
                value = to_document(value)
            setattr(record, field, value)
        self.db.commit()
        logger.info(f"Updated project {project_id}: {sorted(changes)}")
        return Project.model_validate(record)

    def delete(self, user_id: str, project_id: str) -> None:
        """Delete a project together with its expenses."""
        record = self._get_record(user_id, project_id)
        expense_count = len(record.expenses)
        self.db.delete(record)
        self.db.commit()
        logger.info(f"Deleted project {project_id} and {expense_count} expense(s)")

    def summary(self, user_id: str, project_id: str) -> ProjectSummary:
        """Financial summary of one project (admin fee, net profit, shares)."""
        record = self._get_record(user_id, project_id)
        return calculate_project_summary(
            record,
            record.expenses,
            admin_fee_percentage=self.config.admin_fee_percentage,
        )
