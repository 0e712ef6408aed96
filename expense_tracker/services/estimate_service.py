"""Estimate service: numbering, totals, search, summary and PDF rendering."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.calculators.estimate_calculator import (
    calculate_estimate_totals,
    next_estimate_number,
    summarize_estimates,
)
from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import EstimateRecord, to_document
from expense_tracker.errors import ConflictError, NotFoundError
from expense_tracker.models.estimate import (
    Estimate,
    EstimateCreate,
    EstimateItem,
    EstimateStatus,
    EstimateSummary,
    EstimateUpdate,
)
from expense_tracker.writers.estimate_pdf import EstimatePdfWriter, estimate_pdf_filename

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"customer_name", "project_title", "status", "approved_amount"}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EstimateService:
    """CRUD operations on a user's estimates.

    Totals are never taken from the client: they are recomputed from the
    line items on create and whenever the items or the tax rate change.
    """

    def __init__(self, db: Session, config: Optional[TrackerConfig] = None):
        self.db = db
        self.config = config or get_config()

    def _get_record(self, user_id: str, estimate_id: str) -> EstimateRecord:
        record = self.db.scalar(
            select(EstimateRecord).where(
                EstimateRecord.id == estimate_id, EstimateRecord.user_id == user_id
            )
        )
        if record is None:
            raise NotFoundError("Estimate not found")
        return record

    def _existing_numbers(self, user_id: str) -> List[str]:
        return list(
            self.db.scalars(
                select(EstimateRecord.estimate_number).where(
                    EstimateRecord.user_id == user_id
                )
            ).all()
        )

    def _apply_totals(self, record: EstimateRecord, items, tax_rate) -> None:
        totals = calculate_estimate_totals(
            items, tax_rate, default_tax_rate=self.config.default_tax_rate
        )
        record.items = to_document([item.model_dump() for item in totals.items])
        record.subtotal = totals.subtotal
        record.tax_rate = totals.tax_rate
        record.tax_amount = totals.tax_amount
        record.total = totals.total

    def _commit(self, estimate_number: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(
                f"Estimate number {estimate_number} already exists"
            ) from e

    def list(
        self,
        user_id: str,
        status: Optional[EstimateStatus] = None,
        search: Optional[str] = None,
    ) -> List[Estimate]:
        """List estimates, newest first.

        Args:
            user_id: Owner of the estimates
            status: Only estimates in this state
            search: Case-insensitive text matched against customer name,
                project title and estimate number
        """
        query = select(EstimateRecord).where(EstimateRecord.user_id == user_id)
        if status is not None:
            query = query.where(EstimateRecord.status == EstimateStatus(status).value)
        if search and search.strip():
            pattern = f"%{escape_like(search.strip())}%"
            query = query.where(
                or_(
                    EstimateRecord.customer_name.ilike(pattern, escape="\\"),
                    EstimateRecord.project_title.ilike(pattern, escape="\\"),
                    EstimateRecord.estimate_number.ilike(pattern, escape="\\"),
                )
            )
        records = self.db.scalars(
            query.order_by(EstimateRecord.created_at.desc())
        ).all()
        return [Estimate.model_validate(record) for record in records]

    def get(self, user_id: str, estimate_id: str) -> Estimate:
        return Estimate.model_validate(self._get_record(user_id, estimate_id))

    def get_by_number(self, user_id: str, estimate_number: str) -> Estimate:
        record = self.db.scalar(
            select(EstimateRecord).where(
                EstimateRecord.user_id == user_id,
                EstimateRecord.estimate_number == estimate_number.strip(),
            )
        )
        if record is None:
            raise NotFoundError("Estimate not found")
        return Estimate.model_validate(record)

    def create(self, user_id: str, data: EstimateCreate) -> Estimate:
        existing = self._existing_numbers(user_id)
        if data.estimate_number:
            if data.estimate_number in existing:
                raise ConflictError(
                    f"Estimate number {data.estimate_number} already exists"
                )
            estimate_number = data.estimate_number
        else:
            estimate_number = next_estimate_number(existing)

        record = EstimateRecord(
            user_id=user_id,
            estimate_number=estimate_number,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            project_title=data.project_title,
            description=data.description,
            valid_until=data.valid_until,
            additional_notes=data.additional_notes,
            status=data.status.value,
            approved_amount=data.approved_amount,
        )
        self._apply_totals(record, data.items, data.tax_rate)
        self.db.add(record)
        self._commit(estimate_number)
        logger.info(
            f"Created estimate {estimate_number} ({record.total}) for user {user_id}"
        )
        return Estimate.model_validate(record)

    def update(self, user_id: str, estimate_id: str, data: EstimateUpdate) -> Estimate:
        """Apply a partial update.

        Sending ``taxRate: null`` resets the rate to the default; required
        fields sent as null are left unchanged.
        """
        record = self._get_record(user_id, estimate_id)
        changes = data.model_dump(exclude_unset=True)
        for field in list(changes):
            if changes[field] is None and field in REQUIRED_FIELDS:
                del changes[field]

        recalculate = "tax_rate" in changes or changes.get("items") is not None
        items = changes.pop("items", None)
        tax_rate = changes.pop("tax_rate", record.tax_rate)
        if recalculate:
            if items is None:
                items = record.items
            self._apply_totals(
                record,
                [EstimateItem.model_validate(item) for item in items],
                tax_rate,
            )

        for field, value in changes.items():
            setattr(record, field, to_document(value) if field == "status" else value)
        self._commit(record.estimate_number)
        logger.info(
            f"Updated estimate {record.estimate_number}: "
            f"{sorted(changes) + (['totals'] if recalculate else [])}"
        )
        return Estimate.model_validate(record)

    def delete(self, user_id: str, estimate_id: str) -> None:
        record = self._get_record(user_id, estimate_id)
        self.db.delete(record)
        self.db.commit()
        logger.info(f"Deleted estimate {record.estimate_number}")

    def summary(self, user_id: str) -> EstimateSummary:
        records = self.db.scalars(
            select(EstimateRecord).where(EstimateRecord.user_id == user_id)
        ).all()
        return summarize_estimates(records)

    def render_pdf(self, user_id: str, estimate_id: str) -> Tuple[bytes, str]:
        """Render an estimate as a PDF document.

        Returns:
            Tuple of (PDF bytes, download filename)
        """
        estimate = self.get(user_id, estimate_id)
        content = EstimatePdfWriter(self.config).render(estimate)
        logger.info(f"Rendered PDF for estimate {estimate.estimate_number}")
        return content, estimate_pdf_filename(estimate)
