"""SQLAlchemy ORM tables.

Each business record belongs to a user. Embedded documents (profit shares
on a project, line items on an estimate) are stored as JSON columns with
money values kept as decimal strings.
"""

import datetime as dt
import uuid
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> dt.datetime:
    """Naive UTC timestamp, as stored in every timestamp column."""
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


def to_document(value):
    """Convert a value into JSON-column form (decimals as strings)."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document(item) for item in value]
    return value


def new_id() -> str:
    return uuid.uuid4().hex


class TimestampMixin:
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class UserRecord(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255))
    reset_password_otp = Column(String(12))
    reset_password_otp_expiry = Column(DateTime)


class EmployeeRecord(TimestampMixin, Base):
    __tablename__ = "employees"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(64))
    position = Column(String(255))
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    expenses = relationship("ExpenseRecord", back_populates="employee")


class ProjectRecord(TimestampMixin, Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    gross_income = Column(Numeric(14, 2), nullable=False, default=0)
    profit_sharing_enabled = Column(Boolean, nullable=False, default=False)
    profit_sharing_type = Column(String(16), nullable=False, default="none")
    profit_shares = Column(JSON, nullable=False, default=list)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    expenses = relationship(
        "ExpenseRecord", back_populates="project", cascade="all, delete-orphan"
    )


class ExpenseRecord(TimestampMixin, Base):
    __tablename__ = "expenses"

    id = Column(String(32), primary_key=True, default=new_id)
    type = Column(String(16), nullable=False, index=True)
    project_id = Column(
        String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(255), nullable=False)
    description = Column(Text)
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    employee_id = Column(
        String(32), ForeignKey("employees.id", ondelete="SET NULL"), index=True
    )
    days_worked = Column(Numeric(8, 2), nullable=False, default=0)
    advancement = Column(Numeric(14, 2), nullable=False, default=0)
    week_start = Column(Date)
    weekend = Column(Date)
    return_amount = Column(Numeric(14, 2), nullable=False, default=0)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    project = relationship("ProjectRecord", back_populates="expenses")
    employee = relationship("EmployeeRecord", back_populates="expenses")

    @property
    def project_name(self):
        return self.project.name if self.project is not None else None

    @property
    def employee_name(self):
        return self.employee.name if self.employee is not None else None


class EstimateRecord(TimestampMixin, Base):
    __tablename__ = "estimates"
    __table_args__ = (
        UniqueConstraint("user_id", "estimate_number", name="uq_estimates_user_number"),
        Index("ix_estimates_user_status", "user_id", "status"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    estimate_number = Column(String(32), nullable=False)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255))
    customer_phone = Column(String(64))
    project_title = Column(String(255), nullable=False)
    description = Column(Text)
    valid_until = Column(Date)
    items = Column(JSON, nullable=False, default=list)
    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    tax_rate = Column(Numeric(5, 2), nullable=False, default=16)
    tax_amount = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    additional_notes = Column(Text)
    status = Column(String(16), nullable=False, default="draft")
    approved_amount = Column(Numeric(14, 2), nullable=False, default=0)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
