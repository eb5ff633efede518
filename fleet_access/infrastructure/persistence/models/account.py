"""Account ORM model for authentication and scoping."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from fleet_access.infrastructure.persistence.database import Base
from fleet_access.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)


class Account(CuidMixin, TimestampMixin, VersionedMixin, Base):
    """Account model. Table: account. Email is globally unique (stored lower-case).

    company_id and branch_id are scoping links only; removing a company row
    nulls them instead of deleting accounts.
    """

    __tablename__ = "account"

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    permissions: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    vehicle_type_access: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    failed_attempts: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0"), default=0
    )
    lock_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    company_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    branch_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("branch.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("account.id", ondelete="SET NULL"),
        nullable=True,
    )
