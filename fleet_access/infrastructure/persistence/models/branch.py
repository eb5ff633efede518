"""Branch ORM model."""

from typing import Any

from sqlalchemy import JSON, Boolean, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from fleet_access.infrastructure.persistence.database import Base
from fleet_access.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Branch(CuidMixin, TimestampMixin, Base):
    """Branch model. Table: branch. Unique (company_id, code)."""

    __tablename__ = "branch"

    company_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str] = mapped_column(String(10), nullable=False)
    contact: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )

    __table_args__ = (
        UniqueConstraint("company_id", "code", name="uq_branch_company_code"),
    )
