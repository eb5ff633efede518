"""Company ORM model (tenant)."""

from typing import Any

from sqlalchemy import JSON, Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from fleet_access.infrastructure.persistence.database import Base
from fleet_access.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Company(CuidMixin, TimestampMixin, Base):
    """Company model. Table: company. tax_id is unique (stored upper-case).

    administrator holds the embedded descriptor as JSON; its account_id is
    null until the second bootstrap phase links it.
    """

    __tablename__ = "company"

    tax_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    contact: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )
    administrator: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
