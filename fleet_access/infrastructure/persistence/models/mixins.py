"""Column mixins shared by the company, branch, and account tables."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from fleet_access.shared.utils.generators import generate_cuid


class CuidMixin:
    """String primary key filled with a CUID2 on insert."""

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Server-side created_at / updated_at (timestamptz)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class VersionedMixin:
    """Row version used as the compare-and-swap token.

    Only conditional updates (WHERE version = :expected) increment it;
    plain profile updates leave it alone.
    """

    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
