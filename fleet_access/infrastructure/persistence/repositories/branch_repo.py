"""Branch repository (IBranchRepository)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_access.domain.entities import BranchEntity
from fleet_access.domain.exceptions import DuplicateBranchCodeException
from fleet_access.domain.value_objects import BranchCode, ContactInfo
from fleet_access.infrastructure.persistence.models.branch import Branch
from fleet_access.infrastructure.persistence.repositories.base import BaseRepository


def _branch_to_entity(b: Branch) -> BranchEntity:
    return BranchEntity(
        id=b.id,
        company_id=b.company_id,
        name=b.name,
        code=BranchCode(b.code),
        contact=ContactInfo.from_dict(b.contact),
        is_active=b.is_active,
    )


class BranchRepository(BaseRepository[Branch]):
    """Branch persistence. (company_id, code) is unique."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Branch)

    async def get_by_id(self, branch_id: str) -> BranchEntity | None:
        row = await self._get_model(branch_id)
        return _branch_to_entity(row) if row else None

    async def get_by_code(self, company_id: str, code: str) -> BranchEntity | None:
        result = await self.db.execute(
            select(Branch).where(
                Branch.company_id == company_id,
                Branch.code == code.strip().upper(),
            )
        )
        row = result.scalar_one_or_none()
        return _branch_to_entity(row) if row else None

    async def add(self, branch: BranchEntity) -> BranchEntity:
        row = Branch(
            id=branch.id,
            company_id=branch.company_id,
            name=branch.name,
            code=branch.code.value,
            contact=branch.contact.to_dict(),
            is_active=branch.is_active,
        )
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise DuplicateBranchCodeException(branch.company_id, branch.code.value) from e
        await self.db.refresh(row)
        return _branch_to_entity(row)

    async def update(self, branch: BranchEntity) -> BranchEntity:
        row = await self._require_model(branch.id, "branch")
        row.name = branch.name
        row.contact = branch.contact.to_dict()
        row.is_active = branch.is_active
        await self.db.flush()
        await self.db.refresh(row)
        return _branch_to_entity(row)
