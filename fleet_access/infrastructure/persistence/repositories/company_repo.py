"""Company repository (ICompanyRepository)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_access.domain.entities import CompanyEntity
from fleet_access.domain.exceptions import CompanyAlreadyExistsException
from fleet_access.domain.value_objects import CompanyAdministrator, ContactInfo, TaxId
from fleet_access.infrastructure.persistence.models.company import Company
from fleet_access.infrastructure.persistence.repositories.base import BaseRepository


def _company_to_entity(c: Company) -> CompanyEntity:
    return CompanyEntity(
        id=c.id,
        tax_id=TaxId(c.tax_id),
        name=c.name,
        contact=ContactInfo.from_dict(c.contact),
        is_active=c.is_active,
        administrator=CompanyAdministrator.from_dict(c.administrator),
    )


def _apply(row: Company, company: CompanyEntity) -> None:
    row.tax_id = company.tax_id.value
    row.name = company.name
    row.contact = company.contact.to_dict()
    row.is_active = company.is_active
    row.administrator = (
        company.administrator.to_dict() if company.administrator else None
    )


class CompanyRepository(BaseRepository[Company]):
    """Company persistence. Tax id lookups use the normalized (upper-case) value."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Company)

    async def get_by_id(self, company_id: str) -> CompanyEntity | None:
        row = await self._get_model(company_id)
        return _company_to_entity(row) if row else None

    async def get_by_tax_id(self, tax_id: str) -> CompanyEntity | None:
        result = await self.db.execute(
            select(Company).where(Company.tax_id == tax_id.strip().upper())
        )
        row = result.scalar_one_or_none()
        return _company_to_entity(row) if row else None

    async def add(self, company: CompanyEntity) -> CompanyEntity:
        row = Company(id=company.id)
        _apply(row, company)
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise CompanyAlreadyExistsException(company.tax_id.value) from e
        await self.db.refresh(row)
        return _company_to_entity(row)

    async def update(self, company: CompanyEntity) -> CompanyEntity:
        row = await self._require_model(company.id, "company")
        _apply(row, company)
        await self.db.flush()
        await self.db.refresh(row)
        return _company_to_entity(row)
