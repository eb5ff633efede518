"""Account repository (IAccountRepository) with compare-and-swap login state writes."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_access.application.dtos.account import LoginState
from fleet_access.domain.entities import AccountEntity
from fleet_access.domain.enums import Role, VehicleType
from fleet_access.domain.exceptions import DuplicateEmailException
from fleet_access.domain.value_objects import EmailAddress, PermissionMatrix
from fleet_access.infrastructure.persistence.models.account import Account
from fleet_access.infrastructure.persistence.repositories.base import BaseRepository
from fleet_access.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def _account_to_entity(a: Account) -> AccountEntity:
    """Map ORM Account to domain AccountEntity."""
    return AccountEntity(
        id=a.id,
        first_name=a.first_name,
        last_name=a.last_name,
        email=EmailAddress(a.email),
        hashed_password=a.hashed_password,
        role=Role.parse(a.role),
        permissions=PermissionMatrix.from_dict(a.permissions or {}),
        vehicle_type_access=VehicleType.parse_list(a.vehicle_type_access or []),
        company_id=a.company_id,
        branch_id=a.branch_id,
        phone=a.phone,
        is_active=a.is_active,
        last_login_at=ensure_utc(a.last_login_at),
        failed_attempts=a.failed_attempts,
        lock_expires_at=ensure_utc(a.lock_expires_at),
        created_by=a.created_by,
        version=a.version,
        created_at=ensure_utc(a.created_at),
    )


def _apply_profile(row: Account, account: AccountEntity) -> None:
    """Copy profile fields (never lockout counters or version) onto the row."""
    row.first_name = account.first_name
    row.last_name = account.last_name
    row.email = account.email.value
    row.hashed_password = account.hashed_password
    row.phone = account.phone
    row.role = account.role.value
    row.permissions = account.permissions.to_dict()
    row.vehicle_type_access = [vt.value for vt in account.vehicle_type_access]
    row.is_active = account.is_active
    row.company_id = account.company_id
    row.branch_id = account.branch_id


class AccountRepository(BaseRepository[Account]):
    """Account persistence. Email lookups use the normalized (lower-case) value."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Account)

    async def get_by_id(self, account_id: str) -> AccountEntity | None:
        row = await self._get_model(account_id)
        return _account_to_entity(row) if row else None

    async def get_by_email(self, email: str) -> AccountEntity | None:
        result = await self.db.execute(
            select(Account)
            .where(Account.email == email.strip().lower())
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _account_to_entity(row) if row else None

    async def add(self, account: AccountEntity) -> AccountEntity:
        row = Account(
            id=account.id,
            created_by=account.created_by,
            failed_attempts=account.failed_attempts,
            lock_expires_at=account.lock_expires_at,
            last_login_at=account.last_login_at,
            version=account.version,
        )
        _apply_profile(row, account)
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise DuplicateEmailException() from e
        await self.db.refresh(row)
        return _account_to_entity(row)

    async def update(self, account: AccountEntity) -> AccountEntity:
        row = await self._require_model(account.id, "account")
        _apply_profile(row, account)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise DuplicateEmailException() from e
        await self.db.refresh(row)
        return _account_to_entity(row)

    async def save_login_state(
        self,
        account_id: str,
        expected_version: int,
        state: LoginState,
        last_login_at: datetime | None = None,
    ) -> bool:
        """UPDATE ... WHERE id = :id AND version = :expected; True if one row matched."""
        values: dict = {
            "failed_attempts": state.failed_attempts,
            "lock_expires_at": state.lock_expires_at,
            "version": Account.version + 1,
        }
        if last_login_at is not None:
            values["last_login_at"] = last_login_at
        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.version == expected_version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        matched = result.rowcount == 1
        if not matched:
            logger.debug(
                "save_login_state version mismatch for account %s (expected %d)",
                account_id,
                expected_version,
            )
        return matched

    async def count_active_by_company(self, company_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Account)
            .where(Account.company_id == company_id, Account.is_active.is_(True))
        )
        return int(result.scalar_one())

    async def list_accounts(
        self,
        *,
        company_id: str | None = None,
        branch_id: str | None = None,
        role: Role | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[AccountEntity], int]:
        conditions = []
        if company_id is not None:
            conditions.append(Account.company_id == company_id)
        if branch_id is not None:
            conditions.append(Account.branch_id == branch_id)
        if role is not None:
            conditions.append(Account.role == role.value)
        if is_active is not None:
            conditions.append(Account.is_active.is_(is_active))
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    Account.first_name.ilike(pattern),
                    Account.last_name.ilike(pattern),
                    Account.email.ilike(pattern),
                    Account.phone.ilike(pattern),
                )
            )
        total = await self.db.execute(
            select(func.count()).select_from(Account).where(*conditions)
        )
        result = await self.db.execute(
            select(Account)
            .where(*conditions)
            .order_by(Account.created_at.desc(), Account.id)
            .offset(skip)
            .limit(limit)
        )
        accounts = [_account_to_entity(a) for a in result.scalars().all()]
        return accounts, int(total.scalar_one())
