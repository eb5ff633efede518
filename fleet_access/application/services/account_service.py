"""Account application service: authenticate, create, change role, administer.

Composes the credential store, lockout policy, permission matrix builder, and
tenancy scope validator over injected repositories. It is the only writer of
account records. Lockout counters are written with compare-and-swap on the
account version so concurrent failed logins are never lost.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from fleet_access.application.dtos.account import (
    AccountCreate,
    AccountListQuery,
    AccountSummary,
    LoginState,
)
from fleet_access.application.dtos.authorization import ResourceDescriptor
from fleet_access.application.interfaces import (
    IAccountRepository,
    IBranchRepository,
    ICompanyRepository,
    ICredentialStore,
)
from fleet_access.application.services.lockout_policy import LockoutPolicy
from fleet_access.application.services.permission_matrix import PermissionMatrixBuilder
from fleet_access.application.services.tenancy_scope import TenancyScopeValidator
from fleet_access.core.config import Settings, get_settings
from fleet_access.domain.entities import AccountEntity
from fleet_access.domain.enums import Action, ResourceCategory, Role, VehicleType
from fleet_access.domain.exceptions import (
    AccountInactiveError,
    AccountLimitExceededException,
    AccountLockedError,
    AccountNotFoundError,
    DuplicateEmailException,
    InvalidCredentialsError,
    LockoutConflictException,
    PermissionDeniedError,
    ResourceNotFoundException,
    TenantInactiveError,
    ValidationException,
)
from fleet_access.domain.value_objects import EmailAddress, PermissionMatrix
from fleet_access.shared.utils.datetime import utc_now
from fleet_access.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

# Roles each role may assign when creating or re-roling accounts.
# super_admin accounts only come from bootstrap_super_admin.
ASSIGNABLE_ROLES: dict[Role, tuple[Role, ...]] = {
    Role.SUPER_ADMIN: (
        Role.COMPANY_ADMIN,
        Role.BRANCH_MANAGER,
        Role.MECHANIC,
        Role.OPERATOR,
        Role.VIEWER,
    ),
    Role.COMPANY_ADMIN: (
        Role.BRANCH_MANAGER,
        Role.MECHANIC,
        Role.OPERATOR,
        Role.VIEWER,
    ),
    Role.BRANCH_MANAGER: (Role.MECHANIC, Role.OPERATOR, Role.VIEWER),
    Role.MECHANIC: (),
    Role.OPERATOR: (),
    Role.VIEWER: (),
}


def _login_state(account: AccountEntity) -> LoginState:
    return LoginState(
        failed_attempts=account.failed_attempts,
        lock_expires_at=account.lock_expires_at,
    )


def _parse_email(value: str) -> EmailAddress:
    try:
        return EmailAddress(value)
    except ValueError as e:
        raise ValidationException(str(e), field="email") from e


def _parse_permissions(data: dict) -> PermissionMatrix:
    try:
        return PermissionMatrix.from_dict(data)
    except (ValueError, TypeError) as e:
        raise ValidationException(str(e), field="permissions") from e


class AccountService:
    """Account aggregate operations (authenticate, create_account, change_role, ...).

    Methods taking an optional actor enforce administrator rules when the
    actor is given: assignable roles, tenancy scope of the target, and no
    self-modification of role or active flag. Without an actor the call is
    trusted (bootstrap, scripts).
    """

    def __init__(
        self,
        account_repo: IAccountRepository,
        company_repo: ICompanyRepository,
        branch_repo: IBranchRepository,
        credential_store: ICredentialStore,
        *,
        policy: LockoutPolicy | None = None,
        scope_validator: TenancyScopeValidator | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._settings = settings or get_settings()
        self.account_repo = account_repo
        self.company_repo = company_repo
        self.branch_repo = branch_repo
        self.credentials = credential_store
        self.policy = policy or LockoutPolicy.from_settings(self._settings)
        self.scope = scope_validator or TenancyScopeValidator()
        self._clock = clock

    # ---- Authentication ----

    async def authenticate(self, email: str, password: str) -> AccountSummary:
        """Authenticate by email and secret.

        Order: load account, reject locked (without hashing), inactive, and
        inactive-company accounts, verify the secret, then persist the
        lockout transition and last-login time.

        Returns:
            AccountSummary for the authenticated account.

        Raises:
            AccountNotFoundError / InvalidCredentialsError: Identical to callers.
            AccountLockedError: Lock expiry still in the future.
            AccountInactiveError: Account soft-deleted.
            TenantInactiveError: The account's company is inactive.
            LockoutConflictException: Lockout write lost every CAS retry.
        """
        try:
            normalized: str | None = EmailAddress(email).value
        except ValueError:
            normalized = None
        account = (
            await self.account_repo.get_by_email(normalized) if normalized else None
        )
        if account is None:
            dummy = await asyncio.to_thread(self.credentials.dummy_digest)
            await asyncio.to_thread(self.credentials.verify, password, dummy)
            logger.info("Login failed: no account for email %s", normalized)
            raise AccountNotFoundError()

        now = self._clock()
        if account.is_locked(now):
            logger.info(
                "Login rejected: account %s locked until %s",
                account.id,
                account.lock_expires_at,
            )
            raise AccountLockedError(account.lock_expires_at)
        if not account.is_active:
            logger.info("Login rejected: account %s inactive", account.id)
            raise AccountInactiveError()
        if account.role.requires_tenant:
            company = await self.company_repo.get_by_id(account.company_id or "")
            if company is None or not company.is_active:
                logger.info(
                    "Login rejected: company %s of account %s inactive",
                    account.company_id,
                    account.id,
                )
                raise TenantInactiveError(account.company_id)

        verified = await asyncio.to_thread(
            self.credentials.verify, password, account.hashed_password
        )
        if not verified:
            await self._record_failure(account, now)
            logger.info("Login failed: wrong password for account %s", account.id)
            raise InvalidCredentialsError()

        account = await self._write_login_state(
            account, lambda _: self.policy.register_success(), last_login_at=now
        )
        logger.info("Login succeeded for account %s", account.id)
        return AccountSummary.from_entity(account)

    async def _record_failure(self, account: AccountEntity, now: datetime) -> None:
        before = _login_state(account)
        updated = await self._write_login_state(
            account, lambda current: self.policy.register_failure(current, now)
        )
        after = _login_state(updated)
        if self.policy.just_locked(before, after, now):
            logger.warning(
                "Account %s locked until %s after %d failed login attempts",
                updated.id,
                updated.lock_expires_at,
                updated.failed_attempts,
            )

    async def _write_login_state(
        self,
        account: AccountEntity,
        transition: Callable[[LoginState], LoginState],
        last_login_at: datetime | None = None,
    ) -> AccountEntity:
        """Apply transition to the stored counters with compare-and-swap.

        On a lost race the account is reloaded and the transition re-applied
        to the fresh counters, up to lockout_cas_max_retries times.
        """
        max_retries = self._settings.lockout_cas_max_retries
        for attempt in range(1, max_retries + 1):
            current = _login_state(account)
            new_state = transition(current)
            if new_state == current and last_login_at is None:
                return account
            saved = await self.account_repo.save_login_state(
                account.id, account.version, new_state, last_login_at
            )
            if saved:
                account.failed_attempts = new_state.failed_attempts
                account.lock_expires_at = new_state.lock_expires_at
                account.version += 1
                if last_login_at is not None:
                    account.last_login_at = last_login_at
                return account
            logger.debug(
                "Login state CAS lost for account %s (attempt %d/%d)",
                account.id,
                attempt,
                max_retries,
            )
            reloaded = await self.account_repo.get_by_id(account.id)
            if reloaded is None:
                raise ResourceNotFoundException("account", account.id)
            account = reloaded
        logger.error(
            "Login state CAS exhausted for account %s after %d attempts",
            account.id,
            max_retries,
        )
        raise LockoutConflictException(account.id, max_retries)

    # ---- Authorization ----

    def authorize(
        self,
        account: AccountSummary,
        resource: ResourceDescriptor,
        action: str | Action,
    ) -> None:
        """Raise the specific scope failure if account may not act on resource."""
        self.scope.require(account, resource, action, now=self._clock())

    async def get_summary(self, account_id: str) -> AccountSummary | None:
        """Return the current summary of an account (e.g. for a bearer token subject)."""
        account = await self.account_repo.get_by_id(account_id)
        return AccountSummary.from_entity(account) if account else None

    async def get_account(
        self, account_id: str, actor: AccountSummary | None = None
    ) -> AccountEntity:
        """Return the account. With an actor, requires users:read in scope (or self)."""
        account = await self._load(account_id)
        if actor is not None and actor.id != account.id:
            self.authorize(actor, self._user_resource(account), Action.READ)
        return account

    async def list_accounts(
        self, actor: AccountSummary, query: AccountListQuery | None = None
    ) -> tuple[list[AccountEntity], int]:
        """List accounts visible to actor, newest first, with the total match count.

        Requires users:read. Rows are limited by the actor's scope filter:
        its company, and its branch below company_admin. Requested company or
        branch filters only narrow that scope; one outside it matches nothing.
        Vehicle-type restrictions apply to vehicle resources, not to accounts.

        Raises:
            PermissionDeniedError: Actor lacks users:read.
            InvalidRoleException: Unknown role filter.
            ValidationException: Negative skip or limit outside 1..100.
        """
        query = query or AccountListQuery()
        self.authorize(
            actor,
            ResourceDescriptor(
                category=ResourceCategory.USERS.value, company_id=actor.company_id
            ),
            Action.READ,
        )
        if query.skip < 0:
            raise ValidationException("skip must not be negative", field="skip")
        if not 1 <= query.limit <= 100:
            raise ValidationException("limit must be between 1 and 100", field="limit")
        role = Role.parse(query.role) if query.role else None

        scope = self.scope.scope_filter(actor)
        company_id = scope.company_id or query.company_id
        branch_id = scope.branch_id or query.branch_id
        if (query.company_id and query.company_id != company_id) or (
            query.branch_id and query.branch_id != branch_id
        ):
            return [], 0
        return await self.account_repo.list_accounts(
            company_id=company_id,
            branch_id=branch_id,
            role=role,
            is_active=query.is_active,
            search=query.search,
            skip=query.skip,
            limit=query.limit,
        )

    # ---- Creation ----

    @staticmethod
    def assignable_roles(actor_role: Role | str) -> tuple[Role, ...]:
        """Roles an actor with actor_role may assign."""
        return ASSIGNABLE_ROLES[Role.parse(actor_role)]

    async def create_account(
        self, data: AccountCreate, actor: AccountSummary | None = None
    ) -> AccountEntity:
        """Create an account.

        Non-super roles require an existing, active company and a branch of
        that company. The default permission matrix is applied unless
        data.permissions is given; default vehicle types are applied unless a
        non-empty list is given.

        Raises:
            InvalidRoleException: Unknown role.
            ValidationException: Missing/unknown company or branch, bad email,
                bad permissions or vehicle types.
            InvalidSecretException: Password too short.
            DuplicateEmailException: Email already registered.
            TenantInactiveError: Company inactive.
            AccountLimitExceededException: Company at its active-account limit.
            PermissionDeniedError / TenantMismatchError / BranchMismatchError:
                Actor may not create this account.
        """
        role = Role.parse(data.role)
        if actor is not None:
            self._ensure_can_assign(actor, role)
            self.authorize(
                actor,
                ResourceDescriptor(
                    category=ResourceCategory.USERS.value,
                    company_id=data.company_id,
                    branch_id=data.branch_id,
                ),
                Action.CREATE,
            )
        company_id, branch_id = await self._resolve_tenancy(
            role, data.company_id, data.branch_id
        )
        if company_id is not None:
            await self._ensure_capacity(company_id)

        email = _parse_email(data.email)
        if await self.account_repo.get_by_email(email.value) is not None:
            raise DuplicateEmailException()

        permissions = (
            _parse_permissions(data.permissions)
            if data.permissions is not None
            else PermissionMatrixBuilder.build(role)
        )
        explicit_types = (
            VehicleType.parse_list(data.vehicle_type_access)
            if data.vehicle_type_access
            else None
        )
        vehicle_types = PermissionMatrixBuilder.resolve_vehicle_types(
            role, explicit_types
        )
        hashed = await asyncio.to_thread(self.credentials.hash, data.password)

        account = AccountEntity(
            id=generate_cuid(),
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            email=email,
            hashed_password=hashed,
            role=role,
            permissions=permissions,
            vehicle_type_access=vehicle_types,
            company_id=company_id,
            branch_id=branch_id,
            phone=data.phone,
            created_by=actor.id if actor else None,
        )
        created = await self.account_repo.add(account)
        logger.info(
            "Created account %s role=%s company=%s branch=%s",
            created.id,
            role.value,
            company_id,
            branch_id,
        )
        return created

    async def bootstrap_super_admin(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> AccountEntity:
        """Create a super_admin account (no company or branch). Trusted call."""
        return await self.create_account(
            AccountCreate(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password,
                role=Role.SUPER_ADMIN.value,
            )
        )

    async def _resolve_tenancy(
        self, role: Role, company_id: str | None, branch_id: str | None
    ) -> tuple[str | None, str | None]:
        """Validate company/branch for role and return them."""
        if not role.requires_tenant and not company_id and not branch_id:
            return None, None
        if not company_id:
            raise ValidationException(
                f"Company is required for role {role.value}", field="company_id"
            )
        if not branch_id:
            raise ValidationException(
                f"Branch is required for role {role.value}", field="branch_id"
            )
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise ValidationException("Company does not exist", field="company_id")
        if not company.is_active:
            raise TenantInactiveError(company_id)
        branch = await self.branch_repo.get_by_id(branch_id)
        if branch is None or branch.company_id != company_id:
            raise ValidationException(
                "Branch does not exist in this company", field="branch_id"
            )
        return company_id, branch_id

    async def _ensure_capacity(self, company_id: str) -> None:
        limit = self._settings.max_active_accounts_per_company
        if await self.account_repo.count_active_by_company(company_id) >= limit:
            raise AccountLimitExceededException(company_id, limit)

    # ---- Administration ----

    async def change_role(
        self,
        account_id: str,
        new_role: Role | str,
        actor: AccountSummary | None = None,
    ) -> AccountEntity:
        """Change role and re-derive the permission matrix.

        The vehicle-type list is replaced by the new role's default only when
        it is empty or equals the old role's default; a custom list survives.
        """
        role = Role.parse(new_role)
        account = await self._load(account_id)
        if actor is not None:
            self._ensure_not_self(actor, account, "role")
            self._ensure_can_manage(actor, account)
            self._ensure_can_assign(actor, role)
        if role.requires_tenant and (not account.company_id or not account.branch_id):
            raise ValidationException(
                f"Company and branch are required for role {role.value}",
                field="role",
            )

        old_default = PermissionMatrixBuilder.default_vehicle_types(account.role)
        current_types = account.vehicle_type_access
        if not current_types or set(current_types) == set(old_default):
            account.vehicle_type_access = PermissionMatrixBuilder.default_vehicle_types(
                role
            )
        old_role = account.role
        account.role = role
        account.permissions = PermissionMatrixBuilder.build(role)
        account.validate()
        updated = await self.account_repo.update(account)
        logger.info(
            "Changed role of account %s from %s to %s",
            account.id,
            old_role.value,
            role.value,
        )
        return updated

    async def set_vehicle_type_access(
        self,
        account_id: str,
        vehicle_types: list[str],
        actor: AccountSummary | None = None,
    ) -> AccountEntity:
        """Assign an explicit vehicle-type list (empty list means all types)."""
        account = await self._load(account_id)
        if actor is not None:
            self._ensure_can_manage(actor, account)
        account.vehicle_type_access = VehicleType.parse_list(vehicle_types)
        return await self.account_repo.update(account)

    async def override_permissions(
        self,
        account_id: str,
        permissions: dict,
        actor: AccountSummary | None = None,
    ) -> AccountEntity:
        """Replace the permission matrix with an explicit one.

        A non-super actor cannot grant a flag it does not hold itself.
        """
        matrix = _parse_permissions(permissions)
        account = await self._load(account_id)
        if actor is not None:
            self._ensure_can_manage(actor, account)
            if actor.role is not Role.SUPER_ADMIN:
                for category in ResourceCategory:
                    for action in Action:
                        if matrix.allows(category, action) and not actor.permissions.allows(
                            category, action
                        ):
                            raise PermissionDeniedError(category.value, action.value)
        account.permissions = matrix
        updated = await self.account_repo.update(account)
        logger.info("Overrode permissions of account %s", account.id)
        return updated

    async def change_password(
        self, account_id: str, current_password: str, new_password: str
    ) -> None:
        """Change own password after verifying the current one.

        The current password goes through the same lockout as login: a locked
        account is rejected without hashing, and a wrong current password is
        recorded as a failed attempt.

        Raises:
            AccountLockedError: Lock expiry still in the future.
            InvalidCredentialsError: Current password does not verify.
            InvalidSecretException: New password too short.
        """
        account = await self._load(account_id)
        now = self._clock()
        if account.is_locked(now):
            raise AccountLockedError(account.lock_expires_at)
        ok = await asyncio.to_thread(
            self.credentials.verify, current_password, account.hashed_password
        )
        if not ok:
            await self._record_failure(account, now)
            logger.info(
                "Password change rejected: wrong current password for account %s",
                account.id,
            )
            raise InvalidCredentialsError()
        account.hashed_password = await asyncio.to_thread(
            self.credentials.hash, new_password
        )
        await self.account_repo.update(account)
        logger.info("Password changed for account %s", account.id)

    async def reset_password(
        self,
        account_id: str,
        new_password: str,
        actor: AccountSummary | None = None,
    ) -> None:
        """Administrative password reset. Also clears lockout counters."""
        account = await self._load(account_id)
        if actor is not None:
            self._ensure_can_manage(actor, account)
        account.hashed_password = await asyncio.to_thread(
            self.credentials.hash, new_password
        )
        account = await self.account_repo.update(account)
        await self._write_login_state(
            account, lambda _: self.policy.register_success()
        )
        logger.info(
            "Password reset for account %s by %s",
            account.id,
            actor.id if actor else "system",
        )

    async def set_active(
        self,
        account_id: str,
        is_active: bool,
        actor: AccountSummary | None = None,
    ) -> AccountEntity:
        """Activate or deactivate (soft delete) an account."""
        account = await self._load(account_id)
        if actor is not None:
            self._ensure_not_self(actor, account, "is_active")
            self._ensure_can_manage(actor, account)
        if account.is_active == is_active:
            return account
        if is_active and account.company_id:
            await self._ensure_capacity(account.company_id)
        account.is_active = is_active
        updated = await self.account_repo.update(account)
        logger.info(
            "Account %s %s",
            account.id,
            "activated" if is_active else "deactivated",
        )
        return updated

    # ---- Helpers ----

    async def _load(self, account_id: str) -> AccountEntity:
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        return account

    @staticmethod
    def _user_resource(account: AccountEntity) -> ResourceDescriptor:
        return ResourceDescriptor(
            category=ResourceCategory.USERS.value,
            company_id=account.company_id,
            branch_id=account.branch_id,
        )

    @staticmethod
    def _ensure_not_self(
        actor: AccountSummary, account: AccountEntity, field: str
    ) -> None:
        if actor.id == account.id:
            raise ValidationException(
                "You cannot change this on your own account", field=field
            )

    def _ensure_can_assign(self, actor: AccountSummary, role: Role) -> None:
        if role not in self.assignable_roles(actor.role):
            raise PermissionDeniedError(
                ResourceCategory.USERS.value, f"assign {role.value}"
            )

    def _ensure_can_manage(self, actor: AccountSummary, account: AccountEntity) -> None:
        """Actor needs users:update in the target's scope and must outrank its role."""
        self.authorize(actor, self._user_resource(account), Action.UPDATE)
        if actor.role is Role.SUPER_ADMIN:
            return
        if account.role not in self.assignable_roles(actor.role):
            raise PermissionDeniedError(
                ResourceCategory.USERS.value, f"manage {account.role.value}"
            )
