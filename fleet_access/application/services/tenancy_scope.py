"""Tenancy scope validator: may this account perform this action on this resource?

Checks run in order and stop at the first failure:

1. account inactive (AccountInactiveError) or locked (AccountLockedError)
2. action flag false for the category (PermissionDeniedError)
3. super_admin: allowed (global scope)
4. resource company differs from account company (TenantMismatchError)
5. role below company_admin and resource branch differs (BranchMismatchError)
6. vehicle type not in the account's list, empty list = all (VehicleTypeDeniedError)

Capability and tenancy are independent: a company_admin with full CRUD on
companies is still denied another company's resources.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.dtos.authorization import ResourceDescriptor, ScopeFilter
from fleet_access.application.services.permission_matrix import ALL_VEHICLE_TYPES
from fleet_access.domain.enums import Action, ResourceCategory, Role, VehicleType
from fleet_access.domain.exceptions import (
    AccountInactiveError,
    AccountLockedError,
    BranchMismatchError,
    FleetAccessException,
    PermissionDeniedError,
    TenantMismatchError,
    ValidationException,
    VehicleTypeDeniedError,
)
from fleet_access.shared.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class TenancyScopeValidator:
    """Evaluates capability and company/branch/vehicle-type scope for an account."""

    def check(
        self,
        account: AccountSummary,
        resource: ResourceDescriptor,
        action: str | Action,
        now: datetime | None = None,
    ) -> FleetAccessException | None:
        """Return the first failure for the request, or None when allowed.

        Unknown category, action, or vehicle type strings are returned as
        ValidationException (after the account-state check).
        """
        now = now or utc_now()
        if not account.is_active:
            return AccountInactiveError()
        lock_expires_at = ensure_utc(account.lock_expires_at)
        if lock_expires_at is not None and lock_expires_at > now:
            return AccountLockedError(lock_expires_at)

        try:
            category = ResourceCategory.parse(resource.category)
            parsed_action = Action.parse(action)
            vehicle_type = (
                VehicleType.parse(resource.vehicle_type)
                if resource.vehicle_type
                else None
            )
        except ValidationException as e:
            return e

        if not account.permissions.allows(category, parsed_action):
            return PermissionDeniedError(category.value, parsed_action.value)

        if account.role is Role.SUPER_ADMIN:
            return None

        if resource.company_id is None or resource.company_id != account.company_id:
            return TenantMismatchError()

        if (
            resource.branch_id is not None
            and account.role.is_below(Role.COMPANY_ADMIN)
            and resource.branch_id != account.branch_id
        ):
            return BranchMismatchError()

        if (
            vehicle_type is not None
            and account.vehicle_type_access
            and vehicle_type not in account.vehicle_type_access
        ):
            return VehicleTypeDeniedError(vehicle_type.value)

        return None

    def is_allowed(
        self,
        account: AccountSummary,
        resource: ResourceDescriptor,
        action: str | Action,
        now: datetime | None = None,
    ) -> bool:
        """Return True if check() finds no failure."""
        return self.check(account, resource, action, now) is None

    def require(
        self,
        account: AccountSummary,
        resource: ResourceDescriptor,
        action: str | Action,
        now: datetime | None = None,
    ) -> None:
        """Raise the specific failure if the action is not allowed."""
        failure = self.check(account, resource, action, now)
        if failure is not None:
            logger.info(
                "Authorization denied for account %s: %s %s (%s)",
                account.id,
                action,
                resource.category,
                failure.error_code,
            )
            raise failure

    @staticmethod
    def accessible_vehicle_types(account: AccountSummary) -> tuple[VehicleType, ...]:
        """Concrete vehicle types the account may act on (empty list means all)."""
        if account.role is Role.SUPER_ADMIN or not account.vehicle_type_access:
            return ALL_VEHICLE_TYPES
        return account.vehicle_type_access

    @staticmethod
    def scope_filter(account: AccountSummary) -> ScopeFilter:
        """Filter for list queries: None fields are unrestricted."""
        if account.role is Role.SUPER_ADMIN:
            return ScopeFilter(company_id=None, branch_id=None, vehicle_types=None)
        branch_id = (
            account.branch_id if account.role.is_below(Role.COMPANY_ADMIN) else None
        )
        vehicle_types = account.vehicle_type_access or None
        return ScopeFilter(
            company_id=account.company_id,
            branch_id=branch_id,
            vehicle_types=vehicle_types,
        )
