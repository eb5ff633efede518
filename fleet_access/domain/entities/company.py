"""Company (tenant) domain entity."""

from dataclasses import dataclass, field

from fleet_access.domain.exceptions import ValidationException
from fleet_access.domain.value_objects import CompanyAdministrator, ContactInfo, TaxId


@dataclass
class CompanyEntity:
    """Domain entity for a company, the top-level tenant boundary.

    administrator is the embedded descriptor of the account that
    administers the company. Its account_id is filled in the second phase
    of the bootstrap protocol (see link_administrator).
    """

    id: str
    tax_id: TaxId
    name: str
    contact: ContactInfo = field(default_factory=ContactInfo)
    is_active: bool = True
    administrator: CompanyAdministrator | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate company business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Company ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Company name is required", field="name")

    @property
    def administrator_account_id(self) -> str | None:
        return self.administrator.account_id if self.administrator else None

    def link_administrator(self, account_id: str) -> bool:
        """Set the administrator back-reference. Idempotent for the same account.

        Args:
            account_id: Account that administers this company. The caller
                checks that the account belongs to this company.

        Returns:
            True if the back-reference changed, False if it was already set
            to account_id.

        Raises:
            ValueError: If there is no administrator descriptor, or the
                company is already linked to a different account.
        """
        if self.administrator is None:
            raise ValueError("Company has no administrator descriptor")
        current = self.administrator.account_id
        if current == account_id:
            return False
        if current is not None:
            raise ValueError("Company administrator is already linked to another account")
        self.administrator = self.administrator.linked_to(account_id)
        return True

    def activate(self) -> None:
        """Mark company active. Idempotent."""
        self.is_active = True

    def deactivate(self) -> None:
        """Mark company inactive. Accounts are not cascaded; they fail with TenantInactive."""
        self.is_active = False
