"""Branch domain entity."""

from dataclasses import dataclass, field

from fleet_access.domain.exceptions import ValidationException
from fleet_access.domain.value_objects import BranchCode, ContactInfo


@dataclass
class BranchEntity:
    """Domain entity for a branch, the operational unit below a company.

    (company_id, code) is unique; uniqueness is enforced by the repository.
    """

    id: str
    company_id: str
    name: str
    code: BranchCode
    contact: ContactInfo = field(default_factory=ContactInfo)
    is_active: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate branch business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Branch ID is required", field="id")
        if not self.company_id:
            raise ValidationException("Company is required", field="company_id")
        if not self.name or not self.name.strip():
            raise ValidationException("Branch name is required", field="name")

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False
