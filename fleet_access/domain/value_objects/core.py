"""Domain value objects for fleet access.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value. Normalization (case,
whitespace) happens on construction so equality is on the canonical form.
"""

import re
from dataclasses import dataclass

# Pragmatic address shape check; full RFC validation happens at the API edge (EmailStr).
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_BRANCH_CODE_RE = re.compile(r"^[A-Z0-9_-]+$")


@dataclass(frozen=True)
class EmailAddress:
    """Value object for an account email.

    Emails are globally unique and compared case-insensitively, so the
    value is stripped and lower-cased on construction.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Email must be a non-empty string")
        normalized = self.value.strip().lower()
        if not _EMAIL_RE.match(normalized):
            raise ValueError(f"Invalid email address: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TaxId:
    """Value object for a company tax identifier (upper-cased, unique across companies)."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Tax id must be a non-empty string")
        normalized = self.value.strip().upper()
        if len(normalized) > 20:
            raise ValueError("Tax id must not exceed 20 characters")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BranchCode:
    """Value object for a branch code: 1-10 characters, upper-cased, unique per company."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Branch code must be a non-empty string")
        normalized = self.value.strip().upper()
        if len(normalized) > 10:
            raise ValueError("Branch code must be at most 10 characters")
        if not _BRANCH_CODE_RE.match(normalized):
            raise ValueError(
                "Branch code must be alphanumeric with optional hyphens or underscores"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ContactInfo:
    """Postal and contact details for a company or branch. All fields optional."""

    email: str | None = None
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "email": self.email,
            "phone": self.phone,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "ContactInfo":
        if not data:
            return cls()
        return cls(
            email=data.get("email"),
            phone=data.get("phone"),
            street=data.get("street"),
            city=data.get("city"),
            state=data.get("state"),
            postal_code=data.get("postal_code"),
            country=data.get("country"),
        )


@dataclass(frozen=True)
class CompanyAdministrator:
    """Administrator descriptor embedded in a company.

    account_id is the back-reference to the administering Account. It is
    None between the two phases of company bootstrap (company created, then
    its first account created, then linked).
    """

    first_name: str
    last_name: str
    email: EmailAddress
    phone: str | None = None
    can_manage_users: bool = True
    account_id: str | None = None

    def __post_init__(self) -> None:
        if not self.first_name or not self.first_name.strip():
            raise ValueError("Administrator first name is required")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Administrator last name is required")

    @property
    def is_linked(self) -> bool:
        return self.account_id is not None

    def linked_to(self, account_id: str) -> "CompanyAdministrator":
        """Return a copy with the account back-reference set."""
        return CompanyAdministrator(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            can_manage_users=self.can_manage_users,
            account_id=account_id,
        )

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email.value,
            "phone": self.phone,
            "can_manage_users": self.can_manage_users,
            "account_id": self.account_id,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "CompanyAdministrator | None":
        if not data:
            return None
        return cls(
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=EmailAddress(data["email"]),
            phone=data.get("phone"),
            can_manage_users=bool(data.get("can_manage_users", True)),
            account_id=data.get("account_id"),
        )
