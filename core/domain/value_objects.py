"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
import uuid
from abc import ABC
from dataclasses import dataclass
from enum import Enum

LICENSE_KEY_PATTERN = re.compile(r"^APP-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}$")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class LicenseKeyString(ValueObject):
    """
    A normalized license key (``APP-XXXX-YYYY-ZZZZ``).

    Use ``LicenseKeyString.parse`` to trim and upper-case raw input.
    """

    value: str

    def __post_init__(self):
        """Validate key format."""
        if not LICENSE_KEY_PATTERN.match(self.value or ""):
            raise ValueError(f"Invalid license key format: {self.value}")

    @classmethod
    def normalize(cls, raw: str) -> str:
        """Trim whitespace and upper-case a raw key."""
        return (raw or "").strip().upper()

    @classmethod
    def parse(cls, raw: str) -> "LicenseKeyString":
        """Normalize and validate a raw key."""
        return cls(cls.normalize(raw))

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    UNUSED = "unused"
    ACTIVE = "active"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class Role(Enum):
    """Account roles known to the license service."""

    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Caller(ValueObject):
    """Authenticated caller extracted from a bearer credential."""

    id: uuid.UUID
    email: str
    role: str

    def has_role(self, *roles: Role) -> bool:
        """Check whether the caller holds one of the given roles."""
        return self.role in {role.value for role in roles}

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
