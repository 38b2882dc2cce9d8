"""Contact form submission and the attribute projections sent downstream."""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from enum import StrEnum

LIST_ATTRIBUTE_FIELDS = ("role", "linkedin", "phone")
# The free text message is only ever carried by the notification email.
NOTIFICATION_ATTRIBUTE_FIELDS = (*LIST_ATTRIBUTE_FIELDS, "message")
REQUIRED_FIELDS = ("name", "email", "role")


class Role(StrEnum):
    """Roles a visitor can pick in the contact form."""

    DEVELOPER = "Developer"
    DESIGNER = "Designer"
    PROJECT_MANAGER = "Project Manager"
    PRODUCT_MANAGER = "Product Manager"
    STUDENT = "Student"
    OTHER = "Other"


ROLE_VALUES = frozenset(role.value for role in Role)


def compact_attributes(values: Mapping, fields: Iterable[str]) -> dict[str, str]:
    """Keep the given fields holding a non-empty string, in field order."""
    return {field: values[field] for field in fields if isinstance(values.get(field), str) and values[field]}


@dataclass(frozen=True)
class Submission:
    """One contact form fill."""

    name: str = ""
    email: str = ""
    role: str = ""
    linkedin: str = ""
    phone: str = ""
    message: str = ""
    subscribe_to_updates: bool = True

    def __post_init__(self):
        """Reject roles outside of the closed set."""
        if self.role and self.role not in ROLE_VALUES:
            raise ValueError(f"Unknown role {self.role!r}")

    def is_complete(self) -> bool:
        """Return True when every required field is filled."""
        return all(getattr(self, field) for field in REQUIRED_FIELDS)

    def list_attributes(self) -> dict[str, str]:
        """Attributes stored on the mailing-list profile."""
        return compact_attributes(asdict(self), LIST_ATTRIBUTE_FIELDS)

    def notification_attributes(self) -> dict[str, str]:
        """Attributes rendered in the notification email."""
        return compact_attributes(asdict(self), NOTIFICATION_ATTRIBUTE_FIELDS)
