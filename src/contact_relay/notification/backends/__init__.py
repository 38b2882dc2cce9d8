"""Notification backends module."""

from dataclasses import dataclass, field


@dataclass
class NotificationData:
    """Details of a contact request, as rendered in the notification email."""

    name: str
    email: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationMessage:
    """A rendered notification email."""

    subject: str
    html: str
