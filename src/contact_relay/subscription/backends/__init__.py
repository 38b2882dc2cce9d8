"""Subscription backends module."""

from dataclasses import dataclass, field


@dataclass
class SubscriberData:
    """Subscriber data for mailing-list manager integration."""

    email: str
    name: str
    list_ids: list[int] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
