"""Dummy subscription backend."""

from contact_relay.subscription.backends import SubscriberData

from .base import BaseSubscriptionBackend


class DummySubscriptionBackend(BaseSubscriptionBackend):
    """Dummy subscription backend doing nothing."""

    def subscribe(self, subscriber: SubscriberData, timeout: int = None) -> dict:
        """Register a subscriber."""
        return {}
