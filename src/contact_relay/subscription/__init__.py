"""Subscription module."""

from django.utils.functional import LazyObject

from contact_relay.handler import BackendHandler


class DefaultSubscription(LazyObject):
    """Lazy object to handle the subscription backend."""

    def _setup(self):
        """Configure the subscription backend."""
        self._wrapped = subscription_handler()


subscription_handler = BackendHandler("CONTACT_RELAY_SUBSCRIPTION")
subscription = DefaultSubscription()
