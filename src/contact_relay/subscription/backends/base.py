"""Subscription backend base module."""

from abc import ABC, abstractmethod

from contact_relay.subscription.backends import SubscriberData


class BaseSubscriptionBackend(ABC):
    """Base class for all subscription backends."""

    @abstractmethod
    def subscribe(self, subscriber: SubscriberData, timeout: int = None) -> dict:
        """
        Register a subscriber on the given lists.

        Args:
            subscriber: Subscriber information, list ids and attributes
            timeout: API request timeout in seconds

        Returns:
            dict: Service response

        Raises:
            SubscriptionRejectedError: If the service refuses the subscriber

        """
