"""Notification backend base module."""

from abc import ABC, abstractmethod

from contact_relay.notification.backends import NotificationMessage


class BaseNotificationBackend(ABC):
    """Base class for all notification backends."""

    @abstractmethod
    def send(self, message: NotificationMessage, timeout: int = None) -> dict:
        """
        Send the notification email to the configured recipient.

        Args:
            message: Rendered subject and HTML body
            timeout: API request timeout in seconds

        Returns:
            dict: Service response

        Raises:
            ServiceNotConfiguredError: If the backend has no credential
            NotificationDeliveryError: If the provider reports an error

        """
