"""Dummy notification backend."""

from contact_relay.notification.backends import NotificationMessage

from .base import BaseNotificationBackend


class DummyNotificationBackend(BaseNotificationBackend):
    """Dummy notification backend doing nothing."""

    def send(self, message: NotificationMessage, timeout: int = None) -> dict:
        """Send the notification email."""
        return {}
