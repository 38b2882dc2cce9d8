"""Notification module."""

from django.utils.functional import LazyObject

from contact_relay.handler import BackendHandler


class DefaultNotification(LazyObject):
    """Lazy object to handle the notification backend."""

    def _setup(self):
        """Configure the notification backend."""
        self._wrapped = notification_handler()


notification_handler = BackendHandler("CONTACT_RELAY_NOTIFICATION")
notification = DefaultNotification()
