"""Resend email-delivery integration."""

import logging

import requests

from contact_relay.exceptions import NotificationDeliveryError, ServiceNotConfiguredError
from contact_relay.notification.backends import NotificationMessage

from .base import BaseNotificationBackend

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendBackend(BaseNotificationBackend):
    """
    Resend integration.

    Sender and recipient are part of the backend configuration and never come from
    the contact form, which keeps visitors from choosing where the email goes.
    """

    def __init__(
        self,
        api_key: str | None,
        recipient: str,
        sender: str = "onboarding@resend.dev",
        api_url: str = RESEND_API_URL,
    ):
        """Configure the Resend backend, a missing api_key disables sending."""
        self._api_key = api_key or None
        self.recipient = recipient
        self.sender = sender
        self.api_url = api_url

    @property
    def is_configured(self):
        """Return True when an api key is available."""
        return self._api_key is not None

    def send(self, message: NotificationMessage, timeout: int = None) -> dict:
        """
        Send the notification email through Resend.

        Raises:
            ServiceNotConfiguredError: If no api key is configured, nothing is sent.
            NotificationDeliveryError: If Resend answers with a non-2xx status.
            requests.RequestException: On transport failures.

        """
        if not self.is_configured:
            logger.error("Resend API key not configured")
            raise ServiceNotConfiguredError("Email service not configured")

        response = requests.post(
            self.api_url,
            json={
                "from": self.sender,
                "to": [self.recipient],
                "subject": message.subject,
                "html": message.html,
            },
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=timeout or 10,
        )

        if not response.ok:
            logger.error("Error sending email (status %s): %s", response.status_code, response.text)
            raise NotificationDeliveryError("Failed to send email notification")

        try:
            return response.json()
        except ValueError:
            return {}
