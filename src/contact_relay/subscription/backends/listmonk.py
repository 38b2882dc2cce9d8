"""Listmonk mailing-list manager integration."""

import logging

import requests

from contact_relay.exceptions import SubscriptionRejectedError
from contact_relay.subscription.backends import SubscriberData
from contact_relay.tools.redaction import redact_contact

from .base import BaseSubscriptionBackend

logger = logging.getLogger(__name__)


class ListmonkBackend(BaseSubscriptionBackend):
    """
    Listmonk integration through its private subscribers API.

    Subscribers are created enabled, with their list subscriptions pre-confirmed,
    so no opt-in email is sent by Listmonk.
    """

    def __init__(self, base_url: str, username: str, password: str):
        """Configure the Listmonk backend."""
        self.base_url = base_url.rstrip("/")
        self.username = username
        self._password = password

    @property
    def subscribers_url(self):
        """Return the subscribers endpoint."""
        return f"{self.base_url}/api/subscribers"

    def subscribe(self, subscriber: SubscriberData, timeout: int = None) -> dict:
        """
        Create a Listmonk subscriber.

        Args:
            subscriber: Subscriber information, list ids and attributes
            timeout: API request timeout in seconds

        Returns:
            dict: Listmonk API response

        Raises:
            SubscriptionRejectedError: If Listmonk answers with a non-2xx status,
                carrying the raw response body.
            requests.RequestException: On transport failures.

        """
        payload = {
            "email": subscriber.email,
            "name": subscriber.name,
            "status": "enabled",
            "lists": subscriber.list_ids,
            "attribs": subscriber.attributes,
            "preconfirm_subscriptions": True,
        }

        logger.info("Submitting to Listmonk: %s", redact_contact(payload))

        response = requests.post(
            self.subscribers_url,
            json=payload,
            auth=(self.username, self._password),
            timeout=timeout or 10,
        )

        logger.info("Listmonk response status: %s", response.status_code)
        logger.debug("Listmonk response: %s", response.text)

        if not response.ok:
            logger.error("Listmonk error: %s", response.text)
            raise SubscriptionRejectedError(response.text, status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            return {}
