"""Delivery of the notification email through the configured backend."""

import logging

from contact_relay.notification import notification
from contact_relay.notification.backends import NotificationData
from contact_relay.notification.rendering import render_notification
from contact_relay.tools.redaction import redact_contact

logger = logging.getLogger(__name__)


def send_contact_notification(data: NotificationData, timeout: int = None) -> dict:
    """Render the notification for a contact request and send it."""
    logger.info(
        "Email data: %s",
        redact_contact({"name": data.name, "email": data.email, **data.attributes}),
    )
    return notification.send(render_notification(data), timeout)
