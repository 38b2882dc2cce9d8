"""Notification tasks module."""

from celery import shared_task

from contact_relay.notification.backends import NotificationData
from contact_relay.notification.delivery import send_contact_notification as deliver


@shared_task
def send_contact_notification(
    name: str,
    email: str,
    attributes: dict[str, str] | None = None,
    timeout: int = None,
):
    """Send the notification email of a contact request."""
    data = NotificationData(name=name, email=email, attributes=attributes or {})
    return deliver(data, timeout)
