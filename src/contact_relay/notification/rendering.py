"""Rendering of the notification email."""

from django.conf import settings
from django.template.loader import render_to_string

from contact_relay.notification.backends import NotificationData, NotificationMessage
from contact_relay.submission import NOTIFICATION_ATTRIBUTE_FIELDS, compact_attributes

DEFAULT_TEMPLATE = "contact_relay/notification_email.html"
LINK_SCHEMES = ("http://", "https://")


def profile_url(value):
    """Return the profile link when it is a web address, None otherwise."""
    if value.strip().lower().startswith(LINK_SCHEMES):
        return value.strip()
    return None


def render_notification(data: NotificationData) -> NotificationMessage:
    """Render the subject and HTML body announcing a contact request."""
    attributes = compact_attributes(data.attributes, NOTIFICATION_ATTRIBUTE_FIELDS)
    html = render_to_string(
        getattr(settings, "CONTACT_RELAY_NOTIFICATION_TEMPLATE", DEFAULT_TEMPLATE),
        {
            "name": data.name,
            "email": data.email,
            "owner_name": getattr(settings, "CONTACT_RELAY_OWNER_NAME", ""),
            "site_domain": getattr(settings, "CONTACT_RELAY_SITE_DOMAIN", ""),
            **attributes,
            "linkedin_url": profile_url(attributes.get("linkedin", "")),
        },
    )
    return NotificationMessage(subject=f"New Contact Form Submission from {data.name}", html=html)
