"""Redaction of contact details before they reach the logs."""

from django.conf import settings

from contact_relay.tools.email import mask_email

REDACTED = "<redacted>"
PERSONAL_FIELDS = frozenset({"name", "phone", "linkedin", "message"})


def redact_contact(details: dict) -> dict:
    """
    Return contact details fit for logging.

    Unless settings.CONTACT_RELAY_LOG_CONTACT_DETAILS is enabled, the email keeps
    only its domain and the other personal fields are replaced by a placeholder.
    Empty values stay as they are so the log still tells which fields were filled.
    """
    if getattr(settings, "CONTACT_RELAY_LOG_CONTACT_DETAILS", False):
        return dict(details)

    redacted = {}
    for key, value in details.items():
        if key == "email":
            redacted[key] = mask_email(value)
        elif key in PERSONAL_FIELDS and value:
            redacted[key] = REDACTED
        elif isinstance(value, dict):
            redacted[key] = redact_contact(value)
        else:
            redacted[key] = value
    return redacted
