"""Contact relay application configuration."""

from django.apps import AppConfig


class ContactRelayConfig(AppConfig):
    """Declare the contact relay application."""

    name = "contact_relay"
    verbose_name = "Contact relay"
