"""Contact relay exceptions module."""

SUBSCRIPTION_ERROR_PREFIX = "Subscription failed:"


class ContactRelayError(Exception):
    """Base exception for all contact relay exceptions."""


class InvalidBackendError(ContactRelayError):
    """Exception raised when the backend is invalid."""


class SubscriptionError(ContactRelayError):
    """Exception raised when the subscriber registration fails."""


class SubscriptionRejectedError(SubscriptionError):
    """The mailing-list manager answered with a non-2xx status."""

    def __init__(self, detail: str, status_code: int | None = None):
        """Keep the raw upstream body, it is relayed verbatim to the client."""
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class NotificationError(ContactRelayError):
    """Exception raised when the notification email cannot be sent."""


class NotificationDeliveryError(NotificationError):
    """The email-delivery provider reported an error."""


class ServiceNotConfiguredError(NotificationError):
    """The email-delivery provider has no credential."""


class InvalidTransitionError(ContactRelayError):
    """The requested action is not allowed in the current state of the contact form."""
