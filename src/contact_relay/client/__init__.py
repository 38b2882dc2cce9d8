"""Contact form client."""

from .api import ContactApiClient, HandlerResult
from .form import ContactForm, FormState, NewsletterState, SubmissionOutcome, Toast

__all__ = [
    "ContactApiClient",
    "ContactForm",
    "FormState",
    "HandlerResult",
    "NewsletterState",
    "SubmissionOutcome",
    "Toast",
]
