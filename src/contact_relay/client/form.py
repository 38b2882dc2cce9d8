"""
Contact form controller.

The controller owns the form state and sequences the two handler calls: the
subscription is the record of the contact request and decides the outcome shown
to the visitor, the notification email is only requested once the subscription
succeeded and its outcome is logged, never reported.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import StrEnum

import requests

from contact_relay.exceptions import InvalidTransitionError
from contact_relay.lists import ListTokens
from contact_relay.submission import Submission

from .api import ContactApiClient, HandlerResult
from .messages import GENERIC_ERROR_MESSAGE, extract_error_message

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."
TRANSPORT_ERROR_MESSAGE = "Something went wrong. Please try again later."


class FormState(StrEnum):
    """States of the contact form."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class NewsletterState(StrEnum):
    """States of the newsletter opt-in checkbox."""

    SUBSCRIBED = "subscribed"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    UNSUBSCRIBED = "unsubscribed"


@dataclass(frozen=True)
class Toast:
    """Transient message displayed to the visitor."""

    variant: str
    message: str


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of a submit action."""

    state: FormState
    error: str | None = None
    # Detached notification request, only its logging depends on it.
    notification: Future | None = None

    @property
    def succeeded(self):
        """Return True when the form reached the submitted state."""
        return self.state == FormState.SUBMITTED


def _log_notification_outcome(future: Future):
    exc = future.exception()
    if exc is not None:
        logger.error("Error sending email notification: %r", exc)
        return
    result = future.result()
    if not result.success:
        logger.error("Email notification failed: %s", result.error)
    else:
        logger.info("Email notification sent")


class ContactForm:
    """Controller of one contact form."""

    def __init__(
        self,
        client: ContactApiClient,
        list_tokens: ListTokens,
        on_toast: Callable[[Toast], None] | None = None,
        executor: Executor | None = None,
    ):
        """Start with an empty submission, opted in to the newsletter."""
        self.client = client
        self.list_tokens = list_tokens
        self.on_toast = on_toast
        self._executor = executor
        self._owns_executor = executor is None
        self.submission = Submission()
        self.state = FormState.IDLE
        self.newsletter_state = NewsletterState.SUBSCRIBED
        self.toasts: list[Toast] = []

    @property
    def executor(self) -> Executor:
        """Return the executor running the notification requests."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="contact-notification")
        return self._executor

    def close(self):
        """Release the notification worker created by the form, letting pending requests finish."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def __enter__(self):
        """Use the form as a context manager closing its notification worker."""
        return self

    def __exit__(self, *exc_info):
        """Close the form."""
        self.close()

    @property
    def can_submit(self) -> bool:
        """Return True when the submit control is enabled."""
        return self.state == FormState.IDLE and self.submission.is_complete()

    @property
    def is_busy(self) -> bool:
        """Return True while a submission is in flight."""
        return self.state == FormState.SUBMITTING

    def update(self, field: str, value: str):
        """Set a text field of the submission."""
        if self.state == FormState.SUBMITTED:
            raise InvalidTransitionError("The form has already been submitted")
        if field == "subscribe_to_updates":
            raise ValueError("Use toggle_newsletter() to change the newsletter subscription")
        self.submission = replace(self.submission, **{field: value})

    def toggle_newsletter(self):
        """Flip the newsletter checkbox, opting out needs a confirmation."""
        if self.newsletter_state == NewsletterState.SUBSCRIBED:
            self.newsletter_state = NewsletterState.AWAITING_CONFIRMATION
        elif self.newsletter_state == NewsletterState.UNSUBSCRIBED:
            self._set_newsletter(True)

    def confirm_unsubscribe(self):
        """Commit the newsletter opt-out."""
        self._require_confirmation_pending()
        self._set_newsletter(False)

    def cancel_unsubscribe(self):
        """Keep the newsletter subscription."""
        self._require_confirmation_pending()
        self.newsletter_state = NewsletterState.SUBSCRIBED

    def _require_confirmation_pending(self):
        if self.newsletter_state != NewsletterState.AWAITING_CONFIRMATION:
            raise InvalidTransitionError("No newsletter opt-out is awaiting confirmation")

    def _set_newsletter(self, subscribed: bool):
        self.submission = replace(self.submission, subscribe_to_updates=subscribed)
        self.newsletter_state = NewsletterState.SUBSCRIBED if subscribed else NewsletterState.UNSUBSCRIBED

    def _toast(self, variant, message):
        toast = Toast(variant=variant, message=message)
        self.toasts.append(toast)
        if self.on_toast is not None:
            self.on_toast(toast)

    def dispatch_notification(self, submission: Submission) -> Future:
        """Request the notification email without waiting for it."""
        future = self.executor.submit(self.client.send_notification, submission)
        future.add_done_callback(_log_notification_outcome)
        return future

    def submit(self) -> SubmissionOutcome:
        """
        Send the current submission.

        Raises:
            InvalidTransitionError: If the submit control is disabled.

        """
        if not self.can_submit:
            raise InvalidTransitionError("Name, email and role are required")

        self.state = FormState.SUBMITTING
        submission = self.submission

        try:
            result = self.client.subscribe(submission, self.list_tokens.for_submission(submission))
        except (requests.RequestException, ValueError):
            logger.exception("Error submitting form")
            result = HandlerResult(success=False)
            error = TRANSPORT_ERROR_MESSAGE
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error submitting form")
            result = HandlerResult(success=False)
            error = GENERIC_ERROR_MESSAGE
        else:
            error = None if result.success else extract_error_message(result.error)

        if not result.success:
            logger.error("Error submitting form: %s", error)
            self.state = FormState.IDLE
            self._toast("danger", error)
            return SubmissionOutcome(state=self.state, error=error)

        try:
            notification = self.dispatch_notification(submission)
        except Exception:  # noqa: BLE001
            logger.exception("Error sending email notification")
            notification = None
        self.state = FormState.SUBMITTED
        self._toast("success", SUCCESS_MESSAGE)
        return SubmissionOutcome(state=self.state, notification=notification)
