"""Test the contact form controller."""

import logging
from concurrent.futures import ThreadPoolExecutor
from unittest import mock

import pytest
import requests

from contact_relay.client.api import ContactApiClient, HandlerResult
from contact_relay.client.form import (
    SUCCESS_MESSAGE,
    TRANSPORT_ERROR_MESSAGE,
    ContactForm,
    FormState,
    NewsletterState,
    Toast,
)
from contact_relay.client.messages import GENERIC_ERROR_MESSAGE
from contact_relay.exceptions import InvalidTransitionError


@pytest.fixture(name="client")
def fixture_client():
    """Return a mocked handlers client."""
    client = mock.Mock(spec=ContactApiClient)
    client.subscribe.return_value = HandlerResult(success=True)
    client.send_notification.return_value = HandlerResult(success=True)
    return client


@pytest.fixture(name="form")
def fixture_form(client, list_tokens, inline_executor):
    """Return a contact form filled with the required fields."""
    form = ContactForm(client, list_tokens, executor=inline_executor)
    form.update("name", "Ada")
    form.update("email", "ada@example.com")
    form.update("role", "Developer")
    return form


def test_form_initial_state(client, list_tokens):
    """A new form is idle, empty, and opted in to the newsletter."""
    form = ContactForm(client, list_tokens)
    assert form.state == FormState.IDLE
    assert form.newsletter_state == NewsletterState.SUBSCRIBED
    assert form.submission.subscribe_to_updates is True
    assert form.can_submit is False
    assert form.is_busy is False


@pytest.mark.parametrize("missing", ["name", "email", "role"])
def test_form_submit_disabled_without_required_field(form, missing):
    """The submit control is disabled as soon as a required field is empty."""
    form.update("linkedin", "https://www.linkedin.com/in/ada")
    form.update(missing, "")
    assert form.can_submit is False
    with pytest.raises(InvalidTransitionError):
        form.submit()
    form.client.subscribe.assert_not_called()


def test_form_update_rejects_unknown_role(form):
    """Roles come from the closed set."""
    with pytest.raises(ValueError, match="Unknown role"):
        form.update("role", "Astronaut")
    assert form.submission.role == "Developer"


def test_form_update_newsletter_needs_toggle(form):
    """The newsletter flag only changes through its own state machine."""
    with pytest.raises(ValueError, match="toggle_newsletter"):
        form.update("subscribe_to_updates", False)


def test_newsletter_opt_out_requires_confirmation(form):
    """Opting out opens a confirmation, confirming commits the opt-out."""
    form.toggle_newsletter()
    assert form.newsletter_state == NewsletterState.AWAITING_CONFIRMATION
    assert form.submission.subscribe_to_updates is True

    form.confirm_unsubscribe()
    assert form.newsletter_state == NewsletterState.UNSUBSCRIBED
    assert form.submission.subscribe_to_updates is False


def test_newsletter_opt_out_cancelled(form):
    """Cancelling the confirmation keeps the subscription."""
    form.toggle_newsletter()
    form.cancel_unsubscribe()
    assert form.newsletter_state == NewsletterState.SUBSCRIBED
    assert form.submission.subscribe_to_updates is True


def test_newsletter_opt_in_is_immediate(form):
    """Opting back in needs no confirmation."""
    form.toggle_newsletter()
    form.confirm_unsubscribe()

    form.toggle_newsletter()
    assert form.newsletter_state == NewsletterState.SUBSCRIBED
    assert form.submission.subscribe_to_updates is True


def test_newsletter_toggle_while_awaiting_confirmation(form):
    """Toggling again while the confirmation is open changes nothing."""
    form.toggle_newsletter()
    form.toggle_newsletter()
    assert form.newsletter_state == NewsletterState.AWAITING_CONFIRMATION
    assert form.submission.subscribe_to_updates is True


@pytest.mark.parametrize("action", ["confirm_unsubscribe", "cancel_unsubscribe"])
def test_newsletter_confirmation_not_pending(form, action):
    """Confirmation answers need an open confirmation."""
    with pytest.raises(InvalidTransitionError):
        getattr(form, action)()


def test_submit_success(form, client, list_tokens):
    """A successful subscription ends in the submitted state, then the notification is requested."""
    form.update("message", "Hello")
    toasts = []
    form.on_toast = toasts.append

    outcome = form.submit()

    assert outcome.succeeded is True
    assert outcome.error is None
    assert form.state == FormState.SUBMITTED
    assert toasts == [Toast(variant="success", message=SUCCESS_MESSAGE)]
    assert form.toasts == toasts
    client.subscribe.assert_called_once_with(form.submission, [list_tokens.contact, list_tokens.newsletter])
    client.send_notification.assert_called_once_with(form.submission)
    assert outcome.notification.result() == HandlerResult(success=True)


def test_submit_without_newsletter(form, client, list_tokens):
    """Opted out visitors only join the contact list."""
    form.toggle_newsletter()
    form.confirm_unsubscribe()

    form.submit()

    assert client.subscribe.call_args.args[1] == [list_tokens.contact]


def test_submit_notification_only_after_subscription(form, client):
    """The notification is never requested when the subscription fails."""
    calls = []
    client.subscribe.side_effect = lambda *args: calls.append("subscribe") or HandlerResult(success=True)
    client.send_notification.side_effect = lambda *args: calls.append("notify") or HandlerResult(success=True)

    form.submit()

    assert calls == ["subscribe", "notify"]


def test_submit_subscription_rejected(form, client):
    """A rejected subscription returns to idle with the upstream message."""
    client.subscribe.return_value = HandlerResult(
        success=False, error='Subscription failed: {"message":"email already exists"}'
    )

    outcome = form.submit()

    assert outcome.succeeded is False
    assert outcome.error == "email already exists"
    assert outcome.notification is None
    assert form.state == FormState.IDLE
    assert form.toasts == [Toast(variant="danger", message="email already exists")]
    client.send_notification.assert_not_called()


def test_submit_failure_keeps_form_data(form, client):
    """After a failure the form keeps its data and can be submitted again."""
    client.subscribe.return_value = HandlerResult(success=False)
    submission = form.submission

    outcome = form.submit()

    assert outcome.error == GENERIC_ERROR_MESSAGE
    assert form.submission == submission
    assert form.can_submit is True

    client.subscribe.return_value = HandlerResult(success=True)
    assert form.submit().succeeded is True


@pytest.mark.parametrize("exception", [requests.ConnectionError("down"), ValueError("not json")])
def test_submit_transport_fault(form, client, exception, caplog):
    """Transport faults are reported with a generic message."""
    client.subscribe.side_effect = exception

    outcome = form.submit()

    assert outcome.error == TRANSPORT_ERROR_MESSAGE
    assert form.state == FormState.IDLE
    assert form.toasts == [Toast(variant="danger", message=TRANSPORT_ERROR_MESSAGE)]
    assert "Error submitting form" in caplog.text


def test_submit_notification_raises(form, client, caplog):
    """A failing notification neither changes the outcome nor reaches the visitor."""
    client.send_notification.side_effect = requests.ConnectionError("resend down")

    with caplog.at_level(logging.ERROR, logger="contact_relay.client.form"):
        outcome = form.submit()

    assert outcome.succeeded is True
    assert form.state == FormState.SUBMITTED
    assert form.toasts == [Toast(variant="success", message=SUCCESS_MESSAGE)]
    assert isinstance(outcome.notification.exception(), requests.ConnectionError)
    assert "Error sending email notification" in caplog.text


def test_submit_notification_not_configured(form, client, caplog):
    """An unconfigured email service is only logged."""
    client.send_notification.return_value = HandlerResult(success=False, error="Email service not configured")

    with caplog.at_level(logging.ERROR, logger="contact_relay.client.form"):
        outcome = form.submit()

    assert outcome.succeeded is True
    assert form.toasts == [Toast(variant="success", message=SUCCESS_MESSAGE)]
    assert "Email notification failed: Email service not configured" in caplog.text


def test_submit_is_busy_while_subscribing(form, client):
    """The form is busy and cannot be submitted while the subscription is in flight."""
    seen = {}

    def subscribe(*args):
        seen["busy"] = form.is_busy
        seen["can_submit"] = form.can_submit
        return HandlerResult(success=True)

    client.subscribe.side_effect = subscribe

    form.submit()

    assert seen == {"busy": True, "can_submit": False}
    assert form.is_busy is False


def test_submitted_form_is_frozen(form):
    """Once submitted the form cannot be edited or submitted again."""
    form.submit()

    assert form.can_submit is False
    with pytest.raises(InvalidTransitionError):
        form.update("name", "Grace")
    with pytest.raises(InvalidTransitionError):
        form.submit()


def test_default_executor_runs_notification(client, list_tokens):
    """Without executor the notification runs in a background thread."""
    form = ContactForm(client, list_tokens)
    form.update("name", "Ada")
    form.update("email", "ada@example.com")
    form.update("role", "Other")

    outcome = form.submit()

    assert outcome.notification.result(timeout=5) == HandlerResult(success=True)
    form.close()


def test_submit_notification_cannot_be_scheduled(client, list_tokens, caplog):
    """A subscription that succeeded always ends in the submitted state, even when no notification can be queued."""
    executor = ThreadPoolExecutor(max_workers=1)
    executor.shutdown()
    form = ContactForm(client, list_tokens, executor=executor)
    form.update("name", "Ada")
    form.update("email", "ada@example.com")
    form.update("role", "Student")

    with caplog.at_level(logging.ERROR, logger="contact_relay.client.form"):
        outcome = form.submit()

    assert outcome.succeeded is True
    assert outcome.notification is None
    assert form.state == FormState.SUBMITTED
    assert form.toasts == [Toast(variant="success", message=SUCCESS_MESSAGE)]
    assert "Error sending email notification" in caplog.text
    client.send_notification.assert_not_called()


def test_submit_unexpected_subscribe_error(form, client):
    """Any error raised by the subscription returns the form to idle."""
    client.subscribe.side_effect = RuntimeError("boom")

    outcome = form.submit()

    assert outcome.succeeded is False
    assert outcome.error == GENERIC_ERROR_MESSAGE
    assert form.state == FormState.IDLE
    assert form.can_submit is True
    assert form.toasts == [Toast(variant="danger", message=GENERIC_ERROR_MESSAGE)]
    client.send_notification.assert_not_called()


def test_close_shuts_down_owned_executor(client, list_tokens):
    """Closing the form releases the notification worker it created."""
    with ContactForm(client, list_tokens) as form:
        executor = form.executor

    with pytest.raises(RuntimeError):
        executor.submit(print)


def test_close_keeps_given_executor(client, list_tokens):
    """An executor given to the form is left to its owner."""
    executor = ThreadPoolExecutor(max_workers=1)
    form = ContactForm(client, list_tokens, executor=executor)

    form.close()

    assert executor.submit(int).result(timeout=5) == 0
    executor.shutdown()
