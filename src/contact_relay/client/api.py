"""HTTP client of the contact relay handlers."""

import json
from dataclasses import dataclass, field

import requests

from contact_relay.submission import Submission


@dataclass(frozen=True)
class HandlerResult:
    """Structured answer of a handler."""

    success: bool
    error: object = None
    payload: dict = field(default_factory=dict)

    @classmethod
    def from_response(cls, response: requests.Response):
        """
        Decode a handler response.

        Raises:
            ValueError: If the body is not a JSON object.

        """
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected handler response: {payload!r}")
        return cls(success=payload.get("success") is True, error=payload.get("error"), payload=payload)


class ContactApiClient:
    """
    Client posting contact form submissions to the relay handlers.

    Fields are sent as multipart form data, optional attributes being JSON encoded
    in a single `attribs` field and list tokens repeated in `l` fields.
    """

    subscribe_path = "/api/subscribe"
    send_email_path = "/api/send-email"

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: int = 10):
        """Configure the client."""
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, path, fields):
        # (None, value) tuples make requests encode plain multipart fields
        response = self.session.post(
            f"{self.base_url}{path}",
            files=[(key, (None, value)) for key, value in fields],
            timeout=self.timeout,
        )
        return HandlerResult.from_response(response)

    def subscribe(self, submission: Submission, list_tokens: list[str]) -> HandlerResult:
        """Register the submission in the mailing list, message excluded."""
        fields = [("email", submission.email), ("name", submission.name)]
        attributes = submission.list_attributes()
        if attributes:
            fields.append(("attribs", json.dumps(attributes)))
        fields.extend(("l", token) for token in list_tokens)
        return self._post(self.subscribe_path, fields)

    def send_notification(self, submission: Submission) -> HandlerResult:
        """Ask for the notification email, message included."""
        fields = [
            ("email", submission.email),
            ("name", submission.name),
            ("attribs", json.dumps(submission.notification_attributes())),
        ]
        return self._post(self.send_email_path, fields)
