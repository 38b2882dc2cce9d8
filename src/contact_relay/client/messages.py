"""Extraction of a human readable message from a subscription failure detail."""

import json
from collections.abc import Callable, Sequence
from typing import Any

from contact_relay.exceptions import SUBSCRIPTION_ERROR_PREFIX

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

Extractor = Callable[[Any], str | None]


def _message_field(value: Any) -> str | None:
    if isinstance(value, dict) and isinstance(value.get("message"), str) and value["message"]:
        return value["message"]
    return None


def _json_message(text: str) -> str | None:
    try:
        return _message_field(json.loads(text))
    except ValueError:
        return None


def from_prefixed_json(detail: Any) -> str | None:
    """Unwrap `Subscription failed: {...}` and read the upstream message."""
    if not isinstance(detail, str) or SUBSCRIPTION_ERROR_PREFIX not in detail:
        return None
    return _json_message(detail.split(SUBSCRIPTION_ERROR_PREFIX, 1)[1].strip())


def from_json(detail: Any) -> str | None:
    """Read the message of a JSON encoded error."""
    if not isinstance(detail, str):
        return None
    return _json_message(detail)


def from_mapping(detail: Any) -> str | None:
    """Read the message of an already decoded error object."""
    return _message_field(detail)


def from_text(detail: Any) -> str | None:
    """Use the detail itself."""
    if isinstance(detail, str) and detail.strip():
        return detail.strip()
    return None


EXTRACTORS: Sequence[Extractor] = (from_prefixed_json, from_json, from_mapping, from_text)


def extract_error_message(
    detail: Any,
    extractors: Sequence[Extractor] = EXTRACTORS,
    default: str = GENERIC_ERROR_MESSAGE,
) -> str:
    """Return the first message found by the extractors, or the default."""
    for extractor in extractors:
        message = extractor(detail)
        if message:
            return message
    return default
