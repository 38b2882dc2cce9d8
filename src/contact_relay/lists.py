"""Mailing list membership and resolution of list tokens to Listmonk ids."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.functional import LazyObject

from contact_relay.submission import Submission

logger = logging.getLogger(__name__)

LIST_NAMES = ("contact", "newsletter")


@dataclass(frozen=True)
class ListTokens:
    """Opaque list tokens known to the contact form."""

    contact: str
    newsletter: str

    def for_submission(self, submission: Submission) -> list[str]:
        """Return the tokens of the lists a submission joins."""
        tokens = [self.contact]
        if submission.subscribe_to_updates:
            tokens.append(self.newsletter)
        return tokens


@dataclass(frozen=True)
class ListResolver:
    """Read-only mapping from opaque list tokens to internal list ids."""

    mapping: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        """Freeze the mapping."""
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    @classmethod
    def from_settings(cls):
        """Build the resolver from settings.CONTACT_RELAY_LISTS."""
        lists = getattr(settings, "CONTACT_RELAY_LISTS", None)
        if not lists:
            raise ImproperlyConfigured("settings.CONTACT_RELAY_LISTS is not configured")

        mapping = {}
        for name in LIST_NAMES:
            try:
                token, list_id = lists[name]["token"], int(lists[name]["id"])
            except (KeyError, TypeError, ValueError) as err:
                raise ImproperlyConfigured(
                    f"settings.CONTACT_RELAY_LISTS[{name!r}] needs a 'token' and an integer 'id'"
                ) from err
            if list_id <= 0:
                raise ImproperlyConfigured(f"settings.CONTACT_RELAY_LISTS[{name!r}]['id'] must be positive")
            mapping[token] = list_id
        return cls(mapping)

    def resolve(self, token: str) -> int | None:
        """Return the list id of a token, None when the token is unknown."""
        return self.mapping.get(token)

    def resolve_all(self, tokens: Iterable[str]) -> list[int]:
        """Resolve tokens in order, dropping unknown tokens and duplicates."""
        list_ids = []
        for token in tokens:
            list_id = self.resolve(token)
            if list_id is None:
                # Unknown tokens are ignored rather than rejected.
                logger.warning("Ignoring unknown list token %r", token)
                continue
            if list_id not in list_ids:
                list_ids.append(list_id)
        return list_ids


class DefaultListResolver(LazyObject):
    """Lazy object building the list resolver once from the settings."""

    def _setup(self):
        """Build the resolver."""
        self._wrapped = ListResolver.from_settings()


list_resolver = DefaultListResolver()
