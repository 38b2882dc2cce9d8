"""Fixtures for the test suite."""

from concurrent.futures import Executor, Future

import pytest
from rest_framework.test import APIClient

from contact_relay.lists import ListResolver, ListTokens


class InlineExecutor(Executor):
    """Executor running submitted callables immediately, in the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        """Run the callable and return its completed future."""
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
        return future


@pytest.fixture
def inline_executor():
    """Return an executor making detached calls deterministic."""
    return InlineExecutor()


@pytest.fixture
def api_client():
    """Return a DRF test client."""
    return APIClient()


@pytest.fixture
def list_tokens(settings):
    """Return the list tokens declared in the test settings."""
    return ListTokens(contact=settings.CONTACT_LIST_TOKEN, newsletter=settings.NEWSLETTER_LIST_TOKEN)


@pytest.fixture
def resolver(settings):
    """Return a resolver built from the test settings."""
    return ListResolver.from_settings()
