"""Backend handler instantiating the configured gateway backends."""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.functional import cached_property
from django.utils.module_loading import import_string

from contact_relay.exceptions import InvalidBackendError


class BackendHandler:
    """Handler managing the instantiation of a backend declared in the settings."""

    def __init__(self, setting_name, backend=None):
        """Initialize the handler."""
        # backend is an optional dict of backend definitions
        # (structured like the setting: {"BACKEND": ..., "PARAMETERS": {...}}).
        self.setting_name = setting_name
        self._backend = backend
        self._instance = None

    @cached_property
    def backend(self):
        """Put in cache the backend properties from the settings."""
        if self._backend is None:
            try:
                self._backend = getattr(settings, self.setting_name).copy()
            except AttributeError as e:
                raise ImproperlyConfigured(f"settings.{self.setting_name} is not configured") from e
        return self._backend

    def __call__(self):
        """Create if not existing the backend and then return it."""
        if self._instance is None:
            self._instance = self.create_backend(self.backend)
        return self._instance

    def create_backend(self, params):
        """Instantiate and configure the backend."""
        params = params.copy()
        try:
            backend = params.pop("BACKEND")
        except KeyError as e:
            raise ImproperlyConfigured(f"settings.{self.setting_name} has no BACKEND") from e
        parameters = params.pop("PARAMETERS", {})
        try:
            klass = import_string(backend)
        except ImportError as e:
            raise InvalidBackendError(f"Could not find backend {backend!r}: {e}") from e
        return klass(**parameters)
