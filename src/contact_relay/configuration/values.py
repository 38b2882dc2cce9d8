"""Custom value classes for django-configurations."""

import os

from configurations import values


class SecretFileValue(values.Value):
    """
    Credential read from a mounted secret file or from the environment.

    Lookup order for a setting resolved under the environment name `NAME`:
    * the content of the file whose path is in `NAME_FILE`,
    * the value of `NAME`,
    * the default.

    Blank credentials resolve to None: an empty `RESEND_API_KEY` leaves the
    notification backend unconfigured instead of sending an empty bearer token.

    Given an `environ_name`, the value resolves as soon as it is declared, so it can
    be used inside the `PARAMETERS` of a backend setting:

        "api_key": SecretFileValue(environ_name="RESEND_API_KEY", environ_prefix="CONTACT_RELAY")
    """

    file_suffix = "FILE"

    def _lookup(self, name):
        environ_name = self.full_environ_name(name)
        file_environ_name = f"{environ_name}_{self.file_suffix}"

        if file_environ_name in os.environ:
            path = os.environ[file_environ_name]
            try:
                with open(path) as secret_file:
                    return secret_file.read().removesuffix("\n")
            except FileNotFoundError as err:
                raise ValueError(f"Secret file {path!r} does not exist.") from err
            except OSError as err:
                raise ValueError(f"Secret file {path!r} cannot be read: {err!r}") from err

        if environ_name in os.environ:
            return os.environ[environ_name]

        if self.environ_required:
            raise ValueError(f"Set {file_environ_name!r} or {environ_name!r} for the {name!r} secret.")
        return None

    def setup(self, name):
        """Resolve the secret, blank values becoming None."""
        raw = self._lookup(name) if self.environ else None
        value = self.default if raw is None else self.to_python(raw)
        if isinstance(value, str) and not value.strip():
            value = None
        self.value = value
        return value
