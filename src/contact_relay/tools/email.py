"""Email related tools."""

from email.errors import HeaderParseError
from email.headerregistry import Address


def get_domain_from_email(email: str | None) -> str | None:
    """Extract domain from email."""
    try:
        address = Address(addr_spec=email)
        if len(address.username) > 64 or len(address.domain) > 255:  # noqa: PLR2004
            # RFC 5321 limits
            return None
        if not address.domain:
            return None
        return address.domain
    except (ValueError, AttributeError, IndexError, HeaderParseError):
        return None


def mask_email(email: str | None) -> str:
    """Hide the local part of an email, keeping its domain when it can be parsed."""
    domain = get_domain_from_email(email)
    return f"***@{domain}" if domain else "***"
