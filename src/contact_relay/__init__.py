"""Relay portfolio contact form submissions to a mailing list and an email notification."""
