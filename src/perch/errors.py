"""Perch exception hierarchy.

Shared across the parser, router, and CLI so every module raises and
catches the same types. "No handler matched" is not an error: dispatch
reports it as ``False``.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when an import string does not resolve to a usable router."""


class InvalidURL(PerchError, ValueError):  # noqa: N818 — mirrors urllib naming
    """The input could not be decomposed into URL components, or has no scheme.

    ``Router.route()`` turns this into a ``False`` result unless called
    with ``strict=True``.
    """

    def __init__(self, url: object, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL {url!r}: {reason}")
