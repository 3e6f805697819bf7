"""Adapter layer errors."""


class AdapterError(Exception):
    """Base error for code that talks to the outside world."""

    pass


class ProviderError(AdapterError):
    """The identity provider refused or failed a call.

    Covers the token exchange and every ID token check; the message is for
    logs, not for users.
    """

    pass
