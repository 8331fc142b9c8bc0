"""Exceptions raised by bikeshed_core.

PlatformError and ConfigError are fatal to a run. CalendarError is caught
by the pipeline and only downgrades the affected concern to "no meeting".
"""


class BikeshedError(Exception):
    """Base exception for all bikeshed errors."""


class ConfigError(BikeshedError):
    """Missing or invalid configuration."""


class PlatformError(BikeshedError):
    """The hosting API (GitHub) rejected or failed a request."""


class CalendarError(BikeshedError):
    """The calendar API failed: bad credentials, auth, quota, or HTTP error."""
