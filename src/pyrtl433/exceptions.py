"""Custom exception hierarchy for pyrtl433."""

from __future__ import annotations


class Rtl433Error(Exception):
    """Base exception for all pyrtl433 errors."""


class Rtl433ConfigError(Rtl433Error):
    """Invalid or missing configuration."""


class Rtl433IdentityError(Rtl433Error):
    """A record carries no usable device identity.

    Raised by identity resolution; the ingest pipeline maps it to a
    rejected result instead of letting it escape.
    """

    def __init__(self, message: str, *, record: dict | None = None) -> None:
        self.record = record
        super().__init__(message)


class Rtl433FeedError(Rtl433Error):
    """A record feed payload could not be decoded."""

    def __init__(self, message: str, *, topic: str = "") -> None:
        self.topic = topic
        super().__init__(message)
