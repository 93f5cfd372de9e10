"""Errors reported by the webhook client."""

from __future__ import annotations


class RocketChatError(Exception):
    """Base class for webhook delivery errors."""


class TransportError(RocketChatError):
    """The HTTP request did not complete (connection, DNS, timeout)."""


class ResponseStatusError(RocketChatError):
    """The webhook answered with a non-success status code."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Response error: {status_code}")
        self.status_code = status_code
