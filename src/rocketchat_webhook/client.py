"""RocketChat incoming webhook client."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from rocketchat_webhook.exceptions import (
    ResponseStatusError,
    RocketChatError,
    TransportError,
)
from rocketchat_webhook.models import Message

if TYPE_CHECKING:
    from rocketchat_webhook.config import RocketChatSettings

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200


@dataclass(frozen=True)
class SendResult:
    """Outcome of posting one message to the webhook.

    Attributes:
        success: True if the webhook answered with HTTP 200.
        status_code: Response status, None when no response was received.
        error: The delivery error, None on success.
        message: The message that was sent.
    """

    success: bool
    status_code: int | None = None
    error: RocketChatError | None = None
    message: Message | None = field(default=None, hash=False, compare=False)

    def raise_for_error(self) -> None:
        """Raise the delivery error, if any."""
        if self.error is not None:
            raise self.error


class RocketChatClient:
    """Client posting messages to a RocketChat incoming webhook.

    Each send opens its own HTTP client for the duration of one request.
    Failures are returned as a SendResult instead of being raised.

    Example:
        ```python
        client = RocketChatClient("https://chat.example.com/hooks/abc", "#alerts")

        message = Message().set_text("Deploy finished").set_attachments(
            [Attachment().set_title("Build 42").set_color("#2de0a5")]
        )
        result = await client.send_message(message)
        ```
    """

    def __init__(
        self,
        webhook_url: str,
        channel: str,
        *,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        No validation or network I/O happens here.

        Args:
            webhook_url: RocketChat incoming webhook URL.
            channel: Channel messages are posted to ("#channel" or "@user").
            timeout: HTTP request timeout in seconds, applied to each send.
        """
        self._webhook_url = webhook_url
        self.channel = channel
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: RocketChatSettings) -> RocketChatClient:
        """Create a client from loaded settings."""
        return cls(
            settings.webhook_url.get_secret_value(),
            settings.channel,
            timeout=settings.timeout,
        )

    @property
    def webhook_url(self) -> str:
        return self._webhook_url

    def set_channel(self, channel: str) -> RocketChatClient:
        """Change the channel used for subsequent messages."""
        self.channel = channel
        return self

    def _payload(self, message: Message) -> dict[str, Any]:
        payload = message.to_payload(self.channel)
        logger.debug(f"Posting to {self.channel}: {payload}")
        return payload

    def _result_from_response(
        self, response: httpx.Response, message: Message
    ) -> SendResult:
        if response.status_code == SUCCESS_STATUS:
            logger.info(f"RocketChat message delivered to {self.channel}")
            return SendResult(
                success=True, status_code=response.status_code, message=message
            )

        logger.error(f"RocketChat webhook failed: {response.status_code}")
        return SendResult(
            success=False,
            status_code=response.status_code,
            error=ResponseStatusError(response.status_code),
            message=message,
        )

    def _result_from_error(self, exc: Exception, message: Message) -> SendResult:
        logger.error(f"RocketChat request error: {exc!r}")
        error = TransportError(f"Request error: {exc}")
        error.__cause__ = exc
        return SendResult(success=False, error=error, message=message)

    async def send_text(self, text: str) -> SendResult:
        """Send a message made only of text."""
        return await self.send_message(Message().set_text(text))

    async def send_message(self, message: Message) -> SendResult:
        """Post a message to the webhook.

        Args:
            message: Message to send.

        Returns:
            SendResult describing the delivery.
        """
        payload = self._payload(message)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self._webhook_url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            return self._result_from_error(e, message)

        return self._result_from_response(response, message)

    async def send_messages(
        self,
        messages: Iterable[Message],
        *,
        stop_on_failure: bool = True,
    ) -> list[SendResult]:
        """Send messages one after another, in order.

        Args:
            messages: Messages to send.
            stop_on_failure: Stop at the first failed send. Messages already
                delivered stay delivered.

        Returns:
            One SendResult per attempted message, in send order.
        """
        results = []
        for message in messages:
            result = await self.send_message(message)
            results.append(result)
            if not result.success and stop_on_failure:
                logger.warning(
                    f"Stopping batch after failure ({len(results)} attempted)"
                )
                break
        return results

    def send_text_sync(self, text: str) -> SendResult:
        """Blocking variant of send_text."""
        return self.send_message_sync(Message().set_text(text))

    def send_message_sync(self, message: Message) -> SendResult:
        """Blocking variant of send_message."""
        payload = self._payload(message)

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self._webhook_url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            return self._result_from_error(e, message)

        return self._result_from_response(response, message)

    def send_messages_sync(
        self,
        messages: Iterable[Message],
        *,
        stop_on_failure: bool = True,
    ) -> list[SendResult]:
        """Blocking variant of send_messages."""
        results = []
        for message in messages:
            result = self.send_message_sync(message)
            results.append(result)
            if not result.success and stop_on_failure:
                logger.warning(
                    f"Stopping batch after failure ({len(results)} attempted)"
                )
                break
        return results

    def __repr__(self) -> str:
        return f"RocketChatClient(channel={self.channel!r})"
