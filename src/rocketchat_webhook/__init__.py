"""RocketChat incoming webhook client."""

from rocketchat_webhook.client import RocketChatClient, SendResult
from rocketchat_webhook.exceptions import (
    ResponseStatusError,
    RocketChatError,
    TransportError,
)
from rocketchat_webhook.models import Attachment, Field, Message

__version__ = "0.1.0"

__all__ = [
    "Attachment",
    "Field",
    "Message",
    "ResponseStatusError",
    "RocketChatClient",
    "RocketChatError",
    "SendResult",
    "TransportError",
    "__version__",
]
