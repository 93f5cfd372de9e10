"""Data models for RocketChat webhook messages.

Every model is a mutable builder: setters store the value and return the
same instance so calls can be chained. Serialization drops any optional
value that was never set, since RocketChat makes no distinction between an
empty value and an absent key.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


def _without_unset(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Field:
    """A title/value row rendered inside an attachment.

    Attributes:
        title: Field title.
        value: Field value.
        short: Render the field in a half-width column. Left to the server
            default (False) when unset.
    """

    title: str = ""
    value: str = ""
    short: bool | None = None

    def set_title(self, title: str) -> Field:
        self.title = title
        return self

    def set_value(self, value: str) -> Field:
        self.value = value
        return self

    def set_short(self, short: bool) -> Field:
        self.short = short
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to the webhook wire format."""
        return _without_unset(
            {
                "title": self.title,
                "value": self.value,
                "short": self.short,
            }
        )


@dataclass
class Attachment:
    """A rich-content block attached to a message.

    All attributes are optional and no validation is performed on them.

    Attributes:
        title: Attachment title.
        title_link: URL the title links to.
        text: Body text.
        author_name: Author shown above the title.
        author_icon: Author icon URL, only displayed when author_name is set.
        color: Color of the left border (e.g. "#c97149").
        image_url: Image displayed inside the attachment.
        fields: Title/value rows, in render order.
    """

    title: str | None = None
    title_link: str | None = None
    text: str | None = None
    author_name: str | None = None
    author_icon: str | None = None
    color: str | None = None
    image_url: str | None = None
    fields: list[Field] = field(default_factory=list)

    def set_title(self, title: str) -> Attachment:
        self.title = title
        return self

    def set_title_link(self, title_link: str) -> Attachment:
        self.title_link = title_link
        return self

    def set_text(self, text: str) -> Attachment:
        self.text = text
        return self

    def set_author_name(self, author_name: str) -> Attachment:
        self.author_name = author_name
        return self

    def set_author_icon(self, author_icon: str) -> Attachment:
        self.author_icon = author_icon
        return self

    def set_author(self, name: str, icon: str | None = None) -> Attachment:
        """Set the author name and, when given, the author icon.

        Args:
            name: Author name.
            icon: Optional author icon URL. An icon set earlier is kept
                when this is None.
        """
        self.author_name = name
        if icon is not None:
            self.author_icon = icon
        return self

    def set_color(self, color: str) -> Attachment:
        self.color = color
        return self

    def set_image(self, image_url: str) -> Attachment:
        self.image_url = image_url
        return self

    def set_fields(self, fields: Iterable[Field]) -> Attachment:
        """Replace the attachment fields."""
        self.fields = list(fields)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to the webhook wire format."""
        return _without_unset(
            {
                "title": self.title,
                "title_link": self.title_link,
                "text": self.text,
                "author_name": self.author_name,
                "author_icon": self.author_icon,
                "color": self.color,
                "image_url": self.image_url,
                "fields": [f.to_dict() for f in self.fields] or None,
            }
        )


@dataclass
class Message:
    """A chat message posted through a webhook.

    Attributes:
        text: Text displayed above the attachments.
        attachments: Attachments, in render order.
    """

    text: str | None = None
    attachments: list[Attachment] = field(default_factory=list)

    def set_text(self, text: str) -> Message:
        self.text = text
        return self

    def set_attachments(self, attachments: Iterable[Attachment]) -> Message:
        """Replace the message attachments.

        The previous attachments are discarded, not extended.
        """
        self.attachments = list(attachments)
        return self

    def to_payload(self, channel: str) -> dict[str, Any]:
        """Build the JSON body posted to the webhook.

        Args:
            channel: Target channel ("#channel" or "@user").

        Returns:
            Dictionary ready for JSON encoding.
        """
        return _without_unset(
            {
                "channel": channel,
                "text": self.text,
                "attachments": [a.to_dict() for a in self.attachments] or None,
            }
        )
