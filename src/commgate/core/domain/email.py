"""Transactional email model.

Construction enforces the mail invariants: a non-empty subject, a non-empty
sender address, at least one personalization with at least one recipient,
and at least one content part. ``to_payload`` drops unset optional keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from commgate.core.domain.errors import ValidationError


class Disposition(str, Enum):
    """How an attachment is presented to the recipient."""

    ATTACHMENT = "attachment"
    INLINE = "inline"


@dataclass(frozen=True)
class EmailAddress:
    email: str
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.email or not self.email.strip():
            raise ValidationError("Email address must not be empty", details={"field": "email"})

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"email": self.email}
        if self.name is not None:
            payload["name"] = self.name
        return payload


@dataclass(frozen=True)
class Personalization:
    """Recipient group for one rendering of the message."""

    to: tuple[EmailAddress, ...]
    cc: tuple[EmailAddress, ...] | None = None
    bcc: tuple[EmailAddress, ...] | None = None

    def __post_init__(self) -> None:
        if not self.to:
            raise ValidationError(
                "Each personalization needs at least one recipient",
                details={"field": "personalizations.to"},
            )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"to": [address.to_payload() for address in self.to]}
        if self.cc:
            payload["cc"] = [address.to_payload() for address in self.cc]
        if self.bcc:
            payload["bcc"] = [address.to_payload() for address in self.bcc]
        return payload


@dataclass(frozen=True)
class MailContent:
    type: str
    value: str

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True)
class Attachment:
    """Base64-encoded attachment."""

    content: str
    filename: str
    type: str | None = None
    disposition: Disposition | None = None
    content_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": self.content, "filename": self.filename}
        if self.type is not None:
            payload["type"] = self.type
        if self.disposition is not None:
            payload["disposition"] = self.disposition.value
        if self.content_id is not None:
            payload["content_id"] = self.content_id
        return payload


@dataclass(frozen=True)
class MailData:
    """A complete send request for the email provider.

    Attributes:
        personalizations: Recipient groups; at least one is required.
        from_: Sender address.
        subject: Message subject, must not be blank.
        content: Body parts (``text/plain``, ``text/html``...).
        reply_to: Optional reply-to address.
        attachments: Optional attachments.
    """

    personalizations: tuple[Personalization, ...]
    from_: EmailAddress
    subject: str
    content: tuple[MailContent, ...]
    reply_to: EmailAddress | None = None
    attachments: tuple[Attachment, ...] | None = None

    def __post_init__(self) -> None:
        if not self.subject or not self.subject.strip():
            raise ValidationError("Email subject must not be empty", details={"field": "subject"})
        if not self.personalizations:
            raise ValidationError(
                "Email needs at least one recipient",
                details={"field": "personalizations"},
            )
        if not self.content:
            raise ValidationError(
                "Email needs at least one content part",
                details={"field": "content"},
            )

    @property
    def recipient_count(self) -> int:
        return sum(len(group.to) for group in self.personalizations)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "personalizations": [group.to_payload() for group in self.personalizations],
            "from": self.from_.to_payload(),
            "subject": self.subject,
            "content": [part.to_payload() for part in self.content],
        }
        if self.reply_to is not None:
            payload["reply_to"] = self.reply_to.to_payload()
        if self.attachments:
            payload["attachments"] = [item.to_payload() for item in self.attachments]
        return payload
