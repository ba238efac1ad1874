"""Request schemas for transactional email.

Validated eagerly at the boundary so a request without a recipient, sender
or subject never reaches the provider.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from commgate.core.domain.email import (
    Attachment,
    Disposition,
    EmailAddress,
    MailContent,
    MailData,
    Personalization,
)


class EmailAddressSchema(BaseModel):
    email: str = Field(..., min_length=1, examples=["jane@example.com"])
    name: str | None = Field(default=None, examples=["Jane Doe"])

    def to_domain(self) -> EmailAddress:
        return EmailAddress(email=self.email, name=self.name)


class PersonalizationSchema(BaseModel):
    to: list[EmailAddressSchema] = Field(..., min_length=1)
    cc: list[EmailAddressSchema] | None = None
    bcc: list[EmailAddressSchema] | None = None

    def to_domain(self) -> Personalization:
        return Personalization(
            to=tuple(address.to_domain() for address in self.to),
            cc=tuple(address.to_domain() for address in self.cc) if self.cc else None,
            bcc=tuple(address.to_domain() for address in self.bcc) if self.bcc else None,
        )


class MailContentSchema(BaseModel):
    type: str = Field(..., min_length=1, examples=["text/plain"])
    value: str


class AttachmentSchema(BaseModel):
    content: str = Field(..., description="Base64-encoded file content.")
    filename: str = Field(..., min_length=1)
    type: str | None = None
    disposition: Literal["attachment", "inline"] | None = None
    content_id: str | None = None

    def to_domain(self) -> Attachment:
        return Attachment(
            content=self.content,
            filename=self.filename,
            type=self.type,
            disposition=Disposition(self.disposition) if self.disposition else None,
            content_id=self.content_id,
        )


class SendEmailRequest(BaseModel):
    """Email send payload in the provider's own shape."""

    model_config = ConfigDict(populate_by_name=True)

    personalizations: list[PersonalizationSchema] = Field(..., min_length=1)
    from_: EmailAddressSchema = Field(..., alias="from")
    subject: str = Field(..., min_length=1)
    content: list[MailContentSchema] = Field(..., min_length=1)
    reply_to: EmailAddressSchema | None = None
    attachments: list[AttachmentSchema] | None = None

    def to_domain(self) -> MailData:
        return MailData(
            personalizations=tuple(group.to_domain() for group in self.personalizations),
            from_=self.from_.to_domain(),
            subject=self.subject,
            content=tuple(MailContent(type=part.type, value=part.value) for part in self.content),
            reply_to=self.reply_to.to_domain() if self.reply_to else None,
            attachments=(
                tuple(item.to_domain() for item in self.attachments)
                if self.attachments
                else None
            ),
        )
