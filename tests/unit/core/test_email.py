"""Tests for the transactional email model."""

import pytest

from commgate.core.domain.email import (
    Attachment,
    Disposition,
    EmailAddress,
    MailContent,
    MailData,
    Personalization,
)
from commgate.core.domain.errors import ValidationError


def _mail(**overrides):
    values = {
        "personalizations": (Personalization(to=(EmailAddress("jane@example.com", "Jane"),)),),
        "from_": EmailAddress("noreply@example.com"),
        "subject": "Welcome",
        "content": (MailContent("text/plain", "Hello"),),
    }
    values.update(overrides)
    return MailData(**values)


class TestMailData:
    def test_payload_uses_provider_keys(self):
        payload = _mail().to_payload()

        assert payload == {
            "personalizations": [{"to": [{"email": "jane@example.com", "name": "Jane"}]}],
            "from": {"email": "noreply@example.com"},
            "subject": "Welcome",
            "content": [{"type": "text/plain", "value": "Hello"}],
        }

    def test_optional_parts_included_when_set(self):
        mail = _mail(
            reply_to=EmailAddress("support@example.com"),
            attachments=(
                Attachment(
                    content="aGVsbG8=",
                    filename="hello.txt",
                    type="text/plain",
                    disposition=Disposition.INLINE,
                    content_id="hello",
                ),
            ),
        )
        payload = mail.to_payload()

        assert payload["reply_to"] == {"email": "support@example.com"}
        assert payload["attachments"] == [
            {
                "content": "aGVsbG8=",
                "filename": "hello.txt",
                "type": "text/plain",
                "disposition": "inline",
                "content_id": "hello",
            }
        ]

    def test_recipient_count_spans_personalizations(self):
        mail = _mail(
            personalizations=(
                Personalization(to=(EmailAddress("a@example.com"), EmailAddress("b@example.com"))),
                Personalization(to=(EmailAddress("c@example.com"),)),
            )
        )
        assert mail.recipient_count == 3

    def test_no_personalizations_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _mail(personalizations=())
        assert exc_info.value.details["field"] == "personalizations"

    def test_blank_subject_rejected(self):
        with pytest.raises(ValidationError):
            _mail(subject=" ")

    def test_missing_content_rejected(self):
        with pytest.raises(ValidationError):
            _mail(content=())


class TestPersonalization:
    def test_requires_recipient(self):
        with pytest.raises(ValidationError):
            Personalization(to=())

    def test_cc_and_bcc_serialized(self):
        group = Personalization(
            to=(EmailAddress("a@example.com"),),
            cc=(EmailAddress("b@example.com"),),
            bcc=(EmailAddress("c@example.com"),),
        )
        assert group.to_payload() == {
            "to": [{"email": "a@example.com"}],
            "cc": [{"email": "b@example.com"}],
            "bcc": [{"email": "c@example.com"}],
        }


def test_blank_address_rejected():
    with pytest.raises(ValidationError):
        EmailAddress("")
