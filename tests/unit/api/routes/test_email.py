"""Unit tests for the email route."""

import pytest


@pytest.fixture
def mail_request():
    return {
        "personalizations": [{"to": [{"email": "jane@example.com", "name": "Jane"}]}],
        "from": {"email": "noreply@example.com"},
        "subject": "Welcome",
        "content": [{"type": "text/plain", "value": "Hello"}],
    }


def test_accepted_send_is_no_content(client, clients, mail_request):
    response = client.post("/email", json=mail_request)

    assert response.status_code == 204
    mail = clients.email.send_mail.await_args.args[0]
    assert mail.subject == "Welcome"
    assert mail.to_payload()["from"] == {"email": "noreply@example.com"}


def test_no_personalizations_rejected(client, clients, mail_request):
    mail_request["personalizations"] = []

    response = client.post("/email", json=mail_request)

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"
    clients.email.send_mail.assert_not_awaited()


def test_personalization_without_recipient_rejected(client, clients, mail_request):
    mail_request["personalizations"] = [{"to": []}]

    response = client.post("/email", json=mail_request)

    assert response.status_code == 422
    clients.email.send_mail.assert_not_awaited()


def test_missing_sender_rejected(client, clients, mail_request):
    del mail_request["from"]

    response = client.post("/email", json=mail_request)

    assert response.status_code == 422
    clients.email.send_mail.assert_not_awaited()


def test_blank_subject_rejected(client, clients, mail_request):
    mail_request["subject"] = "   "

    response = client.post("/email", json=mail_request)

    assert response.status_code == 422
    clients.email.send_mail.assert_not_awaited()


def test_attachments_forwarded(client, clients, mail_request):
    mail_request["attachments"] = [
        {"content": "aGVsbG8=", "filename": "hello.txt", "disposition": "attachment"}
    ]

    client.post("/email", json=mail_request)

    payload = clients.email.send_mail.await_args.args[0].to_payload()
    assert payload["attachments"] == [
        {"content": "aGVsbG8=", "filename": "hello.txt", "disposition": "attachment"}
    ]
