from __future__ import annotations

from datetime import datetime
from unittest.mock import patch

import pytest

from consultation_portal.core.exceptions import ServiceException
from consultation_portal.models.booking import BookingStatus
from consultation_portal.services.email import EmailService
from consultation_portal.services.notification_service import NotificationService
from consultation_portal.services.template_registry import (
    STATUS_TEMPLATES,
    EmailSubject,
    TemplateRegistry,
)
from consultation_portal.services.template_service import TemplateService


class DummyEmailService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[dict] = []

    def send_email(self, *, to_email: str, subject: str, html_content: str):
        if self.error is not None:
            raise self.error
        self.sent.append({"to_email": to_email, "subject": subject, "html_content": html_content})
        return {"id": "email_1"}


def _service(email_service=None) -> NotificationService:
    return NotificationService(email_service=email_service, template_service=TemplateService())


@pytest.mark.asyncio
async def test_new_request_email_content():
    email = DummyEmailService()
    service = _service(email)

    sent = await service.notify_new_request(
        "faculty@sru.edu.in",
        "Sam Student",
        "Thesis review",
        {
            "student_email": "student@sru.edu.in",
            "student_department": "CSE",
            "student_batch_no": "2022",
            "student_message": "",
        },
    )

    assert sent is True
    assert len(email.sent) == 1
    message = email.sent[0]
    assert message["to_email"] == "faculty@sru.edu.in"
    assert message["subject"] == "[Consultation Portal] New Booking Request from Sam Student"
    assert "Thesis review" in message["html_content"]
    assert "student@sru.edu.in" in message["html_content"]
    assert "No optional message was included" in message["html_content"]


@pytest.mark.asyncio
async def test_approved_email_carries_schedule():
    email = DummyEmailService()
    service = _service(email)

    sent = await service.notify_status_change(
        "student@sru.edu.in",
        BookingStatus.APPROVED,
        "Dr. Fay Faculty",
        {"final_date_time": datetime(2024, 5, 1, 10, 0), "room_number": "204"},
    )

    assert sent is True
    message = email.sent[0]
    assert message["subject"] == "Your Consultation with Dr. Fay Faculty is CONFIRMED"
    assert "May 01, 2024 at 10:00 AM" in message["html_content"]
    assert "204" in message["html_content"]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["rejected", "cancelled", "reschedule"])
async def test_other_status_emails(status):
    email = DummyEmailService()

    sent = await _service(email).notify_status_change("student@sru.edu.in", status, "Dr. F")

    assert sent is True
    assert email.sent[0]["subject"] == EmailSubject.status_change(BookingStatus(status), "Dr. F")


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["pending", "completed", "archived"])
async def test_statuses_without_email_send_nothing(status):
    email = DummyEmailService()

    sent = await _service(email).notify_status_change("student@sru.edu.in", status, "Dr. F")

    assert sent is False
    assert email.sent == []


@pytest.mark.asyncio
async def test_disabled_notifier_sends_nothing():
    service = _service(None)

    assert service.enabled is False
    assert await service.notify_new_request("f@sru.edu.in", "S", "T") is False
    assert await service.notify_status_change("s@sru.edu.in", "approved", "F") is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [ServiceException("Email sending failed: quota"), RuntimeError("socket closed")]
)
async def test_delivery_failures_are_swallowed(error):
    service = _service(DummyEmailService(error=error))

    assert await service.notify_status_change("s@sru.edu.in", "rejected", "Dr. F") is False


def test_every_status_template_exists():
    templates = TemplateService()

    for template in TemplateRegistry:
        assert templates.template_exists(template.value), template
    assert set(STATUS_TEMPLATES) == {
        BookingStatus.APPROVED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED,
        BookingStatus.RESCHEDULE,
    }


def test_template_output_is_escaped():
    html = TemplateService().render_template(
        TemplateRegistry.BOOKING_NEW_REQUEST.value,
        {"student_name": "<script>x</script>", "topic": "t", "student_message": "hi"},
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


class TestEmailService:
    def test_requires_api_key(self):
        with patch("consultation_portal.services.email.settings") as mock_settings:
            mock_settings.resend_api_key = None
            with pytest.raises(ServiceException):
                EmailService()

    def test_send_email_uses_resend(self):
        with patch("resend.Emails.send", return_value={"id": "re_123"}) as mock_send:
            service = EmailService(api_key="re_test", from_email="Portal <no-reply@sru.edu.in>")
            result = service.send_email("s@sru.edu.in", "Subject", "<p>Hello <b>there</b></p>")

        assert result == {"id": "re_123"}
        payload = mock_send.call_args[0][0]
        assert payload["from"] == "Portal <no-reply@sru.edu.in>"
        assert payload["to"] == "s@sru.edu.in"
        assert payload["text"] == "Hello there"

    def test_provider_error_becomes_service_exception(self):
        with patch("resend.Emails.send", side_effect=RuntimeError("401 invalid key")):
            service = EmailService(api_key="re_test")
            with pytest.raises(ServiceException) as exc_info:
                service.send_email("s@sru.edu.in", "Subject", "<p>x</p>")

        assert "401 invalid key" in exc_info.value.message
