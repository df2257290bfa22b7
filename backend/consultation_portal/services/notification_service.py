# backend/consultation_portal/services/notification_service.py
"""
Notification Service for the consultation portal

Sends booking emails rendered from Jinja2 templates:
- New request notification to the faculty member
- Status change notification to the student (approved, rejected,
  cancelled, reschedule)

Delivery is best effort. Every failure is logged and reported as a
False return value; nothing is raised to the caller, because the booking
change that triggered the email has already been committed.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional

from jinja2.exceptions import TemplateNotFound

from ..core.exceptions import ServiceException
from ..models.booking import BookingStatus
from .base import BaseService
from .email import EmailService
from .template_registry import STATUS_TEMPLATES, EmailSubject, TemplateRegistry
from .template_service import TemplateService

logger = logging.getLogger(__name__)


class NotificationService(BaseService):
    """
    Booking notifier.

    Built once per process. When no EmailService is supplied (no provider
    credentials configured) every notification is skipped.
    """

    def __init__(
        self,
        email_service: Optional[EmailService] = None,
        template_service: Optional[TemplateService] = None,
    ) -> None:
        super().__init__(None)
        self.email_service = email_service
        self.template_service = template_service or TemplateService()
        if not self.enabled:
            self.logger.info("Email notifications disabled: no delivery credentials configured")

    @property
    def enabled(self) -> bool:
        return self.email_service is not None

    @BaseService.measure_operation("notify_new_request")
    async def notify_new_request(
        self,
        faculty_email: str,
        student_name: str,
        topic: str,
        meta: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """
        Tell a faculty member about a new booking request.

        Args:
            faculty_email: Recipient
            student_name: Requesting student's display name
            topic: Booking topic
            meta: student_email, student_department, student_batch_no,
                student_message and booking_id where known

        Returns:
            True if the email was handed to the provider
        """
        if not self.enabled:
            return False
        meta = dict(meta or {})
        context = {
            "student_name": student_name,
            "topic": topic,
            "student_email": meta.get("student_email"),
            "student_department": meta.get("student_department"),
            "student_batch_no": meta.get("student_batch_no"),
            "student_message": meta.get("student_message") or "",
        }
        return await self._deliver(
            to_email=faculty_email,
            subject=EmailSubject.new_booking_request(student_name),
            template=TemplateRegistry.BOOKING_NEW_REQUEST,
            context=context,
            booking_id=meta.get("booking_id"),
        )

    @BaseService.measure_operation("notify_status_change")
    async def notify_status_change(
        self,
        student_email: str,
        status: BookingStatus | str,
        faculty_name: str,
        meta: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """
        Tell a student their booking changed status.

        Statuses without a template (pending, completed) send nothing.
        """
        if not self.enabled:
            return False
        try:
            target = BookingStatus(status)
        except ValueError:
            self.logger.warning(f"No status email for unknown status {status!r}")
            return False

        template = STATUS_TEMPLATES.get(target)
        subject = EmailSubject.status_change(target, faculty_name)
        if template is None or subject is None:
            self.logger.debug(f"No status email defined for {target.value}")
            return False

        meta = dict(meta or {})
        context = {
            "faculty_name": faculty_name,
            "topic": meta.get("topic"),
            "final_date_time": meta.get("final_date_time"),
            "room_number": meta.get("room_number"),
        }
        return await self._deliver(
            to_email=student_email,
            subject=subject,
            template=template,
            context=context,
            booking_id=meta.get("booking_id"),
        )

    async def _deliver(
        self,
        *,
        to_email: str,
        subject: str,
        template: TemplateRegistry,
        context: Mapping[str, Any],
        booking_id: Optional[str],
    ) -> bool:
        assert self.email_service is not None
        try:
            html_content = self.template_service.render_template(template.value, dict(context))
            await asyncio.to_thread(
                self.email_service.send_email,
                to_email=to_email,
                subject=subject,
                html_content=html_content,
            )
        except TemplateNotFound as e:
            self.logger.error(f"Template error for booking {booking_id}: {str(e)}")
            return False
        except ServiceException as e:
            self.logger.error(f"Email to {to_email} for booking {booking_id} failed: {e.message}")
            return False
        except Exception as e:
            self.logger.error(
                f"Unexpected error sending email to {to_email} for booking {booking_id}: {str(e)}",
                exc_info=True,
            )
            return False

        self.log_operation("notification_sent", to_email=to_email, booking_id=booking_id)
        return True
