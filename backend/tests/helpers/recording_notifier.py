# backend/tests/helpers/recording_notifier.py
"""Notifier double that records calls instead of sending email."""

from typing import Any, Dict, List


class RecordingNotifier:
    """Stands in for NotificationService and remembers every call."""

    enabled = True

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.new_requests: List[Dict[str, Any]] = []
        self.status_changes: List[Dict[str, Any]] = []

    async def notify_new_request(self, faculty_email, student_name, topic, meta=None):
        self.new_requests.append(
            {
                "faculty_email": faculty_email,
                "student_name": student_name,
                "topic": topic,
                "meta": dict(meta or {}),
            }
        )
        if self.fail:
            raise RuntimeError("provider down")
        return True

    async def notify_status_change(self, student_email, status, faculty_name, meta=None):
        self.status_changes.append(
            {
                "student_email": student_email,
                "status": getattr(status, "value", status),
                "faculty_name": faculty_name,
                "meta": dict(meta or {}),
            }
        )
        if self.fail:
            raise RuntimeError("provider down")
        return True
