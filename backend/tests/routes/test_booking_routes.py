from datetime import datetime

from consultation_portal.models import Booking, BookingStatus
from tests.factories.builders import bearer, make_booking

BOOKINGS = "/api/v1/bookings"


def _create_body(faculty_id, **overrides):
    body = {
        "facultyId": faculty_id,
        "dateTime": "2024-04-28T09:30:00",
        "durationMinutes": 45,
        "topic": "Thesis review",
        "studentMessage": "Chapter 3",
    }
    body.update(overrides)
    return body


class TestCreateBookingRoute:
    def test_student_creates_booking(self, client, db, notifier, test_faculty, auth_headers_student):
        faculty_user, profile = test_faculty

        response = client.post(BOOKINGS, json=_create_body(profile.id), headers=auth_headers_student)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Booking request submitted successfully."
        booking = data["booking"]
        assert booking["status"] == "pending"
        assert booking["facultyId"] == profile.id
        assert booking["durationMinutes"] == 45
        assert booking["requestedDateTime"].startswith("2024-04-28T09:30:00")
        assert booking["finalDateTime"] is None
        assert booking["roomNumber"] is None
        assert db.query(Booking).count() == 1
        assert notifier.new_requests[0]["faculty_email"] == faculty_user.email

    def test_duration_defaults_to_thirty_minutes(self, client, test_faculty, auth_headers_student):
        _, profile = test_faculty
        body = _create_body(profile.id)
        del body["durationMinutes"]
        del body["studentMessage"]

        response = client.post(BOOKINGS, json=body, headers=auth_headers_student)

        assert response.status_code == 201
        assert response.json()["booking"]["durationMinutes"] == 30
        assert response.json()["booking"]["studentMessage"] == ""

    def test_topic_too_long(self, client, test_faculty, auth_headers_student):
        _, profile = test_faculty

        response = client.post(
            BOOKINGS, json=_create_body(profile.id, topic="x" * 151), headers=auth_headers_student
        )

        assert response.status_code == 422

    def test_faculty_cannot_book(self, client, test_faculty, auth_headers_faculty):
        _, profile = test_faculty

        response = client.post(BOOKINGS, json=_create_body(profile.id), headers=auth_headers_faculty)

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_AUTHORIZED"

    def test_unknown_faculty(self, client, auth_headers_student):
        response = client.post(
            BOOKINGS,
            json=_create_body("01HZZZZZZZZZZZZZZZZZZZZZZZ"),
            headers=auth_headers_student,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Faculty or student not found."

    def test_notifier_failure_still_returns_created(self, client, db, notifier, test_faculty, auth_headers_student):
        _, profile = test_faculty
        notifier.fail = True

        response = client.post(BOOKINGS, json=_create_body(profile.id), headers=auth_headers_student)

        assert response.status_code == 201
        assert db.query(Booking).count() == 1


class TestMyBookingsRoute:
    def test_student_view_embeds_faculty(self, client, test_booking, test_faculty, auth_headers_student):
        faculty_user, profile = test_faculty

        response = client.get(f"{BOOKINGS}/my", headers=auth_headers_student)

        assert response.status_code == 200
        (booking,) = response.json()
        assert booking["id"] == test_booking.id
        assert booking["faculty"] == {
            "id": profile.id,
            "name": faculty_user.name,
            "email": faculty_user.email,
        }
        assert booking["student"] is None

    def test_faculty_view_embeds_student(self, client, test_booking, test_student, auth_headers_faculty):
        response = client.get(f"{BOOKINGS}/my", headers=auth_headers_faculty)

        assert response.status_code == 200
        (booking,) = response.json()
        assert booking["student"] == {
            "id": test_student.id,
            "name": test_student.name,
            "email": test_student.email,
            "studentDepartment": "CSE",
            "batchNo": "2022",
        }
        assert booking["faculty"] is None

    def test_other_faculty_sees_nothing(self, client, test_booking, auth_headers_faculty_2):
        response = client.get(f"{BOOKINGS}/my", headers=auth_headers_faculty_2)

        assert response.status_code == 200
        assert response.json() == []


class TestStatusRoute:
    def test_approve(self, client, notifier, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "approved", "finalDateTime": "2024-05-01T10:00:00", "roomNumber": "204"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Booking status updated to approved."
        assert data["booking"]["status"] == "approved"
        assert data["booking"]["finalDateTime"].startswith("2024-05-01T10:00:00")
        assert data["booking"]["roomNumber"] == "204"
        assert notifier.status_changes[0]["status"] == "approved"

    def test_approve_without_final_date_time(self, client, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "approved", "roomNumber": "204"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert body["details"] == {"missing": ["finalDateTime"]}

    def test_blank_room_counts_as_missing(self, client, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "approved", "finalDateTime": "2024-05-01T10:00:00", "roomNumber": "  "},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 400
        assert response.json()["details"] == {"missing": ["roomNumber"]}

    def test_blank_final_date_time_counts_as_missing(self, client, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "approved", "finalDateTime": "", "roomNumber": "204"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert body["details"] == {"missing": ["finalDateTime"]}

    def test_reschedule_with_blank_fields(self, client, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "reschedule", "finalDateTime": "", "roomNumber": ""},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 200
        booking = response.json()["booking"]
        assert booking["status"] == "reschedule"
        assert booking["finalDateTime"] is None
        assert booking["roomNumber"] is None

    def test_reschedule_without_fields(self, client, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "reschedule"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 200
        assert response.json()["booking"]["status"] == "reschedule"

    def test_invalid_status(self, client, test_booking, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "completed"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status provided."

    def test_not_owner_gets_forbidden_not_not_found(self, client, test_booking, auth_headers_faculty_2):
        response = client.put(
            f"{BOOKINGS}/{test_booking.id}/status",
            json={"status": "rejected"},
            headers=auth_headers_faculty_2,
        )

        assert response.status_code == 403

    def test_missing_booking(self, client, auth_headers_faculty):
        response = client.put(
            f"{BOOKINGS}/01HZZZZZZZZZZZZZZZZZZZZZZZ/status",
            json={"status": "rejected"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 404

    def test_transition_outside_table(self, client, db, test_student, test_faculty, auth_headers_faculty):
        _, profile = test_faculty
        booking = make_booking(db, test_student, profile, status=BookingStatus.REJECTED)

        response = client.put(
            f"{BOOKINGS}/{booking.id}/status",
            json={"status": "reschedule"},
            headers=auth_headers_faculty,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TRANSITION"


class TestCancelRoute:
    def test_student_cancels(self, client, db, notifier, test_student, test_faculty, auth_headers_student):
        _, profile = test_faculty
        booking = make_booking(
            db,
            test_student,
            profile,
            status=BookingStatus.APPROVED,
            final_date_time=datetime(2024, 5, 1, 10, 0),
            room_number="204",
        )

        response = client.delete(f"{BOOKINGS}/{booking.id}", headers=auth_headers_student)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Booking cancelled successfully."
        assert data["booking"]["status"] == "cancelled"
        assert data["booking"]["roomNumber"] is None
        assert db.query(Booking).filter(Booking.id == booking.id).count() == 1
        assert notifier.status_changes[0]["status"] == "cancelled"

    def test_cancel_rejected_booking(self, client, db, test_student, test_faculty, auth_headers_student):
        _, profile = test_faculty
        booking = make_booking(db, test_student, profile, status=BookingStatus.REJECTED)

        response = client.delete(f"{BOOKINGS}/{booking.id}", headers=auth_headers_student)

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot cancel a booking with status: rejected"

    def test_other_student_forbidden(self, client, test_booking, test_student_2):
        response = client.delete(f"{BOOKINGS}/{test_booking.id}", headers=bearer(test_student_2))

        assert response.status_code == 403
