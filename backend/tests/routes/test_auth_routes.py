from consultation_portal.core.constants import INVALID_CREDENTIALS_MESSAGE
from consultation_portal.models import FacultyProfile, User

REGISTER = "/api/v1/auth/register"
LOGIN = "/api/v1/auth/login"


def _student_body(**overrides):
    body = {
        "name": "  Sam Student ",
        "email": "Sam@SRU.edu.in",
        "password": "secret123",
        "studentDepartment": "CSE",
        "batchNo": "2022",
    }
    body.update(overrides)
    return body


class TestRegister:
    def test_student_registration_without_role(self, client, db):
        response = client.post(REGISTER, json=_student_body())

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Registration successful."
        assert data["name"] == "Sam Student"
        assert data["email"] == "sam@sru.edu.in"
        assert data["role"] == "student"
        assert data["facultyId"] is None
        assert data["token"]
        assert db.query(User).count() == 1

    def test_faculty_registration_returns_profile_id(self, client, db):
        response = client.post(
            REGISTER,
            json={
                "name": "Dr. Fay",
                "email": "fay@sru.edu.in",
                "password": "secret123",
                "role": "faculty",
                "department": "Physics",
                "availableSlots": ["Mon 10-12", "Thu 15-17"],
            },
        )

        assert response.status_code == 201
        data = response.json()
        profile = db.query(FacultyProfile).one()
        assert data["role"] == "faculty"
        assert data["facultyId"] == profile.id
        assert profile.available_slots == "Mon 10-12, Thu 15-17"

    def test_faculty_fields_rejected_on_student_variant(self, client):
        response = client.post(REGISTER, json=_student_body(department="Physics"))

        assert response.status_code == 422
        assert response.json()["code"] == "REQUEST_VALIDATION"

    def test_unknown_role(self, client):
        response = client.post(REGISTER, json=_student_body(role="admin"))

        assert response.status_code == 422

    def test_short_password(self, client):
        response = client.post(REGISTER, json=_student_body(password="12345"))

        assert response.status_code == 422

    def test_domain_rejected(self, client, db):
        response = client.post(REGISTER, json=_student_body(email="sam@yahoo.com"))

        assert response.status_code == 400
        assert response.json()["code"] == "DOMAIN_REJECTED"
        assert db.query(User).count() == 0

    def test_duplicate_email(self, client, test_student):
        response = client.post(REGISTER, json=_student_body(email="STUDENT@sru.edu.in"))

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "DUPLICATE_EMAIL"
        assert body["message"] == "User already exists"


class TestLogin:
    def test_login_returns_account_summary(self, client, test_student, test_password):
        response = client.post(LOGIN, json={"email": "student@sru.edu.in", "password": test_password})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_student.id
        assert data["role"] == "student"
        assert data["token"]
        assert "message" not in data

    def test_faculty_login_includes_faculty_id(self, client, test_faculty, test_password):
        _, profile = test_faculty

        response = client.post(LOGIN, json={"email": "faculty@sru.edu.in", "password": test_password})

        assert response.status_code == 200
        assert response.json()["facultyId"] == profile.id

    def test_failures_are_indistinguishable(self, client, test_student, test_password):
        attempts = [
            {"email": "student@sru.edu.in", "password": "wrong-password"},
            {"email": "nobody@sru.edu.in", "password": test_password},
            {"email": "student@yahoo.com", "password": test_password},
        ]

        responses = [client.post(LOGIN, json=attempt) for attempt in attempts]

        assert {r.status_code for r in responses} == {401}
        bodies = [r.json() for r in responses]
        assert all(body == bodies[0] for body in bodies)
        assert bodies[0]["message"] == INVALID_CREDENTIALS_MESSAGE
        assert bodies[0]["code"] == "INVALID_CREDENTIALS"
