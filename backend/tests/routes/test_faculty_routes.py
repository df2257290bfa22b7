from tests.factories.builders import make_faculty


def test_directory_lists_public_fields(client, db):
    make_faculty(db, email="zed@sru.edu.in", name="Zed", available_slots="Fri 9-10")
    make_faculty(db, email="amy@sru.edu.in", name="Amy")

    response = client.get("/api/v1/faculty")

    assert response.status_code == 200
    entries = response.json()
    assert [entry["name"] for entry in entries] == ["Amy", "Zed"]
    assert set(entries[0]) == {"id", "name", "email", "department", "title", "bio"}


def test_directory_is_public_and_empty_by_default(client):
    response = client.get("/api/v1/faculty")

    assert response.status_code == 200
    assert response.json() == []


def test_faculty_detail_includes_available_slots(client, test_faculty):
    faculty_user, profile = test_faculty

    response = client.get(f"/api/v1/faculty/{profile.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == profile.id
    assert data["email"] == faculty_user.email
    assert data["availableSlots"] == "Mon 10-12"


def test_unknown_faculty(client):
    response = client.get("/api/v1/faculty/01HZZZZZZZZZZZZZZZZZZZZZZZ")

    assert response.status_code == 404
    assert response.json() == {
        "message": "Faculty member not found",
        "code": "NOT_FOUND",
        "details": {},
    }
