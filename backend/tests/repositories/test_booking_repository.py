from datetime import datetime

from consultation_portal.repositories.factory import RepositoryFactory
from tests.factories.builders import make_booking


def test_booking_with_details_loads_both_parties(db, test_booking, test_student, test_faculty):
    faculty_user, _ = test_faculty
    repository = RepositoryFactory.create_booking_repository(db)
    db.expunge_all()

    booking = repository.get_booking_with_details(test_booking.id)

    assert booking.student.email == test_student.email
    assert booking.faculty_profile.user.email == faculty_user.email


def test_missing_booking_returns_none(db):
    repository = RepositoryFactory.create_booking_repository(db)

    assert repository.get_booking_with_details("01HZZZZZZZZZZZZZZZZZZZZZZZ") is None


def test_faculty_bookings_newest_first(db, test_student, test_faculty):
    _, profile = test_faculty
    first = make_booking(db, test_student, profile, created_at=datetime(2024, 1, 1))
    second = make_booking(db, test_student, profile, created_at=datetime(2024, 3, 1))

    bookings = RepositoryFactory.create_booking_repository(db).get_faculty_bookings(profile.id)

    assert [b.id for b in bookings] == [second.id, first.id]


def test_user_lookup_by_email_is_case_insensitive(db, test_student):
    repository = RepositoryFactory.create_user_repository(db)

    assert repository.get_by_email(" Student@SRU.edu.in ").id == test_student.id
    assert repository.email_exists("nobody@sru.edu.in") is False


def test_profile_lookup_by_owner(db, test_faculty):
    faculty_user, profile = test_faculty
    repository = RepositoryFactory.create_faculty_profile_repository(db)

    assert repository.get_by_user_id(faculty_user.id).id == profile.id
    assert repository.get_by_user_id("01HZZZZZZZZZZZZZZZZZZZZZZZ") is None


def test_update_and_delete_through_base_repository(db, test_booking):
    repository = RepositoryFactory.create_booking_repository(db)

    updated = repository.update(test_booking.id, topic="Revised topic")
    assert updated.topic == "Revised topic"
    assert repository.update("01HZZZZZZZZZZZZZZZZZZZZZZZ", topic="x") is None

    assert repository.delete(test_booking.id) is True
    assert repository.get_by_id(test_booking.id) is None
    assert repository.delete(test_booking.id) is False
