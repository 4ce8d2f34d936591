from __future__ import annotations

import pytest

from fakes import InMemoryUsers, make_user
from rfid_attendance.core.enums import Gender
from rfid_attendance.core.exceptions import DuplicateError, NotFoundError, ValidationError
from rfid_attendance.users.service import UserService


def _payload(**overrides):
    data = {
        "name": "  Maria Santos ",
        "uid": "cafe0123",
        "gender": "Female",
        "email": "Maria@Example.com",
        "phoneNumber": "+639171234567",
    }
    data.update(overrides)
    return data


def test_register_normalizes_fields():
    svc = UserService(InMemoryUsers())

    user = svc.register(_payload())

    assert user.name == "Maria Santos"
    assert user.uid == "CAFE0123"
    assert user.gender == Gender.FEMALE
    assert user.email == "maria@example.com"
    assert svc.find_by_uid("CAFE0123") == user


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "M"},
        {"name": "x" * 101},
        {"uid": "XYZ123"},
        {"uid": "ABC"},
        {"uid": "A" * 21},
        {"gender": "Unknown"},
        {"email": "not-an-email"},
        {"phoneNumber": "09171234567"},
        {"phoneNumber": "+6391712345"},
    ],
)
def test_register_rejects_invalid_fields(overrides):
    svc = UserService(InMemoryUsers())

    with pytest.raises(ValidationError):
        svc.register(_payload(**overrides))


def test_register_requires_name_and_uid():
    svc = UserService(InMemoryUsers())

    with pytest.raises(ValidationError, match="Name and UID are required"):
        svc.register(_payload(uid=""))


def test_duplicate_uid_names_the_field():
    svc = UserService(InMemoryUsers([make_user(1, uid="CAFE0123")]))

    with pytest.raises(DuplicateError) as exc:
        svc.register(_payload())

    assert exc.value.field == "uid"
    assert str(exc.value) == "uid already exists"


def test_duplicate_email_names_the_field():
    svc = UserService(InMemoryUsers([make_user(1, uid="AB12CD", email="maria@example.com")]))

    with pytest.raises(DuplicateError) as exc:
        svc.register(_payload())

    assert exc.value.field == "email"


def test_custom_phone_pattern():
    svc = UserService(InMemoryUsers(), phone_pattern=r"^\+1\d{10}$")

    user = svc.register(_payload(phoneNumber="+12025550123"))

    assert user.phone_number == "+12025550123"


def test_partial_update_keeps_other_fields():
    svc = UserService(InMemoryUsers([make_user(1, uid="AB12CD", name="Juan Dela Cruz")]))

    user = svc.update(1, {"name": "Juan D. Cruz", "uid": None})

    assert user.name == "Juan D. Cruz"
    assert user.uid == "AB12CD"


def test_update_to_own_uid_is_not_a_duplicate():
    svc = UserService(InMemoryUsers([make_user(1, uid="AB12CD")]))

    assert svc.update(1, {"uid": "ab12cd"}).uid == "AB12CD"


def test_update_to_taken_uid_is_rejected():
    svc = UserService(InMemoryUsers([make_user(1, uid="AB12CD"), make_user(2, uid="CAFE0123")]))

    with pytest.raises(DuplicateError):
        svc.update(2, {"uid": "AB12CD"})


def test_missing_user():
    svc = UserService(InMemoryUsers())

    with pytest.raises(NotFoundError):
        svc.get(42)
    with pytest.raises(NotFoundError):
        svc.delete(42)
    with pytest.raises(NotFoundError):
        svc.update(42, {"name": "Nobody"})
