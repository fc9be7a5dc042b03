"""
Unit tests for AuthService against a real session.
"""
import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import IntegrityError

from pet_community.auth_service.auth import decode_access_token
from pet_community.auth_service.errors import (
    DomainError,
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from pet_community.auth_service.models import Role, User
from pet_community.auth_service.schemas import UserOut
from pet_community.auth_service.service import AuthService


@pytest.fixture
def service(db_session):
    return AuthService(db_session)


def test_create_user_hashes_password_and_issues_token(service, db_session):
    user, token = service.create_user(
        email="vet@example.com", password="secret1", name="Dr Vet", role=Role.SERVICE_PROVIDER
    )

    assert isinstance(user, UserOut)
    assert user.email == "vet@example.com"
    assert user.role == Role.SERVICE_PROVIDER
    assert "password" not in user.model_dump()

    stored = db_session.get(User, user.id)
    assert stored.password != "secret1"
    assert stored.password.startswith("$pbkdf2-sha256$")

    claims = decode_access_token(token)
    assert claims["id"] == user.id
    assert claims["role"] == "SERVICE_PROVIDER"
    assert claims["exp"] > claims["iat"]


def test_create_user_duplicate_email(service):
    service.create_user(email="dup@example.com", password="secret1", name="One", role=Role.PET_OWNER)
    with pytest.raises(DuplicateEmailError):
        service.create_user(email="dup@example.com", password="secret2", name="Two", role=Role.PET_OWNER)


def test_create_user_integrity_error_maps_to_duplicate():
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = None
    db.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    with pytest.raises(DuplicateEmailError):
        AuthService(db).create_user(email="race@example.com", password="secret1", name="Race", role=Role.PET_OWNER)
    db.rollback.assert_called_once()


def test_login_user(service):
    created, _ = service.create_user(email="log@example.com", password="secret1", name="Log", role=Role.PET_OWNER)

    user, token = service.login_user("log@example.com", "secret1")
    assert user.id == created.id
    assert decode_access_token(token)["id"] == created.id


def test_login_user_errors(service):
    service.create_user(email="log@example.com", password="secret1", name="Log", role=Role.PET_OWNER)

    with pytest.raises(UserNotFoundError):
        service.login_user("missing@example.com", "secret1")
    with pytest.raises(InvalidCredentialsError) as exc_info:
        service.login_user("log@example.com", "wrong")
    assert exc_info.value.status_code == 400
    assert isinstance(exc_info.value, DomainError)


def test_get_user_by_id(service):
    created, _ = service.create_user(email="get@example.com", password="secret1", name="Get", role=Role.PET_OWNER)

    assert service.get_user_by_id(created.id) == created
    assert service.get_user_by_id("no-such-id") is None


def test_update_user_discards_email_and_password(service, db_session):
    created, _ = service.create_user(email="upd@example.com", password="secret1", name="Upd", role=Role.PET_OWNER)
    original_hash = db_session.get(User, created.id).password

    updated = service.update_user(
        created.id,
        {"name": "Updated", "avatar": "dog.png", "email": "new@example.com", "password": "changed", "role": "SERVICE_PROVIDER"},
    )

    assert updated.name == "Updated"
    assert updated.avatar == "dog.png"
    assert updated.email == "upd@example.com"
    assert updated.role == Role.PET_OWNER

    db_session.expire_all()
    assert db_session.get(User, created.id).password == original_hash


def test_update_user_can_clear_optional_field(service):
    created, _ = service.create_user(
        email="clear@example.com", password="secret1", name="Clear", role=Role.PET_OWNER, phone="555-0100"
    )
    assert service.update_user(created.id, {"phone": None}).phone is None


def test_update_missing_user(service):
    with pytest.raises(UserNotFoundError):
        service.update_user("no-such-id", {"name": "Ghost"})
