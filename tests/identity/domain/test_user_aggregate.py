"""Tests for the User aggregate and its session projection."""

import pytest
from bookhub.identity.user import Role, User
from protean.exceptions import ValidationError


def _register(**overrides):
    details = {"email": "reader@example.com", "name": "Reader", "password": "s3cret", "role": Role.USER}
    details.update(overrides)
    return User.register(**details)


class TestRegistration:
    def test_register_assigns_id_and_timestamp(self):
        user = _register()
        assert user.id
        assert user.created_at.endswith("Z")

    def test_register_hashes_password(self):
        user = _register()
        assert user.password_hash != "s3cret"
        assert len(user.password_hash) == 64
        assert user.password_salt

    def test_same_password_hashes_differently_per_user(self):
        first = _register(email="a@example.com")
        second = _register(email="b@example.com")
        assert first.password_hash != second.password_hash

    def test_register_with_admin_role(self):
        user = _register(role=Role.ADMIN)
        assert user.role == "admin"
        assert user.is_admin

    def test_register_accepts_role_value(self):
        assert _register(role="user").role == "user"

    def test_password_is_required(self):
        with pytest.raises(ValidationError) as exc:
            _register(password="")
        assert "password" in exc.value.messages

    def test_name_is_required(self):
        with pytest.raises(ValidationError) as exc:
            _register(name=None)
        assert "name" in exc.value.messages


class TestCredentials:
    def test_check_password(self):
        user = _register()
        assert user.check_password("s3cret")
        assert not user.check_password("S3cret")
        assert not user.check_password("")

    def test_user_without_credentials_never_matches(self):
        user = User(id="u-1", email="x@example.com", name="X")
        assert not user.check_password("anything")


class TestRoleAssignment:
    def test_assign_role(self):
        user = _register()
        user.assign_role("admin")
        assert user.is_admin

    def test_unknown_role_rejected(self):
        user = _register()
        with pytest.raises(ValidationError):
            user.assign_role("superuser")
        assert user.role == "user"


class TestRecords:
    def test_projection_excludes_credentials(self):
        projection = _register().projection()
        assert set(projection) == {"id", "email", "name", "role", "createdAt"}

    def test_record_includes_credentials(self):
        record = _register().to_record()
        assert "passwordHash" in record
        assert "passwordSalt" in record
        assert "password" not in record

    def test_record_round_trip(self):
        user = _register()
        restored = User.from_record(user.to_record())
        assert restored.to_record() == user.to_record()
        assert restored.check_password("s3cret")
