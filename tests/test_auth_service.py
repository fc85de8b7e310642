"""Tests for authentication service."""

import pytest

from portfolio_api.auth.models import User
from portfolio_api.auth.service import (
    authenticate_user,
    get_user_by_email,
    hash_password,
    register_user,
    verify_password,
)
from portfolio_api.errors import ConflictError, UploadError, ValidationError
from portfolio_api.integrations.media import AVATAR_FOLDER, RESUME_FOLDER, FileUpload


def _signup(**overrides) -> dict:
    fields = {
        "first_name": "Bruno",
        "last_name": "Costa",
        "email": "Bruno@Example.com",
        "password": "Str0ng!pass",
        "gender": "MALE",
        "about_me": "Backend developer",
        "github_url": "github.com/bruno",
    }
    fields.update(overrides)
    return fields


AVATAR = FileUpload(b"\x89PNG avatar", "avatar.png")
RESUME = FileUpload(b"%PDF resume", "resume.pdf")


class TestPasswordHashing:
    def test_hash_and_verify(self):
        password = "test_password_123"
        hashed = hash_password(password)
        assert hashed != password
        assert verify_password(password, hashed)

    def test_wrong_password_fails(self):
        hashed = hash_password("correct_password")
        assert not verify_password("wrong_password", hashed)

    def test_same_password_hashes_differ(self):
        assert hash_password("same") != hash_password("same")

    def test_overlong_password_never_verifies(self):
        hashed = hash_password("x" * 72)
        assert verify_password("x" * 72, hashed)
        assert not verify_password("x" * 100, hashed)

    def test_overlong_password_not_hashed(self):
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            hash_password("A1#" + "x" * 100)


class TestGetUserByEmail:
    def test_finds_existing_user(self, db_session, test_user):
        user = get_user_by_email(db_session, "ana@example.com")
        assert user is not None
        assert user.id == test_user.id

    def test_lookup_is_case_insensitive(self, db_session, test_user):
        assert get_user_by_email(db_session, "  ANA@Example.COM ").id == test_user.id

    def test_returns_none_for_unknown(self, db_session):
        assert get_user_by_email(db_session, "unknown@example.com") is None


class TestAuthenticateUser:
    def test_valid_credentials(self, db_session, test_user):
        result = authenticate_user(db_session, "ana@example.com", "Secret#123")
        assert result is not None
        assert result.id == test_user.id

    def test_wrong_password(self, db_session, test_user):
        assert authenticate_user(db_session, "ana@example.com", "wrongpassword") is None

    def test_nonexistent_user(self, db_session):
        assert authenticate_user(db_session, "nobody@example.com", "password") is None


class TestRegisterUser:
    def test_creates_user_with_media(self, db_session, media):
        user = register_user(db_session, media, _signup(), AVATAR, RESUME)
        db_session.commit()

        assert user.email == "bruno@example.com"
        assert user.gender == "male"
        assert user.github_url == "https://github.com/bruno"
        assert verify_password("Str0ng!pass", user.password_hash)
        assert [folder for folder, _ in media.uploads] == [AVATAR_FOLDER, RESUME_FOLDER]
        assert user.avatar["url"].startswith("https://res.cloudinary.com/demo/image/upload/")

    def test_gender_defaults_to_others(self, db_session, media):
        user = register_user(db_session, media, _signup(gender=""), AVATAR, RESUME)
        assert user.gender == "others"

    def test_duplicate_email_conflicts(self, db_session, media):
        register_user(db_session, media, _signup(), AVATAR, RESUME)
        db_session.commit()
        uploads_before = len(media.uploads)

        with pytest.raises(ConflictError):
            register_user(db_session, media, _signup(email="bruno@example.com"), AVATAR, RESUME)
        assert len(media.uploads) == uploads_before
        assert db_session.query(User).count() == 1

    def test_missing_files_rejected(self, db_session, media):
        with pytest.raises(ValidationError, match="Avatar and Resume are required"):
            register_user(db_session, media, _signup(), AVATAR, None)
        assert media.uploads == []

    def test_weak_password_rejected(self, db_session, media):
        with pytest.raises(ValidationError, match="Password should be strong"):
            register_user(db_session, media, _signup(password="password"), AVATAR, RESUME)

    def test_overlong_password_rejected_before_upload(self, db_session, media):
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            register_user(db_session, media, _signup(password="Aa1#" + "y" * 80), AVATAR, RESUME)
        assert media.uploads == []

    def test_first_failing_field_reported(self, db_session, media):
        with pytest.raises(ValidationError, match="First name"):
            register_user(db_session, media, _signup(first_name="B", email="bad"), AVATAR, RESUME)

    def test_resume_upload_failure_discards_avatar(self, db_session, media):
        media.fail_folders.add(RESUME_FOLDER)
        with pytest.raises(UploadError):
            register_user(db_session, media, _signup(), AVATAR, RESUME)

        avatar_id = media.uploads[0][1]
        assert media.deleted == [avatar_id]
        assert db_session.query(User).count() == 0

    def test_oversized_upload_rejected_before_upload(self, db_session, media):
        huge = FileUpload(b"x" * (5 * 1024 * 1024 + 1), "huge.png")
        with pytest.raises(ValidationError, match="too large"):
            register_user(db_session, media, _signup(), huge, RESUME)
        assert media.uploads == []

    def test_oversized_resume_uploads_nothing(self, db_session, media):
        huge = FileUpload(b"x" * (5 * 1024 * 1024 + 1), "huge.pdf")
        with pytest.raises(ValidationError, match="Resume file is too large"):
            register_user(db_session, media, _signup(), AVATAR, huge)
        assert media.uploads == []
