"""Tests for field normalization and validation helpers."""

import pytest

from portfolio_api.errors import ValidationError
from portfolio_api.validation import (
    check_email,
    check_phone,
    check_strong_password,
    check_url,
    merge_tags,
    normalize_proficiency,
    normalize_tags,
    validate_profile_fields,
    validate_signup,
)


class TestTags:
    def test_list_is_trimmed_and_deduplicated(self):
        assert normalize_tags([" Rust", "Go", "Rust ", ""]) == ["Rust", "Go"]

    def test_comma_separated_string(self):
        assert normalize_tags("FastAPI, SQLAlchemy,,FastAPI") == ["FastAPI", "SQLAlchemy"]

    def test_none_is_empty(self):
        assert normalize_tags(None) == []

    def test_merge_keeps_existing_order(self):
        assert merge_tags(["Rust"], ["Go", "Rust"]) == ["Rust", "Go"]
        assert merge_tags(None, ["Go"]) == ["Go"]


class TestChecks:
    @pytest.mark.parametrize("password", ["Secret#123", "Abcdefg1!", "short1!A"])
    def test_strong_passwords(self, password):
        check_strong_password(password)

    @pytest.mark.parametrize("password", ["alllowercase1!", "NoDigits!!", "NoSymbol123", "Ab1!"])
    def test_weak_passwords(self, password):
        with pytest.raises(ValidationError):
            check_strong_password(password)

    def test_password_byte_limit(self):
        check_strong_password("Aa1#" + "y" * 68)
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            check_strong_password("Aa1#" + "y" * 69)
        # multi-byte characters count by their encoded size
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            check_strong_password("Aa1#" + "\u00e9" * 35)

    def test_email(self):
        check_email("ana@example.com")
        with pytest.raises(ValidationError, match="Email is not valid"):
            check_email("ana@")
        with pytest.raises(ValidationError, match="Email must be at most 255"):
            check_email("a" * 250 + "@example.com")

    def test_url_gets_scheme(self):
        assert check_url("github.com/ana", "GitHub URL") == "https://github.com/ana"
        assert check_url("http://ana.dev", "Portfolio URL") == "http://ana.dev"

    def test_bad_url(self):
        with pytest.raises(ValidationError, match="Portfolio URL is not valid"):
            check_url("http://", "Portfolio URL")

    def test_overlong_url(self):
        with pytest.raises(ValidationError, match="GitHub URL must be at most 500"):
            check_url("github.com/" + "a" * 500, "GitHub URL")

    def test_phone(self):
        check_phone("+55 11 91234-5678")
        with pytest.raises(ValidationError, match="Phone number"):
            check_phone("12345")
        with pytest.raises(ValidationError, match="Phone number"):
            check_phone("1" * 40)

    def test_proficiency_is_canonicalized(self):
        assert normalize_proficiency("intermediate") == "Intermediate"
        with pytest.raises(ValidationError, match="Proficiency is required"):
            normalize_proficiency("")


class TestSignup:
    def test_names_required_first(self):
        with pytest.raises(ValidationError, match="First name and last name are required"):
            validate_signup({"first_name": "", "last_name": "", "email": "bad"})

    def test_normalizes(self):
        out = validate_signup(
            {
                "first_name": " Ana ",
                "last_name": "Silva",
                "email": " ANA@Example.com ",
                "password": "Secret#123",
            }
        )
        assert out["first_name"] == "Ana"
        assert out["email"] == "ana@example.com"
        assert out["gender"] == "others"

    def test_invalid_gender(self):
        with pytest.raises(ValidationError, match="not a valid gender"):
            validate_profile_fields({"gender": "robot"})

    def test_blank_profile_fields_are_skipped(self):
        assert validate_profile_fields({"phone": "  ", "about_me": None, "github_url": ""}) == {}

    def test_short_about_me(self):
        with pytest.raises(ValidationError, match="About Me must be at least 5"):
            validate_profile_fields({"about_me": "hey"})
