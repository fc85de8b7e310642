"""Field normalization and fail-fast validation.

Each check raises ValidationError for the first violated constraint; callers
run checks in field order and never aggregate.
"""

import re

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

GENDERS = ("male", "female", "others")
PROFICIENCIES = ("Beginner", "Intermediate", "Advanced", "Expert")

MAX_PASSWORD_BYTES = 72  # bcrypt rejects longer inputs

# Upper bounds matching the column sizes
MAX_EMAIL_LENGTH = 255
MAX_PHONE_LENGTH = 30
MAX_URL_LENGTH = 500
MAX_TITLE_LENGTH = 255
MAX_STACK_LENGTH = 100
MAX_PERIOD_LENGTH = 50

_PHONE_RE = re.compile(r"^\+?[0-9][0-9 ()\-]{8,}[0-9]$")
_SYMBOL_RE = re.compile(r"[^A-Za-z0-9]")
_url_adapter = TypeAdapter(AnyHttpUrl)


def clean(value: str | None) -> str:
    return (value or "").strip()


def normalize_email(email: str | None) -> str:
    return clean(email).lower()


def normalize_gender(gender: str | None) -> str:
    return clean(gender).lower() or "others"


def normalize_tags(values: list[str] | str | None) -> list[str]:
    """Trim, drop blanks and de-duplicate while keeping first-seen order.

    Accepts a list or a single comma-separated string.
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            tag = part.strip()
            if tag and tag not in out:
                out.append(tag)
    return out


def merge_tags(existing: list[str] | None, new: list[str]) -> list[str]:
    """Set union of existing and new tags, existing order first."""
    return normalize_tags([*(existing or []), *new])


def require(value: str | None, label: str, max_len: int | None = None) -> str:
    value = clean(value)
    if not value:
        raise ValidationError(f"{label} is required")
    if max_len is not None:
        check_max_length(value, label, max_len)
    return value


def check_length(value: str, label: str, min_len: int = 0, max_len: int | None = None) -> None:
    if len(value) < min_len or (max_len is not None and len(value) > max_len):
        if max_len is None:
            raise ValidationError(f"{label} must be at least {min_len} characters long")
        raise ValidationError(f"{label} should be between {min_len} to {max_len} characters")


def check_max_length(value: str, label: str, max_len: int) -> None:
    if len(value) > max_len:
        raise ValidationError(f"{label} must be at most {max_len} characters long")


def check_email(email: str) -> None:
    check_max_length(email, "Email", MAX_EMAIL_LENGTH)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError("Email is not valid") from exc


def check_url(value: str, label: str) -> str:
    """Validate an http(s) URL; a missing scheme is treated as https."""
    candidate = value if "://" in value else f"https://{value}"
    try:
        _url_adapter.validate_python(candidate)
    except PydanticValidationError as exc:
        raise ValidationError(f"{label} is not valid") from exc
    check_max_length(candidate, label, MAX_URL_LENGTH)
    return candidate


def check_strong_password(password: str) -> None:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    if (
        len(password) < 8
        or not any(c.islower() for c in password)
        or not any(c.isupper() for c in password)
        or not any(c.isdigit() for c in password)
        or not _SYMBOL_RE.search(password)
    ):
        raise ValidationError(
            "Password should be strong (min 8 characters, 1 uppercase, 1 lowercase, 1 number, 1 symbol)"
        )


def check_gender(gender: str) -> None:
    if gender not in GENDERS:
        raise ValidationError(f"{gender} is not a valid gender type")


def check_phone(phone: str) -> None:
    if not 10 <= len(phone) <= MAX_PHONE_LENGTH or not _PHONE_RE.match(phone):
        raise ValidationError("Phone number is not valid")


def normalize_proficiency(value: str | None) -> str:
    value = require(value, "Proficiency")
    for level in PROFICIENCIES:
        if value.lower() == level.lower():
            return level
    raise ValidationError(f"Proficiency must be one of: {', '.join(PROFICIENCIES)}")


def validate_profile_fields(fields: dict) -> dict:
    """Validate and normalize the optional profile fields present in ``fields``.

    Used by both registration and profile edit; blank values are skipped.
    """
    out: dict = {}
    for key, label in (("first_name", "First name"), ("last_name", "Last name")):
        if key in fields and fields[key] is not None:
            value = clean(fields[key])
            if value:
                check_length(value, label, 2, 50)
                out[key] = value
    if clean(fields.get("gender")):
        gender = normalize_gender(fields["gender"])
        check_gender(gender)
        out["gender"] = gender
    if clean(fields.get("phone")):
        phone = clean(fields["phone"])
        check_phone(phone)
        out["phone"] = phone
    if clean(fields.get("about_me")):
        about_me = clean(fields["about_me"])
        check_length(about_me, "About Me", 5)
        out["about_me"] = about_me
    for key, label in (
        ("portfolio_url", "Portfolio URL"),
        ("github_url", "GitHub URL"),
        ("linkedin_url", "LinkedIn URL"),
    ):
        if clean(fields.get(key)):
            out[key] = check_url(clean(fields[key]), label)
    return out


def validate_signup(fields: dict) -> dict:
    """Validate a registration payload. Returns normalized fields."""
    first_name = clean(fields.get("first_name"))
    last_name = clean(fields.get("last_name"))
    if not first_name or not last_name:
        raise ValidationError("First name and last name are required")
    check_length(first_name, "First name", 2, 50)
    check_length(last_name, "Last name", 2, 50)

    email = normalize_email(fields.get("email"))
    check_email(email)

    password = fields.get("password") or ""
    check_strong_password(password)

    out = validate_profile_fields(fields)
    out.update(first_name=first_name, last_name=last_name, email=email, password=password)
    out.setdefault("gender", "others")
    return out
