"""Input policies for member accounts (email, username, password)."""

from __future__ import annotations

import re

EMAIL_REGEX = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_-]{3,20}$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64


def is_valid_email(email: str | None) -> bool:
    """Return True when ``email`` is non-blank and looks like an address."""
    if not email or not email.strip():
        return False
    return EMAIL_REGEX.fullmatch(email.strip()) is not None


def is_valid_username(username: str | None) -> bool:
    return bool(username) and USERNAME_REGEX.fullmatch(username) is not None


def is_valid_password(password: str | None) -> bool:
    """
    Check the password policy.

    :param password: Raw password.
    :returns: True when the password has 8-64 characters, contains at least
        one letter, one digit and one special character, and no whitespace.
    """
    if not password:
        return False
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return False
    if any(ch.isspace() for ch in password):
        return False
    has_letter = any(ch.isalpha() for ch in password)
    has_digit = any(ch.isdigit() for ch in password)
    has_special = any(not ch.isalnum() for ch in password)
    return has_letter and has_digit and has_special
