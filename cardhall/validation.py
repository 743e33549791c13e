"""Checks on what a user types before it is sent, and the messages built from it."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "EMAIL_DOMAIN",
    "PHONE_PREFIX",
    "User",
    "ValidationError",
    "valid_username",
    "valid_password",
    "valid_name",
    "valid_email",
    "valid_phone_number",
    "sign_in_message",
    "sign_up_message",
    "interpret_sign_in_reply",
]

EMAIL_DOMAIN = "gmail.com"
PHONE_PREFIX = "98"

_ALNUM_MIN4 = re.compile(r"[a-zA-Z0-9]{4,}")
_ALNUM_MIN6 = re.compile(r"[a-zA-Z0-9]{6,}")
_LETTERS = re.compile(r"[a-zA-Z]+")
_EMAIL = re.compile(r"[\w.-]+@" + re.escape(EMAIL_DOMAIN), re.ASCII)
_PHONE = re.compile(re.escape(PHONE_PREFIX) + r"\d{10}", re.ASCII)


@dataclass
class User:
    """Account details entered when signing up."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    username: str = ""
    password: str = ""


class ValidationError(ValueError):
    """Input that the server would not accept; ``title`` names the kind of problem."""

    def __init__(self, message: str, title: str = "Invalid input") -> None:
        super().__init__(message)
        self.title = title


def valid_username(username: str) -> bool:
    """At least four ASCII letters or digits."""
    return _ALNUM_MIN4.fullmatch(username) is not None


def valid_password(password: str) -> bool:
    """At least six ASCII letters or digits."""
    return _ALNUM_MIN6.fullmatch(password) is not None


def valid_name(name: str) -> bool:
    """One or more ASCII letters."""
    return _LETTERS.fullmatch(name) is not None


def valid_email(email: str) -> bool:
    """Word characters, dots or dashes, at the accepted mail domain."""
    return _EMAIL.fullmatch(email) is not None


def valid_phone_number(phone_number: str) -> bool:
    """Twelve digits starting with the country prefix."""
    return _PHONE.fullmatch(phone_number) is not None


def sign_in_message(username: str, password: str) -> str:
    """Build the sign-in command; raises ValidationError for unusable input."""
    user = username.strip()
    secret = password.strip()
    if not user or not secret:
        raise ValidationError("Please enter username and password", "SignIn Error")
    if not valid_username(user):
        raise ValidationError(
            "Username must be at least 4 letters/numbers", "Invalid Username"
        )
    if not valid_password(secret):
        raise ValidationError(
            "Password must be at least 6 letters/numbers", "Invalid Password"
        )
    return f"2;{user};{secret}"


def sign_up_message(user: User) -> str:
    """Build the sign-up command; raises ValidationError on the first bad field."""
    first = user.first_name.strip()
    last = user.last_name.strip()
    username = user.username.strip()
    secret = user.password.strip()
    email = user.email.strip()
    phone = user.phone_number.strip()

    checks = (
        (valid_name(first), "First name must contain only letters."),
        (valid_name(last), "Last name must contain only letters."),
        (valid_username(username), "Username must be alphanumeric (min 4 chars)."),
        (valid_email(email), "Email must end with @gmail.com."),
        (valid_password(secret), "Password must be at least 6 letters or digits."),
        (valid_phone_number(phone), "Phone must be 12 digits starting with 98."),
    )
    for ok, message in checks:
        if not ok:
            raise ValidationError(message, "Signup Failed")
    return ";".join(["1", first, last, phone, email, username, secret])


def interpret_sign_in_reply(reply: str) -> bool:
    """True when the server accepted the sign-in, False when it refused it.

    Any other reply is an error and raises ``ValueError``.
    """
    text = reply.strip()
    if text == "1":
        return True
    if text == "0":
        return False
    raise ValueError("your enter the wrong password or username.")