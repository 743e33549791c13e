"""User accounts kept in a JSON file keyed by username."""

from __future__ import annotations

import hashlib
import json
import threading
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Union

__all__ = ["hash_password", "UserInfo", "UserStore"]


def hash_password(password: str) -> str:
    """SHA-256 of the UTF-8 password, as lower-case hex."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class UserInfo:
    name: str
    last_name: str
    email: str
    phone_number: str


def _text(record: object, key: str) -> str:
    if isinstance(record, dict):
        value = record.get(key)
        if isinstance(value, str):
            return value
    return ""


def _record(name: str, last_name: str, phone_number: str, email: str, password: str) -> dict:
    return {
        "name": name,
        "lastname": last_name,
        "email": email,
        "phoneNumber": phone_number,
        "password": hash_password(password),
    }


class UserStore:
    """Reads and rewrites the whole accounts file for every operation.

    Methods that must read the file raise ``OSError`` when it cannot be read;
    unreadable JSON counts as an empty store.
    """

    def __init__(self, path: Union[str, PathLike] = "users.json") -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def _load(self, *, required: bool) -> dict:
        try:
            data = self.path.read_bytes()
        except OSError:
            if required:
                raise
            return {}
        try:
            users = json.loads(data)
        except ValueError:
            return {}
        return users if isinstance(users, dict) else {}

    def _save(self, users: dict) -> None:
        text = json.dumps(users, indent=4, sort_keys=True, ensure_ascii=False)
        self.path.write_text(text + "\n", encoding="utf-8")

    def register(self, name, last_name, phone_number, email, username, password) -> bool:
        """Add a user; False if the username is already taken."""
        with self._lock:
            users = self._load(required=False)
            if username in users:
                return False
            users[username] = _record(name, last_name, phone_number, email, password)
            self._save(users)
            return True

    def sign_in(self, username, password) -> bool:
        """True if the user exists and the password matches."""
        with self._lock:
            users = self._load(required=True)
        if username not in users:
            return False
        return _text(users[username], "password") == hash_password(password)

    def update_info(self, old_username, name, last_name, phone_number, email, username, password) -> None:
        """Replace a user's details, possibly under a new username."""
        with self._lock:
            users = self._load(required=True)
            users.pop(old_username, None)
            users[username] = _record(name, last_name, phone_number, email, password)
            self._save(users)

    def check_recovery(self, username, phone_number) -> bool:
        """True if the user exists with this phone number."""
        with self._lock:
            users = self._load(required=True)
        if username not in users:
            return False
        return _text(users[username], "phoneNumber") == phone_number

    def change_password(self, password, username, phone_number) -> None:
        """Set a new password, keeping the user's other details."""
        with self._lock:
            users = self._load(required=False)
            current = users.get(username)
            users[username] = {
                "name": _text(current, "name"),
                "lastname": _text(current, "lastname"),
                "email": _text(current, "email"),
                "phoneNumber": _text(current, "phoneNumber"),
                "password": hash_password(password),
            }
            self._save(users)

    def get_info(self, username) -> UserInfo:
        """Profile of a user; empty fields for an unknown user."""
        with self._lock:
            users = self._load(required=True)
        record = users.get(username)
        return UserInfo(
            name=_text(record, "name"),
            last_name=_text(record, "lastname"),
            email=_text(record, "email"),
            phone_number=_text(record, "phoneNumber"),
        )