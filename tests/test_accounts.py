import json

import pytest

from cardhall.accounts import UserInfo, UserStore, hash_password

PASSWORD = "password"


@pytest.fixture
def store(tmp_path):
    return UserStore(tmp_path / "users.json")


def _register(store, username="ana", password=PASSWORD):
    return store.register("Ana", "Lee", "phone-a", "ana@example.com", username, password)


def test_hash_password_known_vector():
    assert hash_password("abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_register_stores_hashed_record(store):
    assert _register(store) is True
    users = json.loads(store.path.read_text(encoding="utf-8"))
    assert users["ana"] == {
        "name": "Ana",
        "lastname": "Lee",
        "email": "ana@example.com",
        "phoneNumber": "phone-a",
        "password": hash_password(PASSWORD),
    }


def test_register_duplicate_is_refused(store):
    assert _register(store) is True
    assert _register(store) is False
    assert list(json.loads(store.path.read_text(encoding="utf-8"))) == ["ana"]


def test_sign_in(store):
    _register(store)
    assert store.sign_in("ana", PASSWORD) is True
    assert store.sign_in("ana", "secret") is False
    assert store.sign_in("bob", PASSWORD) is False


def test_sign_in_without_file_raises(store):
    with pytest.raises(FileNotFoundError):
        store.sign_in("ana", PASSWORD)


def test_update_info_renames_user(store):
    _register(store)
    new_password = "secret"
    store.update_info("ana", "Anna", "Lee", "phone-b", "anna@example.com", "anna", new_password)
    assert store.sign_in("anna", new_password) is True
    assert store.sign_in("ana", PASSWORD) is False
    assert store.get_info("anna") == UserInfo("Anna", "Lee", "anna@example.com", "phone-b")


def test_update_info_without_file_raises(store):
    with pytest.raises(FileNotFoundError):
        store.update_info("ana", "Ana", "Lee", "phone-a", "ana@example.com", "ana", PASSWORD)


def test_check_recovery(store):
    _register(store)
    assert store.check_recovery("ana", "phone-a") is True
    assert store.check_recovery("ana", "phone-b") is False
    assert store.check_recovery("bob", "phone-a") is False


def test_change_password_keeps_details(store):
    _register(store)
    new_password = "secret"
    store.change_password(new_password, "ana", "phone-a")
    assert store.sign_in("ana", new_password) is True
    assert store.sign_in("ana", PASSWORD) is False
    assert store.get_info("ana") == UserInfo("Ana", "Lee", "ana@example.com", "phone-a")


def test_get_info_unknown_user_is_blank(store):
    _register(store)
    assert store.get_info("bob") == UserInfo("", "", "", "")


def test_invalid_json_counts_as_empty(store):
    store.path.write_text("not json", encoding="utf-8")
    assert store.sign_in("ana", PASSWORD) is False
    assert _register(store) is True
    assert store.sign_in("ana", PASSWORD) is True