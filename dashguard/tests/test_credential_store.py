from __future__ import annotations

from http import HTTPStatus

import pytest

from dashguard.domain.users.entities import Identity
from dashguard.domain.users.exceptions import (LastUserError,
                                               UserAlreadyExistsError,
                                               UserNotFoundError)
from dashguard.shared.errors import ValidationError


def test_create_and_verify(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")

    assert stores.credentials.verify_credentials("alice", "secret") == Identity(user_id, "alice")
    assert stores.credentials.verify_credentials("alice", "wrong") is None


def test_create_user_stores_salted_hash_not_password(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")

    user = stores.users.find_by_id(user_id)
    assert user is not None
    assert user.password_hash != "secret"
    assert user.password_hash == f"hashed:{user.salt}:secret"


def test_unknown_user_still_derives_a_key(stores) -> None:
    stores.credentials.create_user("alice", "secret")
    stores.hasher.hashed.clear()

    assert stores.credentials.verify_credentials("mallory", "secret") is None
    assert len(stores.hasher.hashed) == 1


def test_duplicate_username_conflicts(stores) -> None:
    stores.credentials.create_user("alice", "secret")

    with pytest.raises(UserAlreadyExistsError) as exc:
        stores.credentials.create_user("alice", "other")

    assert exc.value.status == HTTPStatus.CONFLICT
    assert stores.users.count() == 1


@pytest.mark.parametrize(
    ("username", "password", "message"),
    [
        ("al", "secret", "Username must be at least 3 characters"),
        ("alice", "abc", "Password must be at least 4 characters"),
    ],
)
def test_create_user_validates_lengths(stores, username: str, password: str, message: str) -> None:
    with pytest.raises(ValidationError) as exc:
        stores.credentials.create_user(username, password)

    assert exc.value.message == message
    assert exc.value.status == HTTPStatus.BAD_REQUEST
    assert stores.users.count() == 0


def test_update_password_rotates_salt_and_revokes_sessions(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")
    old_salt = stores.users.find_by_id(user_id).salt
    token = stores.sessions.create_session(user_id).token

    stores.credentials.update_password(user_id, "better")

    assert stores.users.find_by_id(user_id).salt != old_salt
    assert stores.credentials.verify_credentials("alice", "secret") is None
    assert stores.credentials.verify_credentials("alice", "better") == Identity(user_id, "alice")
    assert stores.sessions.validate_session(token) is None


def test_update_password_rejects_short_password_and_unknown_user(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")

    with pytest.raises(ValidationError):
        stores.credentials.update_password(user_id, "abc")
    with pytest.raises(UserNotFoundError):
        stores.credentials.update_password(999, "better")


def test_delete_user_revokes_sessions(stores) -> None:
    stores.credentials.create_user("alice", "secret")
    bob = stores.credentials.create_user("bob", "secret")
    token = stores.sessions.create_session(bob).token

    stores.credentials.delete_user(bob)

    assert stores.users.find_by_id(bob) is None
    assert stores.sessions.validate_session(token) is None
    assert stores.credentials.verify_credentials("bob", "secret") is None


def test_delete_last_user_is_refused(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")

    with pytest.raises(LastUserError) as exc:
        stores.credentials.delete_user(user_id)

    assert exc.value.message == "Cannot delete the last user"
    assert exc.value.status == HTTPStatus.BAD_REQUEST
    assert stores.users.count() == 1


def test_delete_unknown_user(stores) -> None:
    stores.credentials.create_user("alice", "secret")

    with pytest.raises(UserNotFoundError):
        stores.credentials.delete_user(42)


def test_list_users_exposes_no_secrets(stores) -> None:
    stores.credentials.create_user("alice", "secret")
    stores.credentials.create_user("bob", "secret")

    users = stores.credentials.list_users()

    assert [u.username for u in users] == ["alice", "bob"]
    assert all(not hasattr(u, "password_hash") and not hasattr(u, "salt") for u in users)


def test_bootstrap_if_empty_only_seeds_once(stores) -> None:
    created = stores.credentials.bootstrap_if_empty("admin", "admin")

    assert created == Identity(1, "admin")
    assert stores.credentials.bootstrap_if_empty("admin", "admin") is None
    assert stores.users.count() == 1


def test_bootstrap_if_empty_yields_to_concurrent_seed(stores, monkeypatch: pytest.MonkeyPatch) -> None:
    stores.credentials.create_user("admin", "admin")
    # Another worker inserted the account after this one saw an empty table.
    monkeypatch.setattr(stores.users, "count", lambda: 0)

    assert stores.credentials.bootstrap_if_empty("admin", "admin") is None
    assert [u.username for u in stores.credentials.list_users()] == ["admin"]
