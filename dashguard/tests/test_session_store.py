from __future__ import annotations

import re
from datetime import timedelta

from dashguard.domain.users.entities import Identity


def test_create_session_issues_hex_token_with_week_expiry(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")

    session = stores.sessions.create_session(user_id)

    assert re.fullmatch(r"[0-9a-f]{64}", session.token)
    assert session.user_id == user_id
    assert session.expires_at == stores.clock.now + timedelta(days=7)
    assert stores.sessions.validate_session(session.token) == Identity(user_id, "alice")


def test_each_login_gets_its_own_token(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")

    first = stores.sessions.create_session(user_id)
    second = stores.sessions.create_session(user_id)

    assert first.token != second.token
    assert stores.sessions.validate_session(first.token) is not None
    assert stores.sessions.validate_session(second.token) is not None


def test_session_expires_at_exact_boundary(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")
    token = stores.sessions.create_session(user_id).token

    stores.clock.advance(timedelta(days=7) - timedelta(seconds=1))
    assert stores.sessions.validate_session(token) is not None

    stores.clock.advance(timedelta(seconds=1))
    assert stores.sessions.validate_session(token) is None


def test_validate_rejects_missing_unknown_and_oversized_tokens(stores) -> None:
    assert stores.sessions.validate_session(None) is None
    assert stores.sessions.validate_session("") is None
    assert stores.sessions.validate_session("f" * 64) is None
    assert stores.sessions.validate_session("f" * 10_000) is None


def test_delete_session(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")
    token = stores.sessions.create_session(user_id).token

    stores.sessions.delete_session(token)
    stores.sessions.delete_session(token)
    stores.sessions.delete_session("unknown")

    assert stores.sessions.validate_session(token) is None


def test_delete_all_sessions_for_user_leaves_others(stores) -> None:
    alice = stores.credentials.create_user("alice", "secret")
    bob = stores.credentials.create_user("bob", "secret")
    stores.sessions.create_session(alice)
    stores.sessions.create_session(alice)
    bob_token = stores.sessions.create_session(bob).token

    assert stores.sessions.delete_all_sessions_for_user(alice) == 2
    assert stores.sessions.delete_all_sessions_for_user(alice) == 0
    assert stores.sessions.validate_session(bob_token) == Identity(bob, "bob")


def test_sweep_expired_removes_only_expired_rows(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")
    old = stores.sessions.create_session(user_id).token
    stores.clock.advance(timedelta(days=3))
    fresh = stores.sessions.create_session(user_id).token
    stores.clock.advance(timedelta(days=4))

    assert stores.sessions.sweep_expired() == 1
    assert old not in stores.tokens.tokens
    assert stores.sessions.validate_session(fresh) is not None
