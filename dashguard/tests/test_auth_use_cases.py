from __future__ import annotations

import pytest

from dashguard.application.use_cases.users.login_user import LoginUserUseCase
from dashguard.application.use_cases.users.logout_user import LogoutUserUseCase
from dashguard.domain.users.entities import Identity
from dashguard.domain.users.exceptions import (GENERIC_CREDENTIALS_MESSAGE,
                                               AuthenticationError)


def test_login_success_creates_session(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")
    use_case = LoginUserUseCase(credentials=stores.credentials, sessions=stores.sessions)

    result = use_case.execute("alice", "secret", "127.0.0.1")

    assert result.identity == Identity(user_id, "alice")
    assert result.session.user_id == user_id
    assert stores.sessions.validate_session(result.session.token) == result.identity


@pytest.mark.parametrize(("username", "password"), [("alice", "wrong"), ("mallory", "secret")])
def test_login_failures_are_indistinguishable(stores, username: str, password: str) -> None:
    stores.credentials.create_user("alice", "secret")
    use_case = LoginUserUseCase(credentials=stores.credentials, sessions=stores.sessions)

    with pytest.raises(AuthenticationError) as exc:
        use_case.execute(username, password)

    assert exc.value.message == GENERIC_CREDENTIALS_MESSAGE
    assert exc.value.status == 401
    assert stores.tokens.tokens == {}


def test_logout_revokes_token(stores) -> None:
    user_id = stores.credentials.create_user("alice", "secret")
    token = stores.sessions.create_session(user_id).token

    LogoutUserUseCase(sessions=stores.sessions).execute(token)

    assert stores.sessions.validate_session(token) is None


def test_logout_without_token_is_a_no_op(stores) -> None:
    LogoutUserUseCase(sessions=stores.sessions).execute(None)
    LogoutUserUseCase(sessions=stores.sessions).execute("")
