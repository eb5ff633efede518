"""Unit tests for the session dependencies' commit and rollback behaviour.

A recording session stands in for AsyncSession so no database is needed.
"""

import pytest

from fleet_access.domain.exceptions import AccountLockedError, InvalidCredentialsError
from fleet_access.infrastructure.persistence import database


class _RecordingSession:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def __aenter__(self) -> "_RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.calls.append("close")

    async def commit(self) -> None:
        self.calls.append("commit")

    async def rollback(self) -> None:
        self.calls.append("rollback")


@pytest.fixture
def session(monkeypatch) -> _RecordingSession:
    recording = _RecordingSession()
    monkeypatch.setattr(database, "_require_session_factory", lambda: lambda: recording)
    return recording


async def test_credential_check_commits_on_success(session) -> None:
    gen = database.get_db_credential_check()
    assert await gen.__anext__() is session
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()
    assert session.calls == ["commit", "close"]


@pytest.mark.parametrize(
    "error", [InvalidCredentialsError(), AccountLockedError(None)], ids=["401", "423"]
)
async def test_credential_check_keeps_failed_attempt_writes(session, error) -> None:
    gen = database.get_db_credential_check()
    await gen.__anext__()
    with pytest.raises(type(error)):
        await gen.athrow(error)
    assert session.calls == ["commit", "close"]


async def test_credential_check_rolls_back_unexpected_errors(session) -> None:
    gen = database.get_db_credential_check()
    await gen.__anext__()
    with pytest.raises(RuntimeError):
        await gen.athrow(RuntimeError("connection dropped"))
    assert session.calls == ["rollback", "close"]
