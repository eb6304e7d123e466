"""Unit tests for PostgresForestReader session handling."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from whistle.domain.error import StorageUnavailable
from whistle.domain.value import PostId, UserId
from whistle.persistence.repository import PostgresForestReader


class FakeResult:
    """Empty result set."""

    def fetchall(self) -> list:
        return []

    def scalars(self) -> "FakeResult":
        return self

    def all(self) -> list:
        return []

    def scalar(self) -> int:
        return 0


class FakeSession:
    """Async session that records its lifetime and statements."""

    def __init__(self, error: Exception | None = None) -> None:
        self.open = False
        self.closed = False
        self.statements = 0
        self.error = error

    async def __aenter__(self) -> "FakeSession":
        self.open = True
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.open = False
        self.closed = True

    async def execute(self, stmt) -> FakeResult:
        assert self.open
        self.statements += 1
        if self.error is not None:
            raise self.error
        return FakeResult()


class FakeSessionFactory:
    """Hands out a new session per call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.sessions: list[FakeSession] = []
        self.error = error

    def __call__(self) -> FakeSession:
        session = FakeSession(self.error)
        self.sessions.append(session)
        return session


class TestPostgresForestReader:
    """Tests that every read owns a short-lived session."""

    @pytest.mark.asyncio
    async def test_each_read_opens_and_closes_its_own_session(self):
        """No session outlives the call that opened it."""
        # Arrange
        factory = FakeSessionFactory()
        reader = PostgresForestReader(factory)
        post_id = PostId(uuid4())
        user_id = UserId(uuid4())

        # Act
        comments = await reader.find_comments(post_id)
        count = await reader.count_active(post_id)
        roles = await reader.find_roles(user_id)
        votes = await reader.find_votes(user_id, [uuid4()])

        # Assert
        assert (comments, count, roles, votes) == ([], 0, set(), [])
        assert len(factory.sessions) == 4
        assert all(s.closed and s.statements == 1 for s in factory.sessions)

    @pytest.mark.asyncio
    async def test_empty_vote_lookup_opens_no_session(self):
        """Nothing to look up means no connection is taken."""
        # Arrange
        factory = FakeSessionFactory()
        reader = PostgresForestReader(factory)

        # Act
        votes = await reader.find_votes(UserId(uuid4()), [])

        # Assert
        assert votes == []
        assert factory.sessions == []

    @pytest.mark.asyncio
    async def test_failed_read_closes_session_and_reports_unavailable(self):
        """A connection failure is translated and the session released."""
        # Arrange
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))
        factory = FakeSessionFactory(error)
        reader = PostgresForestReader(factory)

        # Act & Assert
        with pytest.raises(StorageUnavailable):
            await reader.find_comments(PostId(uuid4()))
        (session,) = factory.sessions
        assert session.closed
