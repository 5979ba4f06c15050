from __future__ import annotations

import pytest
import structlog

from doubles import InMemoryDataSource, StaticSession
from hirevision.schemas import User


@pytest.fixture
def data_source() -> InMemoryDataSource:
    return InMemoryDataSource()


@pytest.fixture
def recruiter() -> User:
    return User(id="rec-1", email="dana@example.com", user_metadata={"full_name": "Dana Scully"})


@pytest.fixture
def session(recruiter: User) -> StaticSession:
    return StaticSession(recruiter)


@pytest.fixture(autouse=True)
def _reset_structlog():
    # CLI tests configure structlog against CliRunner's temporary stderr; undo it afterwards.
    yield
    structlog.reset_defaults()
