from __future__ import annotations

import pytest

from fakes import InMemoryDeadlines, InMemoryMeetings, InMemoryProgress, InMemoryTasks
from taskboard.container import wire
from taskboard.main import create_app


@pytest.fixture
def tasks_repo():
    return InMemoryTasks()


@pytest.fixture
def deadlines_repo(tasks_repo):
    return InMemoryDeadlines(tasks_repo)


@pytest.fixture
def progress_repo(tasks_repo):
    return InMemoryProgress(tasks_repo)


@pytest.fixture
def meetings_repo():
    return InMemoryMeetings()


@pytest.fixture
def app(tasks_repo, deadlines_repo, progress_repo, meetings_repo):
    return create_app(
        container=wire(tasks_repo, deadlines_repo, progress_repo, meetings_repo),
        settings_module="taskboard.config.testing",
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: int, role: str = "Member"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role
        return client

    return _login
