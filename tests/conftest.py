from __future__ import annotations

import pytest

from fakes import InMemoryTapLogs, InMemoryUsers, make_user
from rfid_attendance.container import wire
from rfid_attendance.main import create_app


@pytest.fixture
def users_repo():
    return InMemoryUsers([make_user(1, uid="AB12CD", name="Juan Dela Cruz")])


@pytest.fixture
def logs_repo():
    return InMemoryTapLogs()


@pytest.fixture
def container(users_repo, logs_repo):
    return wire(users_repo=users_repo, logs_repo=logs_repo, queue_size=10)


@pytest.fixture
def app(container):
    app = create_app(container, settings_module="rfid_attendance.config.testing")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
