import os

# Must be set before app.core.config builds the global settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest_students.db")

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import create_database_tables, drop_database_tables
from app.main import create_app
from app.schemas.student import StudentCreate
from app.services.student.student import StudentDAO


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'students.db'}",
        DEBUG=True,
        _env_file=None,
    )


@pytest.fixture
def dao(test_settings):
    dao = StudentDAO(test_settings)
    create_database_tables(dao.engine)
    yield dao
    drop_database_tables(dao.engine)
    dao.engine.dispose()


@pytest.fixture
def unreachable_dao(tmp_path):
    # sqlite cannot create a file inside a directory that does not exist
    broken = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'missing' / 'students.db'}",
        _env_file=None,
    )
    return StudentDAO(broken)


@pytest.fixture
def client(test_settings, dao):
    app = create_app(test_settings, dao=dao)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_student():
    def _make(code="S001", name="Ann", email="a@x.com", major="CS"):
        return StudentCreate(studentCode=code, fullName=name, email=email, major=major)
    return _make
