"""
Point the app at a throwaway SQLite file before anything imports liftbook,
then build the schema once. Runs before any test module loads.
"""
import os
import tempfile
import uuid

_DB_DIR = tempfile.mkdtemp(prefix="liftbook-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'liftbook.db')}"

import pytest  # noqa: E402

from liftbook.db import Base, SessionLocal, engine  # noqa: E402
from liftbook import models  # noqa: E402,F401
from liftbook.models import MuscleGroup  # noqa: E402
from liftbook.repositories.exercise_repo import ExerciseRepository  # noqa: E402
from liftbook.repositories.user_repo import UserRepository  # noqa: E402
from liftbook.security import create_access_token  # noqa: E402

Base.metadata.create_all(engine)


def unique_email():
    return f"u_{uuid.uuid4().hex[:10]}@example.com"


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    u = UserRepository(db).create(email=unique_email(), name="Lifter")
    db.commit()
    return u


@pytest.fixture
def make_exercise(db):
    def _make(name="Bench Press", muscle_group=MuscleGroup.CHEST, is_timed=False):
        ex = ExerciseRepository(db).create(name=name, muscle_group=muscle_group, is_timed=is_timed)
        db.commit()
        return ex
    return _make


@pytest.fixture
def bench(make_exercise):
    return make_exercise()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}
