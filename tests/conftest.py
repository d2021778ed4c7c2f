import os
import sys
from collections import defaultdict
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('SECRET_KEY', 'test-secret-key-with-enough-length-for-hs256')
os.environ.setdefault('ADMIN_EMAIL', 'root-admin@example.com')

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.exceptions import StorePersistenceError  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.database import build_engine, get_db  # noqa: E402
from app.models import Base, User  # noqa: E402
from app.repositories.record_store import RecordStore  # noqa: E402


class InMemoryRecordStore(RecordStore):
    """Dict-backed store; set ``offline`` to make every call fail."""

    def __init__(self):
        self.tables = defaultdict(dict)
        self.next_ids = defaultdict(int)
        self.offline = False

    def _check(self):
        if self.offline:
            raise StorePersistenceError('store offline')

    def get(self, model, record_id):
        self._check()
        return self.tables[model].get(record_id)

    def find_first(self, model, **criteria):
        rows = self.find_all(model, **criteria)
        return rows[0] if rows else None

    def find_all(self, model, **criteria):
        self._check()
        return [
            row
            for _, row in sorted(self.tables[model].items())
            if all(getattr(row, key) == value for key, value in criteria.items())
        ]

    def insert(self, model, **values):
        self._check()
        self.next_ids[model] += 1
        row = model(id=self.next_ids[model], **values)
        self.tables[model][row.id] = row
        return row

    def update(self, model, record_id, **values):
        self._check()
        row = self.tables[model].get(record_id)
        if row is None:
            return 0
        for key, value in values.items():
            setattr(row, key, value)
        return 1


@pytest.fixture
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture
def engine():
    test_engine = build_engine('sqlite://')
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    session = Session(bind=engine, autoflush=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(email, name='test', is_admin=False):
        user = User(
            email=email,
            name=name,
            locale='en',
            timezone='Asia/Riyadh',
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id):
        return {'Authorization': f'Bearer {create_access_token(user_id)}'}

    return _auth_headers
