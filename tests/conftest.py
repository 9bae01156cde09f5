"""Shared fixtures: in-memory SQLite, mongomock and a recording notification queue."""

import os
from uuid import uuid4

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["NOTIFICATION_WEBHOOK_URL"] = ""

import mongomock
import pytest
from fastapi.testclient import TestClient

from trainermatch.core.auth import create_access_token
from trainermatch.core.config import get_settings

get_settings.cache_clear()

from trainermatch.db.mongodb import COLLECTIONS, set_mongo_client
from trainermatch.db.postgres import SessionLocal, get_engine, init_db
from trainermatch.main import app
from trainermatch.models import Base, College, Requirement, Trainer, User, UserRole, Vendor
from trainermatch.services.notification_service import NotificationService, get_notification_service


class FakeJob:
    def __init__(self, job_id):
        self.id = job_id


class FakeQueue:
    """Stands in for an rq.Queue; keeps every enqueued payload."""

    def __init__(self):
        self.payloads = []

    def enqueue(self, func, payload, **kwargs):
        self.payloads.append(payload)
        return FakeJob(f"job-{len(self.payloads)}")

    def of_type(self, notification_type):
        return [p for p in self.payloads if p["type"] == notification_type]


@pytest.fixture(autouse=True)
def database():
    init_db()
    yield
    Base.metadata.drop_all(bind=get_engine())


@pytest.fixture(autouse=True)
def mongo():
    client = mongomock.MongoClient()
    set_mongo_client(client)
    yield client
    set_mongo_client(None)


@pytest.fixture
def documents_collection(mongo):
    return mongo[get_settings().mongodb_db][COLLECTIONS["documents"]]


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def queue():
    return FakeQueue()


@pytest.fixture
def client(queue):
    app.dependency_overrides[get_notification_service] = lambda: NotificationService(queue=queue)
    yield TestClient(app)
    app.dependency_overrides.clear()


# ------------------------------------------------------------
# data helpers
# ------------------------------------------------------------

@pytest.fixture
def vendor(db):
    vendor = Vendor(name="Acme Training")
    db.add(vendor)
    db.commit()
    return vendor


@pytest.fixture
def college(db, vendor):
    college = College(name="MIT", location="Cambridge, MA", vendor_id=vendor.id)
    db.add(college)
    db.commit()
    return college


@pytest.fixture
def make_user(db):
    def _make(role: UserRole, email: str = None, vendor_id: str = None) -> User:
        user = User(
            email=email or f"{role.value.lower()}-{uuid4().hex[:8]}@example.com",
            role=role,
            vendor_id=vendor_id,
        )
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def make_trainer(db):
    def _make(name: str, email: str = None, user_id: str = None, **fields) -> Trainer:
        trainer = Trainer(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            user_id=user_id,
            **fields,
        )
        db.add(trainer)
        db.commit()
        return trainer
    return _make


@pytest.fixture
def make_requirement(db, vendor):
    def _make(title: str = "Python Bootcamp", tags=None, **fields) -> Requirement:
        requirement = Requirement(title=title, tags=tags or [], vendor_id=vendor.id, **fields)
        db.add(requirement)
        db.commit()
        return requirement
    return _make


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture
def vendor_admin(make_user, vendor):
    return make_user(UserRole.VENDOR_ADMIN, email="admin@acme.example.com", vendor_id=vendor.id)


@pytest.fixture
def vendor_user(make_user, vendor):
    return make_user(UserRole.VENDOR_USER, email="staff@acme.example.com", vendor_id=vendor.id)


@pytest.fixture
def super_admin(make_user):
    return make_user(UserRole.SUPER_ADMIN, email="root@platform.example.com")


@pytest.fixture
def trainer_user(make_user, make_trainer):
    user = make_user(UserRole.TRAINER, email="alice@example.com")
    trainer = make_trainer("Alice Johnson", email="alice@example.com", user_id=user.id, phone="+15550001")
    return user, trainer


@pytest.fixture
def auth():
    return auth_headers
