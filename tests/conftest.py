"""Pytest configuration for recruitment backend tests."""

import os

# Settings are read at import time, so the environment comes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TESTING"] = "true"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

from recruitment_backend.auth.access import principal_for
from recruitment_backend.auth.utils import get_password_hash
from recruitment_backend.core.database import db_manager
from recruitment_backend.core.event_bus import EventBus
from recruitment_backend.core.event_publisher import EventPublisher
from recruitment_backend.models import Account, JobPosting, PostingStatus, PostingType, Role
from recruitment_backend.repositories import AccountRepository, JobPostingRepository

from tests.helpers import TEST_PASSWORD


@pytest.fixture
def db():
    """Fresh schema on the shared in-memory database for every test."""
    db_manager.initialize()
    db_manager.create_tables()
    session = db_manager.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        db_manager.drop_tables()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def publisher(bus):
    return EventPublisher(bus)


@pytest.fixture
def account_factory(db):
    """Create accounts directly through the repository."""
    counter = {"n": 0}

    def make(role: Role = Role.HR, first_name: str = "Hana", last_name: str = "Reyes", email: str = None) -> Account:
        counter["n"] += 1
        return AccountRepository().create(
            db,
            email=email or f"{role.value.lower()}{counter['n']}@example.com",
            hashed_password=get_password_hash(TEST_PASSWORD),
            first_name=first_name,
            last_name=last_name,
            role=role.value
        )

    return make


@pytest.fixture
def posting_factory(db):
    def make(owner: Account, status: PostingStatus = PostingStatus.OPEN, title: str = "Backend Engineer") -> JobPosting:
        return JobPostingRepository().create(
            db,
            title=title,
            description="Build and run the recruitment platform APIs.",
            requirements=["Python", "SQL"],
            salary_min=50000,
            salary_max=80000,
            salary_currency="USD",
            location="Remote",
            type=PostingType.FULL_TIME.value,
            status=status.value,
            department="Engineering",
            created_by_id=owner.id
        )

    return make


@pytest.fixture
def hr(account_factory):
    return principal_for(account_factory(Role.HR, "Hana", "Reyes"))


@pytest.fixture
def candidate(account_factory):
    return principal_for(account_factory(Role.CANDIDATE, "Carl", "Diaz"))


@pytest.fixture
def client(db, bus):
    """HTTP client against an app sharing the test database and bus."""
    from recruitment_backend.main import create_app

    app = create_app(bus=bus, manage_database=False)
    with TestClient(app) as test_client:
        yield test_client


# Pytest markers for organizing tests
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        path = str(item.fspath)
        if "property_based" in path:
            item.add_marker(pytest.mark.property_test)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
