"""
Shared test fixtures.

Every test gets its own in-memory SQLite database. Services are built on a
plain session so they can be exercised without the HTTP layer; the API client
shares the same engine through a get_db override.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from creator_leads.config import settings
from creator_leads.main import app
from creator_leads.models import create_all
from creator_leads.models.db import get_db
from creator_leads.services.conversation_service import ConversationManager
from creator_leads.services.lead_repository import LeadRepository
from creator_leads.services.lifecycle_service import LeadLifecycleManager
from creator_leads.services.template_service import TemplateStore

ACCOUNT_A = "account-a"
ACCOUNT_B = "account-b"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session):
    return LeadRepository(db_session)


@pytest.fixture
def lifecycle(repository):
    return LeadLifecycleManager(repository)


@pytest.fixture
def conversation(repository):
    return ConversationManager(repository)


@pytest.fixture
def template_store(db_session):
    return TemplateStore(db_session)


@pytest.fixture
def lead_fields():
    return {
        "brand_name": "Acme",
        "collaboration_type": "Instagram Reel",
        "budget_range": "$1,000-2,000",
    }


@pytest.fixture
def lead(lifecycle, lead_fields):
    return lifecycle.create_lead(ACCOUNT_A, lead_fields)


# ============================================================================
# HTTP
# ============================================================================

@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers_a():
    return {settings.ACCOUNT_HEADER: ACCOUNT_A}


@pytest.fixture
def headers_b():
    return {settings.ACCOUNT_HEADER: ACCOUNT_B}


@pytest.fixture
def lead_payload():
    return {
        "brandName": "Acme",
        "collaborationType": "Instagram Reel",
        "budgetRange": "$1,000-2,000",
    }


@pytest.fixture
def created_lead(client, headers_a, lead_payload):
    response = client.post("/leads", json=lead_payload, headers=headers_a)
    assert response.status_code == 201
    return response.json()["lead"]
