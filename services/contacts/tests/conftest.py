"""
Test configuration and fixtures for Contacts Service tests.

Service tests run against a private in-memory SQLite database; API tests
drive the real application (lifespan included) through TestClient.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import services.contacts.database as contacts_database
import services.contacts.settings as contacts_settings
from services.common.database_config import create_service_async_engine
from services.contacts.main import app
from services.contacts.schemas.contact import ContactWrite
from services.contacts.services.contact_service import ContactService


@pytest.fixture
def test_settings():
    """Point the service at an in-memory database for the duration of a test."""
    original = contacts_settings._settings
    contacts_settings._settings = contacts_settings.Settings(
        db_url_contacts="sqlite:///:memory:",
        DB_CREATE_TABLES=True,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
    )
    yield contacts_settings._settings
    contacts_settings._settings = original


@pytest.fixture
def client(test_settings):
    """TestClient whose lifespan creates the schema in a fresh database."""
    contacts_database._engine = None
    contacts_database._async_session_local = None
    with TestClient(app) as test_client:
        yield test_client
    contacts_database._engine = None
    contacts_database._async_session_local = None


@pytest_asyncio.fixture
async def db_session():
    """Session bound to a fresh in-memory database with the contacts table."""
    engine = create_service_async_engine("sqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(contacts_database.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def contact_service():
    """Create a ContactService instance."""
    return ContactService()


@pytest.fixture
def sample_contact_data():
    """Valid contact body for create and update requests."""
    return ContactWrite(
        name="Ada Lovelace",
        phone_number="020 7946 0018",
        email="ada@example.com",
        address="12 St James's Square, London",
    )


@pytest.fixture
def sample_contact_payload():
    """Valid contact body as JSON, in the camelCase wire format."""
    return {
        "name": "Ada Lovelace",
        "phoneNumber": "020 7946 0018",
        "email": "ada@example.com",
        "address": "12 St James's Square, London",
    }
