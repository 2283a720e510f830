"""
Shared test fixtures.

Environment variables are set before the roster package is imported so the
settings point at throwaway locations.
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="roster-tests-")
os.environ.setdefault("PYTHON_ENV", "testing")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DIR}/roster.db")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TEST_DIR, "uploads"))
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from roster.core.database import Base, get_db  # noqa: E402
from roster.core.rate_limit import reset_memory_store  # noqa: E402
from roster.core.security import TokenConfig, hash_password  # noqa: E402
from roster.main import app  # noqa: E402
from roster.modules.accounts.repository import AccountRepository  # noqa: E402
from roster.modules.students.attachments import AttachmentStore, get_attachment_store  # noqa: E402
from roster.modules.students.models import Student  # noqa: E402

OPERATOR_USERNAME = "operator"
OPERATOR_PASSWORD = "correct-horse-battery"


@pytest.fixture
def token_config():
    """Token configuration with a fixed secret."""
    return TokenConfig(secret_key="unit-test-secret", algorithm="HS256", expires_minutes=60)


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def attachment_store(tmp_path):
    """Attachment store writing into a temporary directory."""
    return AttachmentStore(tmp_path / "uploads", "uploads")


@pytest.fixture
def create_fields():
    """Minimal valid create request fields (wire names, form-style strings)."""
    return {
        "name": "A",
        "surname": "B",
        "parentName": "C",
        "study": "CS",
        "prof": "eng",
        "serviceCost": "1000",
        "servicePayed": "200",
        "annualCost": "500",
    }


@pytest.fixture
def sample_student():
    """Create a sample student model."""
    student = MagicMock(spec=Student)
    student.id = str(uuid4())
    student.name = "Anna"
    student.surname = "Petrova"
    student.parent_name = "Ivan"
    student.mobile = "+100000001"
    student.parent_mobile = "+100000002"
    student.study = "CS"
    student.prof = "eng"
    student.year = 2024
    student.service_cost = 1000.0
    student.service_payed = 200.0
    student.annual_cost = 500.0
    student.annual_payed = 100.0
    student.is_session_open = False
    student.is_nastrfication = None
    student.is_nastrfication_payed = None
    student.passport = "uploads/1-aaaa-passport.pdf"
    student.diplom = None
    student.image = None
    return student


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    """Session factory bound to a fresh SQLite database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def api_client(session_maker, attachment_store):
    """HTTP client for the app, backed by the temporary database and upload dir."""

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_attachment_store] = lambda: attachment_store
    reset_memory_store()

    async with session_maker() as db:
        await AccountRepository.create(
            db,
            username=OPERATOR_USERNAME,
            password_hash=hash_password(OPERATOR_PASSWORD),
        )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    reset_memory_store()


@pytest_asyncio.fixture
async def auth_headers(api_client):
    """Authorization header for the seeded operator."""
    response = await api_client.post(
        "/login",
        json={"username": OPERATOR_USERNAME, "password": OPERATOR_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
