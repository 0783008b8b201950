"""Pytest configuration and fixtures."""
import os
import uuid
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Ensure the application uses a dedicated SQLite database during tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
# Minimum bcrypt cost keeps user fixtures fast
os.environ["BCRYPT_ROUNDS"] = "4"

from surveygenie.config import get_settings
from surveygenie.database import build_engine


BASE_DIR = Path(__file__).resolve().parent.parent
TEST_DB_PATH = Path("test.db").resolve()
settings = get_settings()

DEFAULT_PASSWORD = "password"


@pytest.fixture(scope="session", autouse=True)
def apply_migrations():
    """Apply database migrations against the test database."""
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

    alembic_cfg = AlembicConfig(str(BASE_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    command.upgrade(alembic_cfg, "head")

    yield

    if TEST_DB_PATH.exists():
        try:
            TEST_DB_PATH.unlink()
        except PermissionError:
            # On Windows the file may still be held open
            pass


@pytest.fixture
async def test_engine():
    """Create test database engine using the same database as migrations."""
    engine = build_engine(settings.database_url)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()
        await session.close()


@pytest.fixture
async def test_app(test_engine):
    """Create test app with database override."""
    from surveygenie.main import app
    from surveygenie.database import get_db

    async def override_get_db():
        async_session = async_sessionmaker(
            test_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        async with async_session() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def user_factory(db_session):
    """Factory for creating test users with default credentials."""
    from surveygenie.services import UserService

    user_service = UserService(db_session)

    async def _create_user(
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Test",
        last_name: str | None = None,
    ):
        # Unique emails across all tests sharing the database file
        unique_id = uuid.uuid4().hex[:8]
        return await user_service.register(
            email=email or f"user{unique_id}@example.com",
            password=password,
            first_name=first_name,
            last_name=last_name or f"User{unique_id}",
        )

    return _create_user


@pytest.fixture
def sample_survey_data():
    """Survey payload with one question of each type."""
    return {
        "title": "Test Survey",
        "description": "This is a test survey.",
        "questions": [
            {
                "text": "What is your favorite color?",
                "type": "Multiple Choice",
                "options": [
                    {"choice_text": "Red"},
                    {"choice_text": "Blue"},
                    {"choice_text": "Green"},
                ],
            },
            {"text": "Do you like surveys?", "type": "Yes/No"},
            {"text": "Anything else?", "type": "Text"},
        ],
    }


@pytest.fixture
async def survey_factory(db_session, sample_survey_data):
    """Factory creating a survey (default: sample_survey_data) for a user."""
    from surveygenie.services import SurveyService

    survey_service = SurveyService(db_session)

    async def _create_survey(user, data: dict | None = None):
        return await survey_service.create_survey(user.id, data or sample_survey_data)

    return _create_survey


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user."""
    from surveygenie.services import AuthService

    def _headers(user) -> dict[str, str]:
        token = AuthService().create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers
