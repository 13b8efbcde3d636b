# /tests/conftest.py

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.database import Database
from app.main import create_app
from app.services.database_service import DatabaseService

CONFIG_ENV_VARS = (
    "GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_API_KEY", "DATABASE_URL",
    "SQLITE_PATH", "APP_ENV", "GEMINI_MODEL", "LLM_TIMEOUT_SECONDS", "LLM_MAX_RETRIES",
    "LLM_TEMPERATURE", "OAUTH_REDIRECT_URL", "FRONTEND_URL", "SESSION_COOKIE_SECURE",
    "CORS_ORIGINS", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Removes every variable `load_settings` reads so each test starts from a blank environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def settings(tmp_path):
    """Settings for a throwaway SQLite database and no AI provider key."""
    return Settings(
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        sqlite_path=str(tmp_path / "app.db"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """A TestClient with the lifespan running, so app.state.db is ready."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_db_service(client):
    """A DatabaseService over the same database the running app uses."""
    session = client.app.state.db.session()
    yield DatabaseService(db_session=session)
    session.close()


@pytest.fixture
def database(tmp_path):
    """A standalone SQLite database with all tables created."""
    db = Database(f"sqlite:///{tmp_path / 'gateway.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def sample_files():
    return [
        {"filename": "app.js", "content": "console.log('hi');\n", "language": "javascript"},
        {"filename": "README.md", "content": "# Notes\n\nUnicode: héllo ✓", "language": "markdown"},
    ]


@pytest.fixture
def measure_loop_stall(client):
    """
    Sends one request to the running app from the test's own event loop and
    returns `(response, longest_stall)`, where `longest_stall` is the longest
    gap seen by a 10 ms ticker sharing that loop while the request ran.
    """
    async def run(method, url, **kwargs):
        loop = asyncio.get_running_loop()
        stalls = []
        done = asyncio.Event()

        async def ticker():
            while not done.is_set():
                started = loop.time()
                await asyncio.sleep(0.01)
                stalls.append(loop.time() - started)

        async def send():
            transport = httpx.ASGITransport(app=client.app)
            async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
                try:
                    return await http.request(method, url, **kwargs)
                finally:
                    done.set()

        tick_task = asyncio.create_task(ticker())
        response = await send()
        await tick_task
        return response, max(stalls, default=0.0)

    return run
