"""
Pytest configuration for Fragekasten tests.
Points the app at a throwaway SQLite database and a fake webhook.
"""

import os
import tempfile

# Must be set before any fragekasten imports
_test_data_dir = tempfile.mkdtemp(prefix="fragekasten_test_")
os.environ["FRAGEKASTEN_DATA_DIRECTORY"] = _test_data_dir
os.environ["FRAGEKASTEN_LOG_DIR"] = os.path.join(_test_data_dir, "logs")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_data_dir}/test.db"
os.environ["FRAGEKASTEN_DISCORD_WEBHOOK_URL"] = "https://discord.test/api/webhooks/1/token"
os.environ["FRAGEKASTEN_DISCORD_USER_ID"] = "123456789"
os.environ["FRAGEKASTEN_PAGE_OWNER_NAME"] = "Robin"
os.environ["FRAGEKASTEN_PAGE_QUESTION_MIN_LENGTH"] = "15"
os.environ["FRAGEKASTEN_PAGE_QUESTION_MAX_LENGTH"] = "300"
# TestClient connections have no real peer address
os.environ["FRAGEKASTEN_IP_SOURCE"] = "XRealIp"

import pytest
from sqlalchemy import delete
from sqlmodel import select

from fragekasten.core.database import get_engine, get_session_context, init_db
from fragekasten.models.question import Question

# Same bootstrap as the lifespan, so entering TestClient(app) finds a migrated DB
init_db()

# Load error registry so FragekastenError returns correct HTTP status codes
from fragekasten.core.errors.registry import error_registry
error_registry.load()


@pytest.fixture(autouse=True)
def empty_asks_table():
    """Every test starts without stored questions."""
    with get_engine().begin() as conn:
        conn.execute(delete(Question))
    yield


@pytest.fixture
def stored_questions():
    """Return a callable listing every row currently in the asks table."""
    def _list():
        with get_session_context() as session:
            return session.exec(select(Question).order_by(Question.id)).all()
    return _list
