import os
import sys
import tempfile
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

_TEST_DB_PATH = Path(tempfile.gettempdir()) / f"pagecraft-test-{uuid.uuid4().hex}.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DB_PATH}")
os.environ.setdefault("TEMPLATE_STORE", "sql")
os.environ["LANGFUSE_ENABLED"] = "false"
os.environ["LANGFUSE_REQUIRED"] = "false"

from pagecraft.db.base import SessionLocal, init_db
from pagecraft.db.repositories.templates import TemplatesRepository
from pagecraft.main import app


@pytest.fixture(scope="session", autouse=True)
def create_schema() -> None:
    init_db()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def template_document(template_id: str = "tpl-1", slug: str = "launch") -> dict:
    return {
        "id": template_id,
        "slug": slug,
        "name": "Launch Page",
        "sections": [
            {
                "id": "hero0001",
                "type": "hero",
                "content": {"text": "Hi {{first_name}}", "heroSubheadline": "Made for {{company}}"},
                "style": {},
            },
            {
                "id": "head0002",
                "type": "headline",
                "content": {"text": "Why **us**"},
                "style": {"textAlign": "left"},
            },
            {"id": "faq00003", "type": "faq", "content": {}, "style": {}},
        ],
        "accent_color": None,
        "personalization_config": {},
    }


@pytest.fixture()
def seeded_template(db_session):
    suffix = uuid.uuid4().hex[:8]
    document = template_document(template_id=f"tpl-{suffix}", slug=f"launch-{suffix}")
    row = TemplatesRepository(db_session).create(
        template_id=document["id"],
        slug=document["slug"],
        name=document["name"],
        sections=document["sections"],
        accent_color=document["accent_color"],
        personalization_config=document["personalization_config"],
    )
    return row


@pytest.fixture()
def api_client():
    with TestClient(app) as client:
        yield client
