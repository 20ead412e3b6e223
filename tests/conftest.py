"""Test bootstrap.

Points the app at a throwaway file-backed SQLite database before anything
imports ``feedback_forms``; tables are created by the app's lifespan and
dropped after every API test.
"""

import asyncio
import csv
import io
import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="feedback_forms_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'tests.db')}"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from feedback_forms.core.database import drop_db  # noqa: E402
from feedback_forms.main import app  # noqa: E402
from feedback_forms.models.response import Response  # noqa: E402

API = "/api"


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    asyncio.run(drop_db())


def register(client, username="alice", password="secret123"):
    resp = client.post(f"{API}/auth/register", json={"username": username, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(account):
    return {"Authorization": f"Bearer {account['token']}"}


@pytest.fixture
def admin(client):
    return register(client)


@pytest.fixture
def headers(admin):
    return auth_headers(admin)


@pytest.fixture
def other_headers(client):
    return auth_headers(register(client, username="mallory"))


FEEDBACK_FORM = {
    "title": "Workshop feedback",
    "description": "Tell us how it went",
    "questions": [
        {"text": "Would you come again?", "type": "single-choice", "options": ["Yes", "No"], "required": True},
        {"text": "Overall rating", "type": "rating-1-5"},
    ],
}


def create_form(client, headers, payload=None):
    resp = client.post(f"{API}/forms", json=payload or FEEDBACK_FORM, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def submit(client, token, answers):
    return client.post(f"{API}/responses/public/{token}", json={"answers": answers})


def make_response(answers, minutes_ago=0):
    """Unsaved Response for pure aggregation tests."""
    return Response(
        id=uuid.uuid4(),
        form_id=uuid.uuid4(),
        answers=[{"question_text": q, "answer": a} for q, a in answers.items()],
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago),
    )


def parse_responses_csv(payload):
    """Read an export back into one dict per row, keyed by header."""
    reader = csv.DictReader(io.StringIO(payload, newline=""))
    return [dict(row) for row in reader]
