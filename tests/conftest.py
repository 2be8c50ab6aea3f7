# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from typing import Generator
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from main import create_app


# ------------------------------------------------------------------
# In-memory stand-in for the PostgREST query builder
# ------------------------------------------------------------------
class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Supports the subset of the builder the inquiry service uses."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = None
        self.payload = None
        self.count = None
        self.filters = []
        self.order_by = None
        self.bounds = None
        self.max_rows = None

    # operations
    def select(self, columns="*", count=None):
        self.op, self.count = "select", count
        return self

    def insert(self, row, returning=None):
        self.op, self.payload = "insert", row
        return self

    def update(self, patch):
        self.op, self.payload = "update", patch
        return self

    # modifiers
    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def _matching(self):
        rows = self.db.rows(self.table)
        return [r for r in rows if all(r.get(c) == v for c, v in self.filters)]

    def execute(self):
        if self.db.fail_with is not None:
            raise self.db.fail_with

        if self.op == "insert":
            return FakeResponse([copy.deepcopy(self.db.insert(self.table, self.payload))])

        if self.op == "update":
            matched = self._matching()
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse(copy.deepcopy(matched))

        rows = self._matching()
        total = len(rows)
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda r: r[column], reverse=desc)
        if self.bounds:
            start, end = self.bounds
            rows = rows[start:end + 1]
        if self.max_rows is not None:
            rows = rows[:self.max_rows]
        return FakeResponse(copy.deepcopy(rows), total if self.count else None)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.fail_with = None
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def insert(self, table, row):
        # Strictly increasing timestamps keep ordering deterministic
        self._clock += timedelta(seconds=1)
        stored = dict(copy.deepcopy(row))
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("status", "new")
        stored.setdefault("priority", "medium")
        stored.setdefault("assigned_to", None)
        stored.setdefault("admin_notes", None)
        stored["created_at"] = self._clock.isoformat()
        stored["updated_at"] = self._clock.isoformat()
        self.rows(table).append(stored)
        return stored

    def table(self, name):
        return FakeQuery(self, name)


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------
@pytest.fixture
def valid_payload():
    return {
        "name": "A",
        "email": "a@x.com",
        "phone": "123",
        "state": "Maharashtra",
        "city": "Pune",
        "category": "Residential",
        "description": "need 2BHK",
    }


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app, fake_supabase) -> Generator[TestClient, None, None]:
    """Test client whose inquiry routes talk to the in-memory store."""
    with patch("routers.inquiries.get_supabase_client", return_value=fake_supabase):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client


def make_inquiry(**overrides):
    """A stored inquiry row as the API returns it."""
    row = {
        "id": str(uuid.uuid4()),
        "name": "Asha Shah",
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "state": "Maharashtra",
        "city": "Pune",
        "area": None,
        "category": "Residential",
        "subcategory": None,
        "budget_range": None,
        "timeline": None,
        "description": "Looking for a 2BHK",
        "special_requirements": None,
        "status": "new",
        "priority": "medium",
        "assigned_to": None,
        "admin_notes": None,
        "documents": [],
        "created_at": "2024-01-01T10:00:00+00:00",
        "updated_at": "2024-01-01T10:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def inquiry_factory():
    return make_inquiry
