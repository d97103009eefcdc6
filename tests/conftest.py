"""
Shared fixtures.

API and service tests never touch Postgres: `store` swaps the repository
functions for an in-memory table, and `client` overrides the database
dependency so no pool is needed. Repository SQL is covered separately in
test_repository.py, and test_integration_postgres.py runs against a real
database when TEST_DATABASE_URL is set.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from core.db import get_database
from main import app
from students import repository, schemas

FAKE_DB = object()


class InMemoryStudents:
    """
    Behaves like the `student` table as seen through students.repository.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict] = {}
        self.next_id = 1
        self.mutations = 0

    def seed(self, s_name: str, s_course: str, course_fee) -> int:
        student_id = self.next_id
        self.next_id += 1
        self.rows[student_id] = {
            "s_id": student_id,
            "s_name": s_name,
            "s_course": s_course,
            "course_fee": Decimal(str(course_fee)),
        }
        return student_id

    async def find_all(self, db) -> list[dict]:
        return [dict(self.rows[key]) for key in sorted(self.rows)]

    async def find_by_id(self, db, student_id: int) -> dict | None:
        row = self.rows.get(student_id)
        return dict(row) if row is not None else None

    async def create(self, db, *, s_name: str, s_course: str, course_fee: Decimal) -> int:
        self.mutations += 1
        return self.seed(s_name, s_course, course_fee)

    async def update(self, db, student_id: int, changes: schemas.StudentUpdate) -> bool:
        supplied = changes.supplied_fields()
        if not supplied:
            return False
        row = self.rows.get(student_id)
        if row is None:
            return False
        if all(row[column] == value for column, value in supplied.items()):
            return False
        self.mutations += 1
        row.update(supplied)
        return True

    async def delete(self, db, student_id: int) -> bool:
        self.mutations += 1
        return self.rows.pop(student_id, None) is not None


@pytest.fixture()
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryStudents:
    fake = InMemoryStudents()
    for name in ("find_all", "find_by_id", "create", "update", "delete"):
        monkeypatch.setattr(repository, name, getattr(fake, name))
    return fake


@pytest.fixture(autouse=True)
def development_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "development")


@pytest.fixture()
def client(store: InMemoryStudents):
    app.dependency_overrides[get_database] = lambda: FAKE_DB
    # Not used as a context manager, so the lifespan (real pool) never runs.
    test_client = TestClient(app, raise_server_exceptions=False)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()
