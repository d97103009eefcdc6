"""
Tests for students.repository.

A recording stand-in for core.db.Database captures every statement so the
SQL shape and its parameters can be checked without Postgres.
"""

from decimal import Decimal

import pytest

from students import repository, schemas


class RecordingDatabase:
    def __init__(self, *, one=None, many=None) -> None:
        self.one = one
        self.many = many or []
        self.calls: list[tuple[str, tuple]] = []

    async def fetch_one(self, sql, *args):
        self.calls.append((" ".join(sql.split()), args))
        return self.one

    async def fetch_all(self, sql, *args):
        self.calls.append((" ".join(sql.split()), args))
        return self.many


@pytest.mark.asyncio
class TestReads:
    async def test_find_all(self) -> None:
        rows = [{"s_id": 1, "s_name": "Ada", "s_course": "Maths", "course_fee": Decimal("1")}]
        db = RecordingDatabase(many=rows)

        assert await repository.find_all(db) == rows
        assert db.calls == [("SELECT s_id, s_name, s_course, course_fee FROM student ORDER BY s_id", ())]

    async def test_find_by_id_absent(self) -> None:
        db = RecordingDatabase(one=None)

        assert await repository.find_by_id(db, 3) is None
        sql, args = db.calls[0]
        assert sql.endswith("WHERE s_id = $1")
        assert args == (3,)


@pytest.mark.asyncio
class TestWrites:
    async def test_create_returns_new_id(self) -> None:
        db = RecordingDatabase(one={"s_id": 11})

        new_id = await repository.create(db, s_name="Ada", s_course="Maths", course_fee=Decimal("9.99"))

        assert new_id == 11
        sql, args = db.calls[0]
        assert sql == "INSERT INTO student (s_name, s_course, course_fee) VALUES ($1, $2, $3) RETURNING s_id"
        assert args == ("Ada", "Maths", Decimal("9.99"))

    async def test_values_are_never_inlined(self) -> None:
        db = RecordingDatabase(one={"s_id": 1})
        hostile = "x'); DROP TABLE student; --"

        await repository.create(db, s_name=hostile, s_course="Maths", course_fee=Decimal("1"))
        await repository.update(db, 1, schemas.StudentUpdate(s_name=hostile))

        for sql, args in db.calls:
            assert hostile not in sql
            assert hostile in args

    async def test_update_without_fields_skips_storage(self) -> None:
        db = RecordingDatabase(one={"s_id": 1})

        assert await repository.update(db, 1, schemas.StudentUpdate()) is False
        assert db.calls == []

    async def test_update_single_field(self) -> None:
        db = RecordingDatabase(one={"s_id": 4})

        assert await repository.update(db, 4, schemas.StudentUpdate(course_fee=Decimal("150"))) is True
        sql, args = db.calls[0]
        assert sql == (
            "UPDATE student SET course_fee = $1 "
            "WHERE s_id = $2 AND (course_fee IS DISTINCT FROM $1) RETURNING s_id"
        )
        assert args == (Decimal("150"), 4)

    async def test_update_reports_no_rows(self) -> None:
        db = RecordingDatabase(one=None)

        assert await repository.update(db, 4, schemas.StudentUpdate(s_name="Ada")) is False

    async def test_delete(self) -> None:
        assert await repository.delete(RecordingDatabase(one={"s_id": 2}), 2) is True
        assert await repository.delete(RecordingDatabase(one=None), 2) is False


class TestBuildUpdate:
    def test_only_supplied_columns_in_fixed_order(self) -> None:
        changes = schemas.StudentUpdate(course_fee=Decimal("5"), s_name="Bea")

        sql, args = repository.build_update(9, changes)

        assert sql == (
            "UPDATE student SET s_name = $1, course_fee = $2 "
            "WHERE s_id = $3 AND (s_name IS DISTINCT FROM $1 OR course_fee IS DISTINCT FROM $2) "
            "RETURNING s_id"
        )
        assert args == ["Bea", Decimal("5"), 9]

    def test_nothing_supplied(self) -> None:
        assert repository.build_update(9, schemas.StudentUpdate(s_name=None)) is None
