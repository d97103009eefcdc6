"""
Student persistence (raw SQL).

One statement per function. Values always travel as $n parameters;
column names in the dynamic UPDATE come from `UPDATABLE_COLUMNS` only.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from core.db import Database

from . import schemas

UPDATABLE_COLUMNS = ("s_name", "s_course", "course_fee")


async def find_all(db: Database) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT s_id, s_name, s_course, course_fee
        FROM student
        ORDER BY s_id
        """
    )


async def find_by_id(db: Database, student_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT s_id, s_name, s_course, course_fee
        FROM student
        WHERE s_id = $1
        """,
        student_id,
    )


async def create(db: Database, *, s_name: str, s_course: str, course_fee: Decimal) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO student (s_name, s_course, course_fee)
        VALUES ($1, $2, $3)
        RETURNING s_id
        """,
        s_name,
        s_course,
        course_fee,
    )
    if row is None:
        raise RuntimeError("Failed to insert student.")
    return int(row["s_id"])


def build_update(student_id: int, changes: schemas.StudentUpdate) -> tuple[str, list[Any]] | None:
    """
    Build the UPDATE for exactly the supplied fields, or None if there are none.

    Rows whose supplied columns already hold the new values are left out,
    so "nothing changed" reads as zero affected rows.
    """
    supplied = changes.supplied_fields()
    assignments: list[str] = []
    differs: list[str] = []
    args: list[Any] = []
    for column in UPDATABLE_COLUMNS:
        if column not in supplied:
            continue
        args.append(supplied[column])
        assignments.append(f"{column} = ${len(args)}")
        differs.append(f"{column} IS DISTINCT FROM ${len(args)}")

    if not assignments:
        return None

    args.append(student_id)
    sql = (
        f"UPDATE student SET {', '.join(assignments)} "
        f"WHERE s_id = ${len(args)} AND ({' OR '.join(differs)}) "
        "RETURNING s_id"
    )
    return sql, args


async def update(db: Database, student_id: int, changes: schemas.StudentUpdate) -> bool:
    statement = build_update(student_id, changes)
    if statement is None:
        return False
    sql, args = statement
    row = await db.fetch_one(sql, *args)
    return row is not None


async def delete(db: Database, student_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM student
        WHERE s_id = $1
        RETURNING s_id
        """,
        student_id,
    )
    return row is not None
