"""
Student business logic.

Rules:
- create needs s_name, s_course and course_fee
- update/delete check the record exists before mutating
- every failure is an AppError subclass carrying its HTTP status
"""

from __future__ import annotations

import logging

from core.db import Database
from core.errors import BadRequestError, NotFoundError, ServerError

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_student(row: dict) -> schemas.Student:
    return schemas.Student(
        s_id=int(row["s_id"]),
        s_name=str(row["s_name"]),
        s_course=str(row["s_course"]),
        course_fee=float(row["course_fee"]),
    )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _not_found(student_id: int) -> NotFoundError:
    return NotFoundError(f"Student with ID {student_id} not found.")


async def get_all(db: Database) -> list[schemas.Student]:
    rows = await repository.find_all(db)
    return [_to_student(row) for row in rows]


async def get_by_id(db: Database, student_id: int) -> schemas.Student:
    row = await repository.find_by_id(db, student_id)
    if row is None:
        raise _not_found(student_id)
    return _to_student(row)


async def create(db: Database, data: schemas.StudentCreate) -> schemas.Student:
    if _is_blank(data.s_name) or _is_blank(data.s_course) or data.course_fee is None:
        raise BadRequestError("Missing required fields: s_name, s_course, or course_fee.")

    student_id = await repository.create(
        db,
        s_name=data.s_name,
        s_course=data.s_course,
        course_fee=data.course_fee,
    )

    # Return what was actually stored, not what was sent.
    row = await repository.find_by_id(db, student_id)
    if row is None:
        logger.error("student_missing_after_insert s_id=%s", student_id)
        raise ServerError("Failed to create student. Please try again.")

    logger.info("student_created s_id=%s", student_id)
    return _to_student(row)


async def update(db: Database, student_id: int, data: schemas.StudentUpdate) -> bool:
    if not data.supplied_fields():
        raise BadRequestError("No fields provided for update.")

    if any(_is_blank(value) for value in (data.s_name, data.s_course) if value is not None):
        raise BadRequestError("s_name and s_course cannot be empty.")

    if await repository.find_by_id(db, student_id) is None:
        raise _not_found(student_id)

    updated = await repository.update(db, student_id, data)
    if not updated:
        raise BadRequestError(f"Failed to update student with ID {student_id}. No changes made.")

    logger.info("student_updated s_id=%s fields=%s", student_id, ",".join(data.supplied_fields()))
    return True


async def delete(db: Database, student_id: int) -> bool:
    if await repository.find_by_id(db, student_id) is None:
        raise _not_found(student_id)

    # Zero rows here means someone else deleted it between the two statements.
    deleted = await repository.delete(db, student_id)
    if not deleted:
        raise ServerError(f"Failed to delete student with ID {student_id}")

    logger.info("student_deleted s_id=%s", student_id)
    return True
