"""
Student CRUD endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from core.db import Database, get_database

from . import schemas, service
from .dependencies import get_student_id

router = APIRouter(prefix="/students")


@router.get("")
async def list_students(db: Database = Depends(get_database)) -> dict:
    students = await service.get_all(db)
    return {
        "status": "success",
        "results": len(students),
        "data": {"students": students},
    }


@router.get("/{student_id}")
async def get_student(
    student_id: int = Depends(get_student_id),
    db: Database = Depends(get_database),
) -> dict:
    student = await service.get_by_id(db, student_id)
    return {"status": "success", "data": {"student": student}}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_student(
    request: schemas.StudentCreate,
    db: Database = Depends(get_database),
) -> dict:
    student = await service.create(db, request)
    return {
        "status": "success",
        "message": "Student created successfully",
        "data": {"student": student},
    }


@router.patch("/{student_id}")
async def update_student(
    request: schemas.StudentUpdate,
    student_id: int = Depends(get_student_id),
    db: Database = Depends(get_database),
) -> dict:
    await service.update(db, student_id, request)
    return {
        "status": "success",
        "message": f"Student with ID {student_id} updated successfully",
    }


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: int = Depends(get_student_id),
    db: Database = Depends(get_database),
) -> Response:
    await service.delete(db, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
