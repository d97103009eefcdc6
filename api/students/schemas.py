"""
Student API schemas (request/response models).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


# Same precision as the student.course_fee NUMERIC(10, 2) column.
FEE_MAX_DIGITS = 10
FEE_DECIMAL_PLACES = 2


class StudentCreate(BaseModel):
    # All optional on purpose: the service reports missing fields with a 400.
    s_name: str | None = None
    s_course: str | None = None
    course_fee: Decimal | None = Field(
        default=None,
        allow_inf_nan=False,
        max_digits=FEE_MAX_DIGITS,
        decimal_places=FEE_DECIMAL_PLACES,
    )


class StudentUpdate(BaseModel):
    """
    Partial update. A field left out (or sent as null) is not changed.
    """

    s_name: str | None = None
    s_course: str | None = None
    course_fee: Decimal | None = Field(
        default=None,
        allow_inf_nan=False,
        max_digits=FEE_MAX_DIGITS,
        decimal_places=FEE_DECIMAL_PLACES,
    )

    def supplied_fields(self) -> dict:
        return self.model_dump(exclude_none=True)


class Student(BaseModel):
    s_id: int
    s_name: str
    s_course: str
    course_fee: float
