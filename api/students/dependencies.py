"""
Path-parameter dependencies for student routes.
"""

from __future__ import annotations

import re

from core.errors import BadRequestError

# `student.s_id` is a Postgres INTEGER.
MIN_STUDENT_ID = -(2**31)
MAX_STUDENT_ID = 2**31 - 1

# ASCII digits only; int() alone would also take "1_0", "+5" and non-ASCII digits.
_STUDENT_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_student_id(raw: str) -> int:
    candidate = (raw or "").strip()
    if not _STUDENT_ID_PATTERN.fullmatch(candidate):
        raise BadRequestError("Invalid student ID provided")

    student_id = int(candidate)
    if not MIN_STUDENT_ID <= student_id <= MAX_STUDENT_ID:
        raise BadRequestError("Invalid student ID provided")
    return student_id


async def get_student_id(student_id: str) -> int:
    return parse_student_id(student_id)
