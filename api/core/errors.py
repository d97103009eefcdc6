"""
Application error types shared by every layer.

Services raise these; `core/error_handlers.py` turns them into responses.
"""

from __future__ import annotations


class AppError(Exception):
    """
    An expected failure that maps to a specific HTTP status code.

    `status` is "fail" for client errors (4xx) and "error" for everything
    else, matching the JSON envelope clients receive.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.status = classify_status(self.status_code)
        self.is_operational = True


class BadRequestError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ServerError(AppError):
    status_code = 500


def classify_status(status_code: int) -> str:
    return "fail" if str(status_code).startswith("4") else "error"
