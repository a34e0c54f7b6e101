from __future__ import annotations


class AppError(Exception):
    """Base error rendered by the API as ``{"success": false, "error": message}``."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404
