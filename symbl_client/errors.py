from __future__ import annotations

from typing import Iterable


class SymblClientError(Exception):
    pass


class InvalidInputError(SymblClientError, ValueError):
    pass


class ValidationError(InvalidInputError):
    def __init__(self, fields: Iterable[str], message: str | None = None):
        self.fields = tuple(fields)
        super().__init__(message or "Missing required fields: " + ", ".join(self.fields))


class AuthenticationFailedError(SymblClientError):
    pass


class JobTimeoutError(SymblClientError):
    def __init__(self, job_id: str, wait_seconds: float):
        super().__init__(f"Job {job_id} did not complete within {wait_seconds:g}s")
        self.job_id = job_id
        self.wait_seconds = wait_seconds
