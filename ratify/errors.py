"""Domain errors mapped to HTTP status codes"""
from typing import Dict, Optional


class RatifyError(Exception):
    status_code = 500

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers


class ValidationFailed(RatifyError):
    status_code = 400


class Unauthorized(RatifyError):
    status_code = 401


class Forbidden(RatifyError):
    status_code = 403


class NotFound(RatifyError):
    status_code = 404


class Conflict(RatifyError):
    status_code = 409


class LockedOut(RatifyError):
    status_code = 429

    def __init__(self, message: str, retry_after: int):
        super().__init__(message, headers={"Retry-After": str(retry_after)})
        self.retry_after = retry_after


class StoreError(RatifyError):
    status_code = 500
