"""Error taxonomy. Each error maps to one HTTP status and renders as {"detail": ...}."""
from fastapi import HTTPException


class BadRequestError(HTTPException):
    """Missing or malformed fields, weak password, bad email shape."""

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=400, detail=detail)


class ConflictError(BadRequestError):
    """Requested booking slot is already held by a pending or confirmed booking.

    Surfaced as 400 like any other rejected input.
    """

    def __init__(self, detail: str = "This table is already booked for the selected time slot"):
        super().__init__(detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Not authorized"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)
