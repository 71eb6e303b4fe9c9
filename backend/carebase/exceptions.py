"""Domain errors raised by the stores and translated by the HTTP layer."""

from __future__ import annotations


class CarebaseError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(CarebaseError):
    status_code = 400
    code = "VALIDATION_ERROR"


class MalformedIdError(CarebaseError):
    """Raised when a path identifier is not a valid UUID."""

    status_code = 400
    code = "MALFORMED_ID"

    def __init__(self, resource: str, raw_id: str) -> None:
        self.resource = resource
        self.raw_id = raw_id
        super().__init__(f"Invalid {resource} ID: {raw_id}")


class NotFoundError(CarebaseError):
    status_code = 404
    code = "NOT_FOUND"


class PatientNotFoundError(NotFoundError):
    code = "PATIENT_NOT_FOUND"

    def __init__(self) -> None:
        super().__init__("Patient not found")


class AppointmentNotFoundError(NotFoundError):
    code = "APPOINTMENT_NOT_FOUND"

    def __init__(self) -> None:
        super().__init__("Appointment not found")


class UnexpectedStoreError(CarebaseError):
    """Any database failure while serving a request."""

    status_code = 500
    code = "STORE_ERROR"


class DatabaseConnectionError(CarebaseError):
    """Raised when the database stays unreachable after every startup retry."""

    code = "DATABASE_UNAVAILABLE"

    def __init__(self, message: str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(message)
