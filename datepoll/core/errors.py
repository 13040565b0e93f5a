"""
Service-level error taxonomy.

Services raise these exceptions with an ``ErrorKind``; the HTTP layer maps
the kind to a localized message and the exception to a status code.
"""

from enum import Enum


class ErrorKind(str, Enum):
    TITLE_LENGTH = "title_length"
    DESCRIPTION_LENGTH = "description_length"
    FIELD_LENGTH = "field_length"
    DATES_REQUIRED = "dates_required"
    INVALID_DATE = "invalid_date"
    END_BEFORE_START = "end_before_start"
    DUPLICATE_DATE = "duplicate_date"
    UNKNOWN_DATE = "unknown_date"
    NAME_LENGTH = "name_length"
    INVALID_STATUS = "invalid_status"
    DUPLICATE_RESPONSE_DATE = "duplicate_response_date"
    INVALID_REQUEST = "invalid_request"
    MISSING_ACCESS_FIELDS = "missing_access_fields"
    TOKEN_REQUIRED = "token_required"
    INVALID_TOKEN = "invalid_token"
    DEVICE_MISMATCH = "device_mismatch"
    EVENT_NOT_FOUND = "event_not_found"
    ALREADY_DELETED = "already_deleted"
    NAME_TAKEN = "name_taken"
    STORAGE_FAILURE = "storage_failure"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500

    def __init__(self, kind: ErrorKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


class ValidationError(ServiceError):
    status_code = 400


class AuthorizationError(ServiceError):
    """Missing token is 401, everything else 403"""

    def __init__(self, kind: ErrorKind = ErrorKind.INVALID_TOKEN, detail: str = ""):
        super().__init__(kind, detail)
        self.status_code = 401 if kind == ErrorKind.TOKEN_REQUIRED else 403


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, kind: ErrorKind = ErrorKind.EVENT_NOT_FOUND, detail: str = ""):
        super().__init__(kind, detail)


class AlreadyDeletedError(ServiceError):
    status_code = 400

    def __init__(self, kind: ErrorKind = ErrorKind.ALREADY_DELETED, detail: str = ""):
        super().__init__(kind, detail)


class ConflictError(ServiceError):
    status_code = 409

    def __init__(self, kind: ErrorKind = ErrorKind.NAME_TAKEN, detail: str = ""):
        super().__init__(kind, detail)


class DependencyFailure(ServiceError):
    """Storage failed; the message shown to callers is always generic"""

    def __init__(self, kind: ErrorKind = ErrorKind.STORAGE_FAILURE, detail: str = ""):
        super().__init__(kind, detail)
