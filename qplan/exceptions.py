"""Error taxonomy shared by the store adapter, the workflow and the API layer.

Every error carries a machine-readable ``code`` so the UI can pick a specific
toast message instead of a generic failure.
"""
from fastapi import status


class ErrorCode:
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    MALFORMED_RECORD = "MALFORMED_RECORD"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    REQUEST_NOT_PENDING = "REQUEST_NOT_PENDING"
    ASSISTANT_UNAVAILABLE = "ASSISTANT_UNAVAILABLE"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"


class QPlanError(Exception):
    """Base class for all application-level errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreUnavailable(QPlanError):
    """Connectivity or permission failure talking to the store. Never retried."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = ErrorCode.STORE_UNAVAILABLE

    def __init__(self, message: str = "The data store is unavailable. Please try again."):
        super().__init__(message)


class MalformedRecord(QPlanError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = ErrorCode.MALFORMED_RECORD

    def __init__(self, collection: str, record_id: str, reason: str = ""):
        self.collection = collection
        self.record_id = record_id
        message = f"Malformed record {record_id} in '{collection}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotFound(QPlanError):
    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCode.NOT_FOUND

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class DuplicateRequest(QPlanError):
    """The requester already holds a pending request for this resource."""

    status_code = status.HTTP_409_CONFLICT
    code = ErrorCode.DUPLICATE_REQUEST

    def __init__(self, user_id: str, resource_id: str):
        self.user_id = user_id
        self.resource_id = resource_id
        super().__init__("You already have a pending request for this resource.")


class RequestNotPending(QPlanError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = ErrorCode.REQUEST_NOT_PENDING

    def __init__(self, request_id: str, current_status: str):
        self.request_id = request_id
        self.current_status = current_status
        super().__init__(f"Resource request {request_id} is already {current_status}")


class AssistantUnavailable(QPlanError):
    """The language-model answer service failed. Swallowed by the assistant."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = ErrorCode.ASSISTANT_UNAVAILABLE


class Unauthenticated(QPlanError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = ErrorCode.UNAUTHENTICATED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class Forbidden(QPlanError):
    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCode.FORBIDDEN

    def __init__(self, message: str = "Administrator access required"):
        super().__init__(message)
