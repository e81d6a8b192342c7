# bookr/core/exceptions.py
"""
Application exception hierarchy.

Every error the services raise derives from ``BookrException`` so the
exception handlers can render them uniformly. None of them are fatal to
the process; they all map to an HTTP status.
"""

from typing import Optional

from fastapi import status


class BookrException(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "An unexpected error occurred."

    def __init__(self, detail: Optional[str] = None, **context):
        self.detail = detail or self.default_detail
        self.context = context
        super().__init__(self.detail)


# ------ Client errors ------
class ValidationError(BookrException):
    status_code = 422
    default_detail = "Invalid input."


class ResourceNotFound(BookrException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."

    def __init__(self, detail: Optional[str] = None, resource_type: Optional[str] = None):
        super().__init__(detail, resource_type=resource_type)
        self.resource_type = resource_type


class ResourceAlreadyExists(BookrException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."

    def __init__(self, detail: Optional[str] = None, resource_type: Optional[str] = None):
        super().__init__(detail, resource_type=resource_type)
        self.resource_type = resource_type


class NotAuthorized(BookrException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not authorized to perform this action."


# ------ Authentication ------
class InvalidCredentials(BookrException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "No account is registered with this email."


class InvalidToken(BookrException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials."


class TokenExpired(InvalidToken):
    default_detail = "Token has expired."


class TokenTypeInvalid(InvalidToken):
    default_detail = "Token type is invalid."


# ------ Server side ------
class ExternalServiceError(BookrException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "An external service failed."

    def __init__(self, detail: Optional[str] = None, service: Optional[str] = None):
        super().__init__(detail, service=service)
        self.service = service


class InternalServerError(BookrException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
