# errors.py
from typing import Any, Dict, Optional

from fastapi import status


class GadgetApiError(Exception):
    """
    Base class for every failure the API reports to its callers.
    Rendered as {"error": message, "code": code, **extra}.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code, **self.extra}


# Auth
class MissingCredentials(GadgetApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "MISSING_CREDENTIALS"
    message = "Email and password are required"


class WeakPassword(GadgetApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "WEAK_PASSWORD"
    message = "Password must be at least 6 characters long"


class UserExists(GadgetApiError):
    status_code = status.HTTP_409_CONFLICT
    code = "USER_EXISTS"
    message = "User with this email already exists"


class InvalidCredentials(GadgetApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class UserNotFound(GadgetApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"
    message = "User not found"


class MissingToken(GadgetApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "MISSING_TOKEN"
    message = "Access token required"


class InvalidToken(GadgetApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_TOKEN"
    message = "Invalid token"


class AuthenticationRequired(GadgetApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTHENTICATION_REQUIRED"
    message = "Authentication required"


class InsufficientPermissions(GadgetApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "INSUFFICIENT_PERMISSIONS"
    message = "Insufficient permissions"


# Gadgets
class GadgetNotFound(GadgetApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "GADGET_NOT_FOUND"
    message = "Gadget not found"


class MissingName(GadgetApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "MISSING_NAME"
    message = "Gadget name is required"


class InvalidStatus(GadgetApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_STATUS"
    message = "Invalid status"


class CodenameGenerationError(GadgetApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "CODENAME_GENERATION_ERROR"
    message = "Failed to generate unique codename"


class InvalidStatusForSelfDestruct(GadgetApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_STATUS_FOR_SELF_DESTRUCT"
    message = "Gadget cannot be self-destructed in its current status"


class InvalidConfirmationCode(GadgetApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_CONFIRMATION_CODE"
    message = "Invalid confirmation code"
