from typing import Any, Optional

from .roles import DenyReason


class CMSError(Exception):
    """Base for every error the route boundary translates into a response."""

    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(CMSError):
    status_code = 400
    code = "validation_error"
    default_message = "Validation error"


class AuthenticationError(CMSError):
    status_code = 401
    code = "authentication_failed"
    default_message = "Authentication required"


class AuthorizationError(CMSError):
    status_code = 403
    default_message = "Insufficient permissions"

    def __init__(self, message: Optional[str] = None, *, reason: DenyReason = DenyReason.ROLE_INSUFFICIENT):
        self.reason = reason
        super().__init__(message)

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.reason.value


class NotFoundError(CMSError):
    status_code = 404
    code = "not_found"

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class ConflictError(CMSError):
    status_code = 409
    code = "conflict"

    def __init__(self, message: Optional[str] = None, *, scope: str, key: Any):
        self.scope = scope
        self.key = key
        super().__init__(
            message or f"{scope} '{key}' already exists",
            details={"scope": scope, "key": key},
        )


class InternalError(CMSError):
    pass
