"""
Shared error handling for the artifact client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class ArtifactException(Exception):
    """Base exception for artifact client errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidFormatError(ArtifactException):
    """Token could not be structurally decoded."""

    def __init__(self, message: str = "Invalid token specified", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_TOKEN_FORMAT", message, details)


class InvalidClaimError(ArtifactException):
    """Token decoded but its claims are missing or malformed."""

    def __init__(
        self,
        message: str = "Failed to get backend IDs: The provided JWT token is invalid and/or missing claims",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("INVALID_TOKEN_CLAIMS", message, details)


class RuntimeTokenError(ArtifactException):
    """Runtime token is not available in the environment."""

    def __init__(
        self,
        message: str = "Unable to get the ACTIONS_RUNTIME_TOKEN env variable",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("MISSING_RUNTIME_TOKEN", message, details)
