"""Error types shared by the REST client, the stores and the form controllers.

Every error carries a machine-readable ``kind`` next to the human message, so
callers branch on the kind rather than on backend wording.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    SERVER = "server"
    NETWORK = "network"
    VERIFICATION_REQUIRED = "verification_required"
    NOT_FOUND = "not_found"
    EXPORT = "export"


class PortalError(Exception):
    kind: ErrorKind = ErrorKind.SERVER

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientValidationError(PortalError):
    """Input rejected before any network call was made."""
    kind = ErrorKind.VALIDATION


class ApiError(PortalError):
    """The backend answered with a non-2xx status or ``success: false``."""
    kind = ErrorKind.SERVER

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class VerificationRequiredError(ApiError):
    """Login refused because the account email has not been verified yet."""
    kind = ErrorKind.VERIFICATION_REQUIRED


class NetworkError(PortalError):
    """Transport failure, or a response body that could not be parsed."""
    kind = ErrorKind.NETWORK


class TemplateNotFoundError(PortalError):
    kind = ErrorKind.NOT_FOUND


class PdfExportError(PortalError):
    kind = ErrorKind.EXPORT
