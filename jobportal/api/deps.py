from fastapi import Depends, HTTPException

from jobportal.core.errors import (
    ApiError,
    ClientValidationError,
    ErrorKind,
    PdfExportError,
    PortalError,
    TemplateNotFoundError,
)
from jobportal.services.auth_service import AuthSessionManager
from jobportal.services.resume_store import ResumeStore
from jobportal.services.template_fetcher import TemplateFetcher


def get_auth() -> AuthSessionManager:
    return AuthSessionManager()


def get_store() -> ResumeStore:
    return ResumeStore()


def get_fetcher() -> TemplateFetcher:
    return TemplateFetcher()


def require_token(auth: AuthSessionManager = Depends(get_auth)) -> str:
    """Bearer token of the persisted session; 401 when nobody is signed in."""
    if not auth.token:
        raise HTTPException(status_code=401, detail="Not signed in")
    return auth.token


def http_error(error: PortalError) -> HTTPException:
    """Map a PortalError onto the HTTP status the preview service answers with."""
    if isinstance(error, ApiError):
        status_code = error.status_code if error.status_code and error.status_code >= 400 else 502
        return HTTPException(status_code=status_code, detail=error.message)
    if isinstance(error, TemplateNotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, PdfExportError):
        return HTTPException(status_code=500, detail=error.message)
    if isinstance(error, ClientValidationError):
        return HTTPException(status_code=400, detail=error.message)
    if error.kind == ErrorKind.NETWORK:
        return HTTPException(status_code=502, detail=error.message)
    return HTTPException(status_code=500, detail=error.message)
