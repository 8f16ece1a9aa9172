import pydantic
from pydantic import BaseModel
from typing import Any, Optional


class ApiErrorBody(BaseModel):
    message: Optional[str] = None
    statusCode: Optional[int] = None

    @pydantic.field_validator("message", mode="before")
    def _join_messages(cls, v: Any):
        # Request validators report one message per failed field
        if isinstance(v, list):
            return "; ".join(str(m) for m in v if m)
        return v


class Pagination(BaseModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    totalPages: int = 0
    hasMore: bool = False


class ApiEnvelope(BaseModel):
    """Envelope wrapped around every backend response:
    { success, data, error?, pagination?, message?, timestamp }
    """
    success: bool = False
    data: Any = None
    error: Optional[ApiErrorBody] = None
    pagination: Optional[Pagination] = None
    message: Optional[str] = None
    timestamp: Optional[str] = None

    model_config = pydantic.ConfigDict(extra="allow")

    @pydantic.field_validator("error", mode="before")
    def _coerce_error(cls, v: Any):
        # Some endpoints send a bare string instead of {message, statusCode}
        if isinstance(v, str):
            return {"message": v}
        return v

    def payload(self, key: str, default: Any = None) -> Any:
        """Return ``data[key]`` when data is a dict, else ``default``."""
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default
