"""Thin requests-based client for the Job Portal REST backend.

Every response is wrapped in the ``{success, data, error?, pagination?}``
envelope. Failures are turned into typed errors here so callers never have
to inspect HTTP status codes themselves.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

import pydantic
import requests

from jobportal.core.config import settings
from jobportal.core.errors import ApiError, ClientValidationError, NetworkError
from jobportal.schemas.envelope import ApiEnvelope

logger = logging.getLogger(__name__)


def clean_payload(data: Any) -> Dict[str, Any]:
    """Drop None values from a pydantic model or dict before sending it."""
    if data is None:
        return {}
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json", exclude_none=True)
    return {k: v for k, v in dict(data).items() if v is not None}


def request_body(model: Type[pydantic.BaseModel], data: Any) -> Dict[str, Any]:
    """Check ``data`` against the request model and return it without None fields.

    Raises:
        ClientValidationError: the payload does not fit ``model``.
    """
    if not isinstance(data, model):
        try:
            data = model.model_validate(clean_payload(data))
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or model.__name__
            raise ClientValidationError(f"{field}: {first['msg']}") from e
    return clean_payload(data)


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.API_KEY
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    def headers(self, token: Optional[str] = None) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        """Issue one call and return the parsed envelope.

        Raises:
            NetworkError: transport failure or a body that is not JSON.
            ApiError: non-2xx status or ``success: false`` in the envelope.
        """
        url = self.url_for(path)
        try:
            response = self.session.request(
                method,
                url,
                headers=self.headers(token),
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError(f"Network error: {e}") from e

        if response.ok and not response.content:
            return ApiEnvelope(success=True)

        try:
            body = response.json()
        except ValueError:
            logger.error(f"{method} {path} returned a non-JSON body (status {response.status_code})")
            raise NetworkError(f"API request failed with status: {response.status_code}")

        if not isinstance(body, dict):
            body = {"success": response.ok, "data": body}

        try:
            envelope = ApiEnvelope.model_validate(body)
        except pydantic.ValidationError as e:
            logger.error(f"{method} {path} returned a malformed envelope (status {response.status_code}): {e}")
            raise NetworkError(f"API request failed with status: {response.status_code}") from e

        if not response.ok or not envelope.success:
            error = envelope.error
            message = (error.message if error else None) or f"HTTP error! status: {response.status_code}"
            status_code = error.statusCode if error else None
            if status_code is None and not response.ok:
                status_code = response.status_code
            raise ApiError(message, status_code=status_code)

        return envelope

    def get(self, path: str, **kwargs: Any) -> ApiEnvelope:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> ApiEnvelope:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> ApiEnvelope:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> ApiEnvelope:
        return self.request("DELETE", path, **kwargs)
