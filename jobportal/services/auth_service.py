"""Authentication state and the persisted session.

``AuthSessionManager`` owns the signed-in user and bearer token. The session
survives restarts through ``LocalStorage``, a small JSON file keyed like the
browser storage it replaces (``auth_token`` / ``auth_user``).
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pydantic

from jobportal.core.config import settings
from jobportal.core.errors import ApiError, VerificationRequiredError
from jobportal.schemas.AuthSchemas import AuthResult, ProfileUpdate, User
from jobportal.tools import endpoints
from jobportal.tools.api_client import ApiClient, clean_payload, request_body

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "auth_user"

SIGNUP_VERIFICATION = "signup_verification"
PASSWORD_RESET = "password_reset"


class LocalStorage:
    """String key/value store persisted as one JSON object on disk."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.SESSION_FILE)

    def _read(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class Session:
    user: User
    token: str


class AuthSessionManager:
    def __init__(self, client: Optional[ApiClient] = None, storage: Optional[LocalStorage] = None):
        self.client = client or ApiClient()
        self.storage = storage or LocalStorage()
        self.session: Optional[Session] = None
        self.is_loading = True
        self._restore()

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self.session else SessionState.ANONYMOUS

    @property
    def user(self) -> Optional[User]:
        return self.session.user if self.session else None

    @property
    def token(self) -> Optional[str]:
        return self.session.token if self.session else None

    def _restore(self) -> None:
        token = self.storage.get_item(TOKEN_KEY)
        raw_user = self.storage.get_item(USER_KEY)
        if token and raw_user:
            try:
                self.session = Session(user=User.model_validate_json(raw_user), token=token)
            except pydantic.ValidationError as e:
                logger.warning(f"Stored user record could not be parsed, starting anonymous: {e}")
        self.is_loading = False

    def _persist(self) -> None:
        self.storage.set_item(TOKEN_KEY, self.session.token)
        self.storage.set_item(USER_KEY, self.session.user.model_dump_json())

    def login(self, email: str, password: str) -> Session:
        """Sign in and persist the session.

        Raises:
            VerificationRequiredError: the account exists but its email is not verified.
            ApiError / NetworkError: any other failure.
        """
        try:
            envelope = self.client.post(endpoints.AUTH_LOGIN, json={"email": email, "password": password})
        except ApiError as e:
            logger.error(f"Login error: {e.message}")
            if "not verified" in e.message.lower():
                raise VerificationRequiredError(e.message, status_code=e.status_code) from e
            raise

        result = AuthResult.model_validate(envelope.data)
        self.session = Session(user=result.user, token=result.token)
        self._persist()
        logger.info(f"User {result.user.id} signed in")
        return self.session

    def register(self, full_name: str, email: str, password: str) -> None:
        self.client.post(
            endpoints.AUTH_REGISTER,
            json={"full_name": full_name, "email": email, "password": password},
        )

    def verify_email(self, email: str, otp_code: str) -> None:
        self.client.post(endpoints.AUTH_VERIFY_EMAIL, json={"email": email, "otp_code": otp_code})

    def resend_otp(self, email: str, purpose: str = SIGNUP_VERIFICATION) -> None:
        self.client.post(endpoints.AUTH_RESEND_OTP, json={"email": email, "purpose": purpose})

    def forgot_password(self, email: str) -> None:
        self.client.post(endpoints.AUTH_FORGOT_PASSWORD, json={"email": email})

    def reset_password(self, email: str, otp_code: str, new_password: str) -> None:
        self.client.post(
            endpoints.AUTH_RESET_PASSWORD,
            json={"email": email, "otp_code": otp_code, "new_password": new_password},
        )

    def update_profile(self, data: Optional[Union[ProfileUpdate, Dict[str, Any]]] = None, **fields: Any) -> User:
        """PUT the changed profile fields and merge the returned user into the session.

        Fields may come as a ``ProfileUpdate``, a dict, keyword arguments, or a mix.
        """
        if self.session is None:
            raise ApiError("Not authenticated", status_code=401)
        body = request_body(ProfileUpdate, {**clean_payload(data), **fields})
        envelope = self.client.put(endpoints.AUTH_PROFILE, token=self.token, json=body)
        returned = envelope.payload("user") or {}
        merged = User.model_validate({**self.session.user.model_dump(), **returned})
        self.session = Session(user=merged, token=self.session.token)
        self._persist()
        return merged

    def logout(self) -> None:
        self.session = None
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
