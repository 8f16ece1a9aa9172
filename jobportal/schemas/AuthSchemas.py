import pydantic
from pydantic import BaseModel
from typing import Optional


class User(BaseModel):
    id: int
    full_name: Optional[str] = None
    email: str
    is_verified: bool = False

    model_config = pydantic.ConfigDict(extra="allow")


class AuthResult(BaseModel):
    """Payload of a successful POST /api/auth/login."""
    user: User
    token: str


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
