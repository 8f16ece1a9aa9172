from typing import Any, Dict, List, Optional, Union

from jobportal.tools import endpoints
from jobportal.tools.api_client import ApiClient, request_body
from jobportal.schemas.CoverLetterSchemas import CoverLetter, CoverLetterCreate, CoverLetterUpdate


def create_cover_letter(
    client: ApiClient, data: Union[CoverLetterCreate, Dict[str, Any]], token: str
) -> Optional[CoverLetter]:
    envelope = client.post(endpoints.cover_letters(), token=token, json=request_body(CoverLetterCreate, data))
    raw = envelope.payload("cover_letter")
    return CoverLetter.model_validate(raw) if raw else None


def get_cover_letters(client: ApiClient, resume_id: int, token: str) -> List[CoverLetter]:
    envelope = client.get(endpoints.cover_letters_for_resume(resume_id), token=token)
    rows = envelope.payload("cover_letters") or []
    return [CoverLetter.model_validate(r) for r in rows]


def get_cover_letter(client: ApiClient, cover_letter_id: int, token: str) -> Optional[CoverLetter]:
    envelope = client.get(endpoints.cover_letter(cover_letter_id), token=token)
    raw = envelope.payload("cover_letter")
    return CoverLetter.model_validate(raw) if raw else None


def update_cover_letter(
    client: ApiClient, cover_letter_id: int, data: Union[CoverLetterUpdate, Dict[str, Any]], token: str
) -> Optional[CoverLetter]:
    envelope = client.put(endpoints.cover_letter(cover_letter_id), token=token, json=request_body(CoverLetterUpdate, data))
    raw = envelope.payload("cover_letter")
    return CoverLetter.model_validate(raw) if raw else None


def delete_cover_letter(client: ApiClient, cover_letter_id: int, token: str) -> None:
    client.delete(endpoints.cover_letter(cover_letter_id), token=token)
