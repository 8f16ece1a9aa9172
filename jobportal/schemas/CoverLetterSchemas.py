import pydantic
from pydantic import BaseModel
from typing import Optional
from enum import Enum


class CoverLetterTone(str, Enum):
    FORMAL = "formal"
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ENTHUSIASTIC = "enthusiastic"


class CoverLetter(BaseModel):
    """Cover letter as returned by /api/cover-letters.

    ``tone`` stays a plain string: letters written before the tone list was
    fixed still have to load.
    """
    id: int
    resume_id: Optional[int] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    tone: str = CoverLetterTone.FORMAL.value
    letter_text: Optional[str] = None
    created_at: Optional[str] = None

    model_config = pydantic.ConfigDict(extra="allow")


class CoverLetterCreate(BaseModel):
    resume_id: int
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    tone: Optional[CoverLetterTone] = CoverLetterTone.FORMAL
    letter_text: Optional[str] = None


class CoverLetterUpdate(BaseModel):
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    tone: Optional[CoverLetterTone] = None
    letter_text: Optional[str] = None
