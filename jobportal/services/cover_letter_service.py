"""
Cover Letter Service

Validation of cover letter payloads and the application e-mail built from a
saved cover letter.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from jobportal.schemas.CoverLetterSchemas import CoverLetter, CoverLetterTone
from jobportal.schemas.ResumeSchemas import PersonalInfo

logger = logging.getLogger(__name__)

__all__ = ["CoverLetterTone", "ApplicationEmail", "validate_cover_letter_data", "generate_application_email"]

PREVIEW_LENGTH = 150


def validate_cover_letter_data(cover_letter_data: Dict[str, Any]) -> bool:
    """
    Validate a cover letter create/update payload.

    Args:
        cover_letter_data: The cover letter data to validate

    Returns:
        True if valid, False otherwise
    """
    if not cover_letter_data.get("resume_id"):
        return False

    tone = cover_letter_data.get("tone")
    if tone is not None:
        try:
            CoverLetterTone(tone)
        except ValueError:
            logger.warning(f"Rejected cover letter tone: {tone!r}")
            return False

    return True


@dataclass(frozen=True)
class ApplicationEmail:
    subject: str
    body: str

    def as_text(self) -> str:
        return f"Subject: {self.subject}\n\n{self.body}"

    def mailto_link(self, to: str = "") -> str:
        """Build a ``mailto:`` URL that opens the draft in a mail client."""
        safe = "!~*'()"
        return f"mailto:{quote(to, safe='@')}?subject={quote(self.subject, safe=safe)}&body={quote(self.body, safe=safe)}"


def generate_application_email(
    cover_letter: Union[CoverLetter, Dict[str, Any]],
    personal_info: Optional[Union[PersonalInfo, Dict[str, Any]]] = None,
) -> ApplicationEmail:
    """
    Draft the e-mail that accompanies a job application.

    Args:
        cover_letter: The saved cover letter the e-mail refers to
        personal_info: Applicant details from the resume; missing values become
            bracketed placeholders such as "[Your Full Name]"

    Returns:
        The subject line and body of the e-mail
    """
    if isinstance(cover_letter, dict):
        cover_letter = CoverLetter.model_validate(cover_letter)
    if isinstance(personal_info, dict):
        personal_info = PersonalInfo.model_validate(personal_info)
    pi = personal_info or PersonalInfo()

    full_name = pi.full_name or "[Your Full Name]"
    email = pi.email or "[Your Email]"
    phone = pi.phone or "[Your Phone Number]"
    job_title = cover_letter.job_title or "[Job Title]"
    company_name = cover_letter.company_name or "[Company Name]"

    first_line = (cover_letter.letter_text or "").split("\n")[0][:PREVIEW_LENGTH]
    opening = f"{first_line}..." if first_line else "I am excited about this opportunity to contribute to your team."

    body = (
        "Dear Hiring Manager,\n\n"
        f"I'm writing to apply for the {job_title} position at {company_name}. {opening}\n\n"
        "I have attached my resume and cover letter for your review. With my background and skills, "
        f"I'm confident in my ability to contribute effectively to {company_name}.\n\n"
        "Thank you for considering my application. "
        f"I'd love the chance to discuss how I can help {company_name} achieve its goals.\n\n"
        "Best regards,\n"
        f"{full_name}\n{phone}\n{email}\n{pi.city or ''}"
    )
    return ApplicationEmail(subject=f"Application for {job_title} – {full_name}", body=body)
