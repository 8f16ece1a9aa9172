"""
Test the cover letter service functions
"""
from urllib.parse import parse_qs, urlparse

from jobportal.schemas.CoverLetterSchemas import CoverLetter
from jobportal.schemas.ResumeSchemas import PersonalInfo
from jobportal.services.cover_letter_service import (
    CoverLetterTone,
    generate_application_email,
    validate_cover_letter_data,
)


def test_validate_cover_letter_data_valid():
    """Test validation with valid data"""
    assert validate_cover_letter_data({"resume_id": 3, "tone": "enthusiastic"}) is True
    assert validate_cover_letter_data({"resume_id": 3}) is True


def test_validate_cover_letter_data_missing_resume():
    """Test validation with missing resume id"""
    assert validate_cover_letter_data({"tone": "formal"}) is False


def test_validate_cover_letter_data_bad_tone():
    """Test validation with a tone outside the enum"""
    assert validate_cover_letter_data({"resume_id": 3, "tone": "sarcastic"}) is False


def test_default_tone_is_formal():
    assert CoverLetter(id=1).tone == CoverLetterTone.FORMAL.value


def test_generate_application_email():
    letter = CoverLetter(
        id=1,
        job_title="Backend Engineer",
        company_name="Acme",
        letter_text="I build APIs that scale.\nSecond paragraph.",
    )
    info = PersonalInfo(full_name="Jane Doe", email="jane@x.com", phone="555", city="Oslo")

    email = generate_application_email(letter, info)

    assert email.subject == "Application for Backend Engineer – Jane Doe"
    assert "position at Acme. I build APIs that scale...." in email.body
    assert "Second paragraph" not in email.body
    assert email.body.endswith("Jane Doe\n555\njane@x.com\nOslo")
    assert email.as_text().startswith("Subject: Application for Backend Engineer")


def test_generate_application_email_placeholders():
    email = generate_application_email({"id": 2}, None)

    assert email.subject == "Application for [Job Title] – [Your Full Name]"
    assert "[Company Name]" in email.body
    assert "I am excited about this opportunity to contribute to your team." in email.body
    assert "[Your Phone Number]" in email.body


def test_preview_is_truncated():
    email = generate_application_email({"id": 3, "letter_text": "x" * 400}, {"full_name": "A"})
    assert ("x" * 150 + "...") in email.body
    assert ("x" * 151) not in email.body


def test_mailto_link():
    email = generate_application_email({"id": 4, "job_title": "Dev", "company_name": "A&B"}, {"full_name": "Jo"})
    link = email.mailto_link()

    assert link.startswith("mailto:?subject=")
    query = parse_qs(urlparse(link).query)
    assert query["subject"] == [email.subject]
    assert query["body"] == [email.body]
