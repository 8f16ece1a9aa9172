"""Turns populated resume and cover-letter HTML into downloadable PDFs."""
import logging
import os
import re
from typing import Optional

from jobportal.core.config import settings
from jobportal.schemas.CoverLetterSchemas import CoverLetter
from jobportal.schemas.ResumeSchemas import PersonalInfo, ResumeDetail
from jobportal.services.template_catalog import DEFAULT_TEMPLATE_ID
from jobportal.services.template_fetcher import TemplateFetcher
from jobportal.services.template_populator import populate, populate_cover_letter
from jobportal.tools.pdf_generator import ExportOptions, create_pdf

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize_filename(filename: str) -> str:
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", filename).strip().strip(".")
    if not cleaned:
        cleaned = "document"
    if not cleaned.lower().endswith(".pdf"):
        cleaned += ".pdf"
    return cleaned


def resume_filename(resume: ResumeDetail) -> str:
    name = (resume.personal_info.full_name if resume.personal_info else None) or ""
    return f"{name.strip() or 'Resume'} - Resume.pdf"


def cover_letter_filename(cover_letter: CoverLetter, personal_info: Optional[PersonalInfo]) -> str:
    name = ((personal_info.full_name if personal_info else None) or "").strip() or "CoverLetter"
    company = (cover_letter.company_name or "").strip() or "Application"
    return f"{name} - Cover Letter - {company}.pdf"


def export_pdf(
    populated_html: str,
    filename: str,
    output_dir: Optional[str] = None,
    options: Optional[ExportOptions] = None,
) -> str:
    """Write ``populated_html`` to ``{output_dir}/{filename}`` as a PDF.

    Returns:
        The path of the written file.
    """
    out_dir = str(output_dir or settings.PDF_OUTPUT_DIR)
    os.makedirs(out_dir, exist_ok=True)
    pdf_path = os.path.join(out_dir, sanitize_filename(filename))
    return create_pdf(populated_html, pdf_path, options=options)


def export_resume_pdf(
    resume: ResumeDetail,
    fetcher: Optional[TemplateFetcher] = None,
    output_dir: Optional[str] = None,
) -> str:
    fetcher = fetcher or TemplateFetcher()
    template_id = resume.template_name or DEFAULT_TEMPLATE_ID
    html = populate(fetcher.fetch(template_id), resume)
    logger.info(f"Exporting resume {resume.id} with template {template_id}")
    return export_pdf(html, resume_filename(resume), output_dir=output_dir)


def export_cover_letter_pdf(
    cover_letter: CoverLetter,
    personal_info: Optional[PersonalInfo] = None,
    fetcher: Optional[TemplateFetcher] = None,
    output_dir: Optional[str] = None,
) -> str:
    fetcher = fetcher or TemplateFetcher()
    html = populate_cover_letter(fetcher.fetch_cover_letter_template(), cover_letter, personal_info)
    logger.info(f"Exporting cover letter {cover_letter.id}")
    return export_pdf(html, cover_letter_filename(cover_letter, personal_info), output_dir=output_dir)
