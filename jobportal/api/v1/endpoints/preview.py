import asyncio
import logging
import os
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, HTMLResponse

from jobportal.api.deps import get_fetcher, get_store, http_error, require_token
from jobportal.core.errors import PortalError
from jobportal.schemas.ResumeSchemas import ResumeDetail
from jobportal.services.resume_export import export_cover_letter_pdf, export_resume_pdf
from jobportal.services.resume_store import ResumeStore
from jobportal.services.template_catalog import DEFAULT_TEMPLATE_ID
from jobportal.services.template_fetcher import TemplateFetcher
from jobportal.services.template_populator import populate

logger = logging.getLogger(__name__)

router = APIRouter()

PDF_MEDIA_TYPE = "application/pdf"


async def _load_resume(store: ResumeStore, resume_id: int, token: str) -> ResumeDetail:
    resume = await asyncio.to_thread(store.fetch_resume, resume_id, token)
    if resume is None:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


def _pdf_response(path: str) -> FileResponse:
    return FileResponse(path, media_type=PDF_MEDIA_TYPE, filename=os.path.basename(path))


@router.get("/resumes/{resume_id}", response_class=HTMLResponse)
async def preview_resume(
    resume_id: int,
    token: str = Depends(require_token),
    store: ResumeStore = Depends(get_store),
    fetcher: TemplateFetcher = Depends(get_fetcher),
):
    """Return the resume rendered into its selected template as HTML."""
    try:
        resume = await _load_resume(store, resume_id, token)
        template_html = await asyncio.to_thread(fetcher.fetch, resume.template_name or DEFAULT_TEMPLATE_ID)
    except PortalError as e:
        raise http_error(e) from e
    return HTMLResponse(populate(template_html, resume))


@router.get("/resumes/{resume_id}/pdf")
async def download_resume_pdf(
    resume_id: int,
    token: str = Depends(require_token),
    store: ResumeStore = Depends(get_store),
    fetcher: TemplateFetcher = Depends(get_fetcher),
):
    try:
        resume = await _load_resume(store, resume_id, token)
        path = await asyncio.to_thread(export_resume_pdf, resume, fetcher)
    except PortalError as e:
        raise http_error(e) from e
    return _pdf_response(path)


@router.get("/cover-letters/{cover_letter_id}/pdf")
async def download_cover_letter_pdf(
    cover_letter_id: int,
    resume_id: Optional[int] = None,
    token: str = Depends(require_token),
    store: ResumeStore = Depends(get_store),
    fetcher: TemplateFetcher = Depends(get_fetcher),
):
    """Render a saved cover letter to PDF.

    The applicant details come from ``resume_id`` when given, otherwise from
    the resume the cover letter belongs to.
    """
    try:
        cover_letter = await asyncio.to_thread(store.fetch_cover_letter, cover_letter_id, token)
        if cover_letter is None:
            raise HTTPException(status_code=404, detail="Cover letter not found")
        owner_id = resume_id or cover_letter.resume_id
        personal_info = None
        if owner_id:
            resume = await _load_resume(store, owner_id, token)
            personal_info = resume.personal_info
        path = await asyncio.to_thread(export_cover_letter_pdf, cover_letter, personal_info, fetcher)
    except PortalError as e:
        raise http_error(e) from e
    return _pdf_response(path)
