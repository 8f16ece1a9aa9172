from typing import List

from fastapi import APIRouter

from jobportal.api.deps import http_error
from jobportal.core.errors import TemplateNotFoundError
from jobportal.schemas.template import TemplateInfo
from jobportal.services.template_catalog import get_template_info, list_templates

router = APIRouter()


@router.get("/", response_model=List[TemplateInfo])
async def read_templates():
    return list_templates()


@router.get("/{template_id}", response_model=TemplateInfo)
async def read_template(template_id: str):
    try:
        return get_template_info(template_id)
    except TemplateNotFoundError as e:
        raise http_error(e) from e
