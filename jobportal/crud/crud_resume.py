from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Type, Union

from pydantic import BaseModel

from jobportal.tools import endpoints
from jobportal.tools.api_client import ApiClient, request_body
from jobportal.schemas.envelope import Pagination
from jobportal.schemas.ResumeSchemas import (
    Resume,
    ResumeDetail,
    ResumeCreate,
    ResumeUpdate,
    PersonalInfo,
    PersonalInfoUpdate,
    Education,
    EducationCreate,
    EducationUpdate,
    Experience,
    ExperienceCreate,
    ExperienceUpdate,
    Skill,
    SkillCreate,
    SkillUpdate,
    Language,
    LanguageCreate,
    LanguageUpdate,
    Certification,
    CertificationCreate,
    CertificationUpdate,
    Project,
    ProjectCreate,
    ProjectUpdate,
)
from jobportal.services.resume_normalization import normalize_resume_detail

Payload = Union[BaseModel, Dict[str, Any]]


class Collection(NamedTuple):
    """Where a resume child collection lives on the API and how it comes back."""
    segment: str
    response_key: str
    model: Type[BaseModel]
    create_model: Type[BaseModel]
    update_model: Type[BaseModel]


COLLECTIONS: Dict[str, Collection] = {
    "education": Collection("education", "education", Education, EducationCreate, EducationUpdate),
    "experience": Collection("experience", "experience", Experience, ExperienceCreate, ExperienceUpdate),
    "skills": Collection("skills", "skill", Skill, SkillCreate, SkillUpdate),
    "languages": Collection("languages", "language", Language, LanguageCreate, LanguageUpdate),
    "certifications": Collection("certifications", "certification", Certification, CertificationCreate, CertificationUpdate),
    "projects": Collection("projects", "project", Project, ProjectCreate, ProjectUpdate),
}


def _collection(name: str) -> Collection:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown resume collection: {name}")


def get_resumes(client: ApiClient, token: str, page: int = 1, limit: int = 10) -> Tuple[List[Resume], Optional[Pagination]]:
    envelope = client.get(endpoints.resumes(), token=token, params={"page": page, "limit": limit})
    rows = envelope.payload("resumes") or []
    return [Resume.model_validate(r) for r in rows], envelope.pagination


def get_resume(client: ApiClient, resume_id: int, token: str) -> Optional[ResumeDetail]:
    envelope = client.get(endpoints.resume(resume_id), token=token)
    raw = envelope.payload("resume")
    if not raw:
        return None
    return ResumeDetail.model_validate(normalize_resume_detail(raw))


def create_resume(client: ApiClient, data: Union[ResumeCreate, Dict[str, Any]], token: str) -> Optional[Resume]:
    envelope = client.post(endpoints.resumes(), token=token, json=request_body(ResumeCreate, data))
    raw = envelope.payload("resume")
    return Resume.model_validate(raw) if raw else None


def update_resume(client: ApiClient, resume_id: int, data: Union[ResumeUpdate, Dict[str, Any]], token: str) -> Optional[Resume]:
    envelope = client.put(endpoints.resume(resume_id), token=token, json=request_body(ResumeUpdate, data))
    raw = envelope.payload("resume")
    return Resume.model_validate(raw) if raw else None


def delete_resume(client: ApiClient, resume_id: int, token: str) -> None:
    client.delete(endpoints.resume(resume_id), token=token)


def update_personal_info(
    client: ApiClient, resume_id: int, data: Union[PersonalInfoUpdate, Dict[str, Any]], token: str
) -> Optional[PersonalInfo]:
    envelope = client.put(endpoints.personal_info(resume_id), token=token, json=request_body(PersonalInfoUpdate, data))
    raw = envelope.payload("personal_info")
    return PersonalInfo.model_validate(raw) if raw else None


def add_item(client: ApiClient, resume_id: int, collection: str, data: Payload, token: str) -> Optional[BaseModel]:
    """POST a new row into one of the resume's child collections."""
    coll = _collection(collection)
    envelope = client.post(endpoints.resume_items(resume_id, coll.segment), token=token, json=request_body(coll.create_model, data))
    raw = envelope.payload(coll.response_key)
    return coll.model.model_validate(raw) if raw else None


def update_item(client: ApiClient, resume_id: int, collection: str, item_id: int, data: Payload, token: str) -> Optional[BaseModel]:
    coll = _collection(collection)
    envelope = client.put(
        endpoints.resume_item(resume_id, coll.segment, item_id), token=token, json=request_body(coll.update_model, data)
    )
    raw = envelope.payload(coll.response_key)
    return coll.model.model_validate(raw) if raw else None


def delete_item(client: ApiClient, resume_id: int, collection: str, item_id: int, token: str) -> None:
    coll = _collection(collection)
    client.delete(endpoints.resume_item(resume_id, coll.segment, item_id), token=token)
