import pydantic
from pydantic import BaseModel, Field
from typing import List, Optional


# Server records carry extra bookkeeping fields (resume_id, created_at, ...)
# that differ between endpoints; keep them instead of failing validation.
_RECORD_CONFIG = pydantic.ConfigDict(extra="allow", populate_by_name=True)


class Resume(BaseModel):
    id: int
    user_id: Optional[int] = None
    title: Optional[str] = None
    template_name: Optional[str] = None
    career_objective: Optional[str] = None
    professional_summary: Optional[str] = None
    target_role: Optional[str] = None
    profile_picture_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = _RECORD_CONFIG


class PersonalInfo(BaseModel):
    id: Optional[int] = None
    resume_id: Optional[int] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None

    model_config = _RECORD_CONFIG


class Education(BaseModel):
    id: int
    resume_id: Optional[int] = None
    institute_name: Optional[str] = None
    degree: Optional[str] = None
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    grade: Optional[str] = None

    model_config = _RECORD_CONFIG


class Experience(BaseModel):
    id: int
    resume_id: Optional[int] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None

    model_config = _RECORD_CONFIG


class Skill(BaseModel):
    id: int
    resume_id: Optional[int] = None
    skill_name: str = ""

    model_config = _RECORD_CONFIG


class Language(BaseModel):
    id: int
    resume_id: Optional[int] = None
    language_name: str = ""

    model_config = _RECORD_CONFIG


class Certification(BaseModel):
    id: int
    resume_id: Optional[int] = None
    title: str = ""
    year: Optional[str] = None

    model_config = _RECORD_CONFIG


class Project(BaseModel):
    id: int
    resume_id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    technologies: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    project_url: Optional[str] = None
    display_order: int = 0
    created_at: Optional[str] = None

    model_config = _RECORD_CONFIG


class ResumeDetail(Resume):
    """A resume together with its personal info and every child collection."""
    personal_info: Optional[PersonalInfo] = None
    education: List[Education] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)


# Request payloads. None values are dropped before sending, so every update
# model only transmits the fields the caller actually set.

class ResumeCreate(BaseModel):
    title: Optional[str] = None
    template_name: Optional[str] = None
    career_objective: Optional[str] = None
    profile_picture_url: Optional[str] = None


class ResumeUpdate(BaseModel):
    title: Optional[str] = None
    template_name: Optional[str] = None
    career_objective: Optional[str] = None
    professional_summary: Optional[str] = None
    target_role: Optional[str] = None
    profile_picture_url: Optional[str] = None


class PersonalInfoUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None


class EducationCreate(BaseModel):
    institute_name: str = ""
    degree: str = ""
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    grade: Optional[str] = None


class EducationUpdate(BaseModel):
    institute_name: Optional[str] = None
    degree: Optional[str] = None
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    grade: Optional[str] = None


class ExperienceCreate(BaseModel):
    job_title: str = ""
    company_name: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class ExperienceUpdate(BaseModel):
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class SkillCreate(BaseModel):
    skill_name: str


class SkillUpdate(BaseModel):
    skill_name: Optional[str] = None


class LanguageCreate(BaseModel):
    language_name: str


class LanguageUpdate(BaseModel):
    language_name: Optional[str] = None


class CertificationCreate(BaseModel):
    title: str
    year: Optional[str] = None


class CertificationUpdate(BaseModel):
    title: Optional[str] = None
    year: Optional[str] = None


class ProjectCreate(BaseModel):
    title: str
    description: Optional[str] = None
    technologies: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    project_url: Optional[str] = None
    display_order: Optional[int] = None


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    technologies: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    project_url: Optional[str] = None
    display_order: Optional[int] = None
