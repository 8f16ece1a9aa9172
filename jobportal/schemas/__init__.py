from .ResumeSchemas import (
	Resume,
	ResumeDetail,
	PersonalInfo,
	Education,
	Experience,
	Skill,
	Language,
	Certification,
	Project,
	ResumeCreate,
	ResumeUpdate,
	PersonalInfoUpdate,
)
from .CoverLetterSchemas import CoverLetter, CoverLetterTone, CoverLetterCreate, CoverLetterUpdate
from .AuthSchemas import User, AuthResult, ProfileUpdate
from .envelope import ApiEnvelope, ApiErrorBody, Pagination
from .template import TemplateInfo

__all__ = [
	"Resume",
	"ResumeDetail",
	"PersonalInfo",
	"Education",
	"Experience",
	"Skill",
	"Language",
	"Certification",
	"Project",
	"ResumeCreate",
	"ResumeUpdate",
	"PersonalInfoUpdate",
	"CoverLetter",
	"CoverLetterTone",
	"CoverLetterCreate",
	"CoverLetterUpdate",
	"User",
	"AuthResult",
	"ProfileUpdate",
	"ApiEnvelope",
	"ApiErrorBody",
	"Pagination",
	"TemplateInfo",
]
