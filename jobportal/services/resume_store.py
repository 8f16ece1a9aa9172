"""In-memory store of the signed-in user's resumes and cover letters.

Each mutation makes exactly one REST call and, once the server has accepted
it, splices the returned entity into the local snapshot. The snapshot of the
open resume (``current_resume``) is only touched when the call concerns that
resume. Failures are logged and re-raised; the snapshot is left as it was.
"""
import logging
from contextlib import contextmanager
from functools import partialmethod
from typing import Any, Dict, Iterator, List, Optional, Union

from jobportal.core.errors import PortalError
from jobportal.crud import crud_cover_letter, crud_resume
from jobportal.crud.crud_resume import Payload
from jobportal.schemas.CoverLetterSchemas import CoverLetter, CoverLetterCreate, CoverLetterUpdate
from jobportal.schemas.ResumeSchemas import (
    PersonalInfo,
    PersonalInfoUpdate,
    Resume,
    ResumeCreate,
    ResumeDetail,
    ResumeUpdate,
)
from jobportal.schemas.envelope import Pagination
from jobportal.tools.api_client import ApiClient

logger = logging.getLogger(__name__)


class ResumeStore:
    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or ApiClient()
        self.resumes: List[Resume] = []
        self.pagination: Optional[Pagination] = None
        self.current_resume: Optional[ResumeDetail] = None
        self.selected_template: Optional[str] = None
        self.cover_letters: List[CoverLetter] = []
        self.is_loading = False
        self.is_saving = False

    @contextmanager
    def _busy(self, flag: str, action: str) -> Iterator[None]:
        setattr(self, flag, True)
        try:
            yield
        except PortalError as e:
            logger.error(f"Error {action}: {e.message}")
            raise
        finally:
            setattr(self, flag, False)

    def _is_current(self, resume_id: int) -> bool:
        return self.current_resume is not None and self.current_resume.id == resume_id

    # Selection

    def set_selected_template(self, template_id: Optional[str]) -> None:
        self.selected_template = template_id

    def set_current_resume(self, resume: Optional[ResumeDetail]) -> None:
        self.current_resume = resume

    # Resumes

    def fetch_user_resumes(self, token: str, page: int = 1, limit: int = 10) -> List[Resume]:
        with self._busy("is_loading", "fetching resumes"):
            self.resumes, self.pagination = crud_resume.get_resumes(self.client, token, page=page, limit=limit)
        return self.resumes

    def fetch_resume(self, resume_id: int, token: str) -> Optional[ResumeDetail]:
        with self._busy("is_loading", f"fetching resume {resume_id}"):
            resume = crud_resume.get_resume(self.client, resume_id, token)
        if resume is not None:
            self.current_resume = resume
            self.selected_template = resume.template_name
        return resume

    def create_new_resume(self, data: Union[ResumeCreate, Dict[str, Any]], token: str) -> Optional[Resume]:
        with self._busy("is_saving", "creating resume"):
            resume = crud_resume.create_resume(self.client, data, token)
        if resume is not None:
            self.resumes = [resume] + self.resumes
        return resume

    def update_resume_basic(self, resume_id: int, data: Union[ResumeUpdate, Dict[str, Any]], token: str) -> Optional[Resume]:
        with self._busy("is_saving", f"updating resume {resume_id}"):
            updated = crud_resume.update_resume(self.client, resume_id, data, token)
        if updated is None:
            return None
        self.resumes = [updated if r.id == resume_id else r for r in self.resumes]
        if self._is_current(resume_id):
            self.current_resume = self.current_resume.model_copy(update=updated.model_dump(exclude_unset=True))
        return updated

    def delete_user_resume(self, resume_id: int, token: str) -> None:
        with self._busy("is_saving", f"deleting resume {resume_id}"):
            crud_resume.delete_resume(self.client, resume_id, token)
        self.resumes = [r for r in self.resumes if r.id != resume_id]
        if self._is_current(resume_id):
            self.current_resume = None

    def update_personal_data(
        self, resume_id: int, data: Union[PersonalInfoUpdate, Dict[str, Any]], token: str
    ) -> Optional[PersonalInfo]:
        with self._busy("is_saving", f"updating personal info of resume {resume_id}"):
            info = crud_resume.update_personal_info(self.client, resume_id, data, token)
        if info is not None and self._is_current(resume_id):
            self.current_resume = self.current_resume.model_copy(update={"personal_info": info})
        return info

    # Nested collections

    def _splice(self, resume_id: int, collection: str, rows: list) -> None:
        if self._is_current(resume_id):
            self.current_resume = self.current_resume.model_copy(update={collection: rows})

    def _rows(self, collection: str) -> list:
        return list(getattr(self.current_resume, collection, None) or [])

    def add_entry(self, collection: str, resume_id: int, data: Payload, token: str):
        with self._busy("is_saving", f"adding {collection} entry"):
            item = crud_resume.add_item(self.client, resume_id, collection, data, token)
        if item is not None:
            self._splice(resume_id, collection, self._rows(collection) + [item])
        return item

    def update_entry(self, collection: str, resume_id: int, item_id: int, data: Payload, token: str):
        with self._busy("is_saving", f"updating {collection} entry {item_id}"):
            item = crud_resume.update_item(self.client, resume_id, collection, item_id, data, token)
        if item is not None:
            self._splice(resume_id, collection, [item if r.id == item_id else r for r in self._rows(collection)])
        return item

    def delete_entry(self, collection: str, resume_id: int, item_id: int, token: str) -> None:
        with self._busy("is_saving", f"deleting {collection} entry {item_id}"):
            crud_resume.delete_item(self.client, resume_id, collection, item_id, token)
        self._splice(resume_id, collection, [r for r in self._rows(collection) if r.id != item_id])

    add_education_entry = partialmethod(add_entry, "education")
    update_education_entry = partialmethod(update_entry, "education")
    delete_education_entry = partialmethod(delete_entry, "education")

    add_experience_entry = partialmethod(add_entry, "experience")
    update_experience_entry = partialmethod(update_entry, "experience")
    delete_experience_entry = partialmethod(delete_entry, "experience")

    add_skill_entry = partialmethod(add_entry, "skills")
    update_skill_entry = partialmethod(update_entry, "skills")
    delete_skill_entry = partialmethod(delete_entry, "skills")

    add_language_entry = partialmethod(add_entry, "languages")
    update_language_entry = partialmethod(update_entry, "languages")
    delete_language_entry = partialmethod(delete_entry, "languages")

    add_certification_entry = partialmethod(add_entry, "certifications")
    update_certification_entry = partialmethod(update_entry, "certifications")
    delete_certification_entry = partialmethod(delete_entry, "certifications")

    add_project_entry = partialmethod(add_entry, "projects")
    update_project_entry = partialmethod(update_entry, "projects")
    delete_project_entry = partialmethod(delete_entry, "projects")

    # Cover letters

    def fetch_cover_letters(self, resume_id: int, token: str) -> List[CoverLetter]:
        with self._busy("is_loading", f"fetching cover letters of resume {resume_id}"):
            self.cover_letters = crud_cover_letter.get_cover_letters(self.client, resume_id, token)
        return self.cover_letters

    def fetch_cover_letter(self, cover_letter_id: int, token: str) -> Optional[CoverLetter]:
        with self._busy("is_loading", f"fetching cover letter {cover_letter_id}"):
            return crud_cover_letter.get_cover_letter(self.client, cover_letter_id, token)

    def create_new_cover_letter(self, data: Union[CoverLetterCreate, Dict[str, Any]], token: str) -> Optional[CoverLetter]:
        with self._busy("is_saving", "creating cover letter"):
            letter = crud_cover_letter.create_cover_letter(self.client, data, token)
        if letter is not None:
            self.cover_letters = [letter] + self.cover_letters
        return letter

    def update_cover_letter_entry(
        self, cover_letter_id: int, data: Union[CoverLetterUpdate, Dict[str, Any]], token: str
    ) -> Optional[CoverLetter]:
        with self._busy("is_saving", f"updating cover letter {cover_letter_id}"):
            letter = crud_cover_letter.update_cover_letter(self.client, cover_letter_id, data, token)
        if letter is not None:
            self.cover_letters = [letter if c.id == cover_letter_id else c for c in self.cover_letters]
        return letter

    def delete_cover_letter_entry(self, cover_letter_id: int, token: str) -> None:
        with self._busy("is_saving", f"deleting cover letter {cover_letter_id}"):
            crud_cover_letter.delete_cover_letter(self.client, cover_letter_id, token)
        self.cover_letters = [c for c in self.cover_letters if c.id != cover_letter_id]
