import json
from unittest.mock import MagicMock

import pytest

from jobportal.schemas.ResumeSchemas import ResumeDetail
from jobportal.tools.api_client import ApiClient


def make_response(status_code=200, body=None, raw=None):
    """Build a MagicMock that quacks like a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if raw is not None:
        response.content = raw.encode()
        response.json.side_effect = ValueError("No JSON object could be decoded")
    elif body is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.content = json.dumps(body).encode()
        response.json.return_value = body
    return response


def ok(data=None, **extra):
    return make_response(200, {"success": True, "data": data, **extra})


@pytest.fixture
def http_session():
    return MagicMock()


@pytest.fixture
def client(http_session):
    return ApiClient(base_url="http://api.test", api_key="key-123", session=http_session, timeout=5)


@pytest.fixture
def jane_doe():
    return ResumeDetail.model_validate({
        "id": 1,
        "title": "Main",
        "template_name": "template01_classic",
        "personal_info": {"full_name": "Jane Doe", "email": "jane@x.com"},
        "experience": [{"id": 10, "job_title": "Engineer", "company_name": "Acme"}],
    })


@pytest.fixture
def full_resume():
    return ResumeDetail.model_validate({
        "id": 7,
        "title": "Full",
        "template_name": "template02_modern",
        "target_role": "Backend Engineer",
        "career_objective": "Old objective",
        "professional_summary": "Builds reliable services.\nLikes Python.",
        "personal_info": {
            "full_name": "John <Smith>",
            "email": "john@example.com",
            "phone": "+1 (555) 123-4567",
            "city": "Berlin",
            "address": "Main St 1",
            "linkedin_url": "https://linkedin.com/in/john",
            "github_url": "https://github.com/john",
        },
        "experience": [
            {"id": 1, "job_title": "Developer", "company_name": "Initech",
             "start_date": "2020", "end_date": "2023", "description": "Line one\nLine two"},
        ],
        "education": [
            {"id": 2, "degree": "BSc", "institute_name": "TU", "start_year": "2016", "end_year": "2020", "grade": "1.3"},
        ],
        "skills": [{"id": 3, "skill_name": "Python"}, {"id": 4, "skill_name": "SQL"}, {"id": 5, "skill_name": "  "}],
        "languages": [{"id": 6, "language_name": "German"}],
        "certifications": [{"id": 8, "title": "AWS SA", "year": "2022"}],
        "projects": [
            {"id": 9, "title": "Portal", "description": "Job board", "technologies": "FastAPI",
             "project_url": "https://example.com/p"},
        ],
    })


@pytest.fixture
def respond():
    """Factory fixture: ``respond(status, body)`` builds a fake response."""
    return make_response


@pytest.fixture
def respond_ok():
    return ok
