"""
Tests for filling resume and cover-letter templates
"""
from datetime import date

import pytest
from bs4 import BeautifulSoup

from jobportal.schemas.ResumeSchemas import ResumeDetail, Skill
from jobportal.services.template_fetcher import TemplateFetcher
from jobportal.services.template_populator import (
    SECTIONS,
    date_range,
    populate,
    populate_cover_letter,
)


@pytest.fixture(scope="module")
def classic_template():
    return TemplateFetcher().fetch("template01_classic")


@pytest.fixture(scope="module")
def modern_template():
    return TemplateFetcher().fetch("template02_modern")


def _headings(html):
    return [h.get_text(strip=True) for h in BeautifulSoup(html, "html.parser").find_all("h2")]


def test_jane_doe_scenario(classic_template, jane_doe):
    out = populate(classic_template, jane_doe)
    soup = BeautifulSoup(out, "html.parser")

    assert "<h1>Jane Doe</h1>" in out
    assert soup.select("h3.target-role") == []

    items = soup.select("div.experience-item")
    assert len(items) == 1
    assert "Engineer" in items[0].get_text()
    assert "Acme" in items[0].get_text()

    contact = soup.select_one("div.contact-info")
    assert contact.select_one('a[href="mailto:jane@x.com"]').get_text() == "jane@x.com"


def test_sections_without_data_are_removed(classic_template, jane_doe):
    out = populate(classic_template, jane_doe)

    # Only experience has data; every other heading must be gone
    assert _headings(out) == ["Experience"]
    assert "Career Objective" not in out
    assert "div class=\"objective\"" not in out


def test_empty_experience_has_no_heading(classic_template, jane_doe):
    resume = jane_doe.model_copy(update={"experience": []})
    out = populate(classic_template, resume)

    assert "Experience" not in _headings(out)
    assert BeautifulSoup(out, "html.parser").select("div.experience-item") == []


def test_skills_appear_once_in_grid(classic_template, full_resume):
    soup = BeautifulSoup(populate(classic_template, full_resume), "html.parser")

    grid = soup.select_one("div.skills-list > div.skills-grid")
    names = [item.get_text() for item in grid.select("div.skill-item")]
    assert names == ["Python", "SQL"]
    assert len(soup.select("div.skills-grid")) == 1
    assert "Technical Skills" in [h.get_text() for h in soup.find_all("h2")]


def test_populate_is_idempotent(classic_template, modern_template, full_resume, jane_doe):
    for template in (classic_template, modern_template):
        for resume in (full_resume, jane_doe):
            once = populate(template, resume)
            assert populate(template, resume) == once
            assert populate(once, resume) == once


def test_full_resume_renders_every_section(classic_template, full_resume):
    out = populate(classic_template, full_resume)
    soup = BeautifulSoup(out, "html.parser")

    assert soup.h1.get_text() == "John <Smith>"
    assert "John &lt;Smith&gt;" in out
    assert soup.select_one("h3.target-role").get_text() == "Backend Engineer"

    contact_lines = soup.select("div.contact-info p")
    assert len(contact_lines) == 2
    assert contact_lines[0].select_one('a[href="tel:+15551234567"]') is not None
    assert contact_lines[0].get_text() == "john@example.com | +1 (555) 123-4567 | Berlin"
    assert contact_lines[1].get_text() == "Main St 1"

    social = soup.select_one("div.social-links")
    assert [a.get_text() for a in social.find_all("a")] == ["LinkedIn", "GitHub"]
    assert social.find_previous_sibling("div") is soup.select_one("div.contact-info")

    assert _headings(out) == [
        "Professional Summary",
        "Experience",
        "Education",
        "Technical Skills",
        "Languages",
        "Projects",
        "Certifications",
    ]
    summary = soup.select_one("div.objective p")
    assert summary.get_text() == "Builds reliable services.Likes Python."
    assert summary.find("br") is not None

    description = soup.select_one("div.experience-item div.description p")
    assert len(description.find_all("br")) == 1
    assert soup.select_one("div.experience-item p.date").get_text() == "2020 - 2023"
    assert soup.select_one("div.education-item p.date").get_text() == "2016 - 2020 | 1.3"
    assert [d.get_text() for d in soup.select("div.language-item")] == ["German"]

    project = soup.select_one("div.project-item")
    assert project.select_one("p.project-tech").get_text() == "Technologies: FastAPI"
    link = project.select_one("a.project-link")
    assert link["href"] == "https://example.com/p"
    assert link.get_text() == "View Project →"

    assert soup.select_one("div.cert-item p").get_text() == "AWS SA - 2022"


def test_summary_falls_back_to_career_objective(classic_template, jane_doe):
    resume = jane_doe.model_copy(update={"career_objective": "  Grow as an engineer  "})
    soup = BeautifulSoup(populate(classic_template, resume), "html.parser")

    assert soup.find("h2", string="Professional Summary") is not None
    assert soup.select_one("div.objective").get_text(strip=True) == "Grow as an engineer"


def test_missing_personal_info_removes_header_blocks(classic_template):
    resume = ResumeDetail.model_validate({"id": 3, "skills": [{"id": 1, "skill_name": "Go"}]})
    soup = BeautifulSoup(populate(classic_template, resume), "html.parser")

    assert soup.h1 is None
    assert soup.select("div.contact-info") == []
    assert soup.select("div.social-links") == []


def test_social_links_fall_back_to_h1(jane_doe):
    template = "<body><h1>Name</h1><h2>Experience</h2><p>x</p></body>"
    resume = jane_doe.model_copy(update={
        "target_role": "Staff Engineer",
        "personal_info": jane_doe.personal_info.model_copy(update={"website_url": "https://jane.dev"}),
    })
    soup = BeautifulSoup(populate(template, resume), "html.parser")

    order = [tag.name + ("." + tag["class"][0] if tag.get("class") else "") for tag in soup.body.find_all(recursive=False)]
    assert order[:3] == ["h1", "h3.target-role", "div.social-links"]


def test_wrapped_sections_drop_their_wrapper(modern_template, jane_doe):
    soup = BeautifulSoup(populate(modern_template, jane_doe), "html.parser")

    sections = soup.find_all("section")
    assert len(sections) == 1
    assert sections[0].h2.get_text() == "Work Experience"


def test_user_text_is_escaped(classic_template, jane_doe):
    resume = jane_doe.model_copy(update={
        "skills": [Skill(id=1, skill_name="<script>alert(1)</script>")],
    })
    out = populate(classic_template, resume)

    assert BeautifulSoup(out, "html.parser").find("script") is None
    assert "&lt;script&gt;" in out


def test_malformed_template_does_not_raise(jane_doe):
    out = populate("<div><h2>Experience<p>unclosed", jane_doe)
    assert isinstance(out, str)
    assert populate("", jane_doe) == ""


def test_accepts_raw_api_payload(classic_template):
    raw = {
        "id": 4,
        "personal_info": {"full_name": "Raw Payload"},
        "skills": {"id": 1, "skill_name": "Rust"},
        "experience": None,
    }
    soup = BeautifulSoup(populate(classic_template, raw), "html.parser")

    assert soup.h1.get_text() == "Raw Payload"
    assert [d.get_text() for d in soup.select("div.skill-item")] == ["Rust"]


def test_section_registry_order():
    assert [s.key for s in SECTIONS] == [
        "experience", "education", "skills", "languages", "projects", "certifications",
    ]


def test_date_range():
    assert date_range("2020", "2021") == "2020 - 2021"
    assert date_range(None, "2021") == "2021"
    assert date_range(" ", None) == ""


def test_populate_cover_letter():
    template = TemplateFetcher().fetch_cover_letter_template()
    out = populate_cover_letter(
        template,
        {"id": 1, "company_name": "Acme & Co", "letter_text": "Dear team,\n\nI am <excited>.\n"},
        {"full_name": "Jane Doe", "email": "jane@x.com"},
        today=date(2026, 10, 18),
    )
    soup = BeautifulSoup(out, "html.parser")

    assert "{{" not in out
    assert soup.select_one(".applicant h1").get_text() == "Jane Doe"
    assert "Your Phone" in out
    assert "Your Address" in out
    assert "October 18, 2026" in out
    assert "Acme &amp; Co" in out
    assert [p.get_text() for p in soup.select("div.paragraph")] == ["Dear team,", "I am <excited>."]


def test_populate_cover_letter_defaults():
    out = populate_cover_letter(
        "{{APPLICANT_NAME}}|{{APPLICANT_EMAIL}}|{{COMPANY_NAME}}|{{LETTER_TEXT}}",
        {"id": 2},
        None,
        today=date(2026, 1, 5),
    )
    assert out == "Your Name|your.email@example.com|Company Name|"


def test_populate_cover_letter_leaves_other_template_syntax_alone():
    template = "<script>var t = '{% raw %}{# x #}';</script><h1>{{ APPLICANT_NAME }}</h1>{{UNKNOWN}}"

    out = populate_cover_letter(template, {"id": 3}, {"full_name": "Jo <B>"}, today=date(2026, 1, 5))

    assert out == "<script>var t = '{% raw %}{# x #}';</script><h1>Jo &lt;B&gt;</h1>{{UNKNOWN}}"
