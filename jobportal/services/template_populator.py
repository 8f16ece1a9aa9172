"""Fills static HTML templates with resume and cover-letter data.

The resume template is parsed with BeautifulSoup and every section is located
by its ``<h2>`` heading. Section bodies are rendered from small Jinja2
fragments and spliced in after the heading; a section without data loses both
heading and body. Running ``populate`` on its own output gives back the same
document.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from jinja2 import Environment, select_autoescape
from markupsafe import Markup, escape

from jobportal.schemas.CoverLetterSchemas import CoverLetter
from jobportal.schemas.ResumeSchemas import PersonalInfo, ResumeDetail
from jobportal.services.resume_normalization import normalize_resume_detail

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def nl2br(value: Any) -> Markup:
    """Escape ``value`` and turn its newlines into ``<br>`` tags."""
    return Markup("<br>").join(escape(line) for line in _text(value).split("\n"))


def date_range(start: Any, end: Any) -> str:
    return " - ".join(p for p in (_text(start), _text(end)) if p)


def _get_env() -> Environment:
    env = Environment(autoescape=select_autoescape(["html", "xml"]))
    env.filters["nl2br"] = nl2br
    env.globals["date_range"] = date_range
    return env


_env = _get_env()


def render_fragment(template_str: str, **context: Any) -> str:
    return _env.from_string(template_str).render(context)


# Fragments

CONTACT_FRAGMENT = (
    "{% if line1 %}<p>{% for part in line1 %}{% if not loop.first %} | {% endif %}"
    "{% if part.href %}<a href=\"{{ part.href }}\">{{ part.text }}</a>{% else %}{{ part.text }}{% endif %}"
    "{% endfor %}</p>{% endif %}"
    "{% if address %}<p>{{ address }}</p>{% endif %}"
)

SOCIAL_FRAGMENT = (
    '<div class="social-links">{% for label, url in links %}{% if not loop.first %} {% endif %}'
    '<a href="{{ url }}" target="_blank">{{ label }}</a>{% endfor %}</div>'
)

TARGET_ROLE_FRAGMENT = '<h3 class="target-role">{{ role }}</h3>'

SUMMARY_FRAGMENT = "<p>{{ text | nl2br }}</p>"

EXPERIENCE_FRAGMENT = """
{% for exp in items %}<div class="experience-item">
<h3 class="job-title">{{ exp.job_title or "" }}</h3>
<p class="company">{{ exp.company_name or "" }}</p>
{% set dates = date_range(exp.start_date, exp.end_date) %}{% if dates %}<p class="date">{{ dates }}</p>
{% endif %}{% if exp.description %}<div class="description"><p>{{ exp.description | nl2br }}</p></div>
{% endif %}</div>
{% endfor %}"""

EDUCATION_FRAGMENT = """
{% for edu in items %}<div class="education-item">
<h3 class="degree">{{ edu.degree or "" }}</h3>
<p class="institute">{{ edu.institute_name or "" }}</p>
{% set dates = date_range(edu.start_year, edu.end_year) %}{% if dates or edu.grade %}<p class="date">{{ dates }}{% if dates and edu.grade %} {% endif %}{% if edu.grade %}| {{ edu.grade }}{% endif %}</p>
{% endif %}</div>
{% endfor %}"""

SKILLS_FRAGMENT = """
<div class="skills-list">
<div class="skills-grid">
{% for skill in items %}<div class="skill-item">{{ skill.skill_name | trim }}</div>
{% endfor %}</div>
</div>
"""

LANGUAGES_FRAGMENT = """
<div class="languages-list">
<div class="languages-grid">
{% for lang in items %}<div class="language-item">{{ lang.language_name | trim }}</div>
{% endfor %}</div>
</div>
"""

PROJECTS_FRAGMENT = """
{% for project in items %}<div class="project-item">
<h3 class="project-title">{{ project.title or "" }}</h3>
{% set dates = date_range(project.start_date, project.end_date) %}{% if dates %}<p class="date">{{ dates }}</p>
{% endif %}{% if project.description %}<div class="description"><p>{{ project.description | nl2br }}</p></div>
{% endif %}{% if project.technologies %}<p class="project-tech">Technologies: {{ project.technologies }}</p>
{% endif %}{% if project.project_url %}<a class="project-link" href="{{ project.project_url }}" target="_blank">View Project →</a>
{% endif %}</div>
{% endfor %}"""

CERTIFICATIONS_FRAGMENT = """
{% for cert in items %}<div class="cert-item">
<p><strong>{{ cert.title | trim }}</strong>{% if cert.year %} - {{ cert.year }}{% endif %}</p>
</div>
{% endfor %}"""


@dataclass(frozen=True)
class Section:
    """One repeated-item section of a resume template.

    ``headings`` are the ``<h2>`` texts that identify the section (matched
    case-insensitively), ``fields`` the item attributes of which at least one
    must be non-blank for the item to be rendered, and ``title`` the heading
    text to force when the section is kept.
    """
    key: str
    headings: Tuple[str, ...]
    fragment: str
    fields: Tuple[str, ...]
    title: Optional[str] = None

    def items(self, resume: ResumeDetail) -> list:
        return [
            item for item in getattr(resume, self.key, None) or []
            if any(_text(getattr(item, f, None)) for f in self.fields)
        ]


SECTIONS: Tuple[Section, ...] = (
    Section(
        "experience",
        ("Experience", "Professional Experience", "Work Experience"),
        EXPERIENCE_FRAGMENT,
        ("job_title", "company_name", "description"),
    ),
    Section("education", ("Education",), EDUCATION_FRAGMENT, ("degree", "institute_name")),
    Section("skills", ("Skills", "Technical Skills"), SKILLS_FRAGMENT, ("skill_name",), title="Technical Skills"),
    Section("languages", ("Languages",), LANGUAGES_FRAGMENT, ("language_name",)),
    Section("projects", ("Projects",), PROJECTS_FRAGMENT, ("title", "description")),
    Section("certifications", ("Certifications",), CERTIFICATIONS_FRAGMENT, ("title",)),
)

SUMMARY_HEADINGS = ("Career Objective", "Professional Summary", "Objective")
SUMMARY_TITLE = "Professional Summary"

SOCIAL_LINKS = (
    ("LinkedIn", "linkedin_url"),
    ("Portfolio", "portfolio_url"),
    ("GitHub", "github_url"),
    ("Website", "website_url"),
)


# Tree helpers

def _parse_fragment(html: str) -> List[Union[Tag, NavigableString]]:
    return list(BeautifulSoup(html, "html.parser").contents)


def _is_blank(node: Any) -> bool:
    return isinstance(node, NavigableString) and not node.strip()


def _insert_after(anchor: Tag, nodes: Iterable[Union[Tag, NavigableString]], newline: bool = False) -> None:
    """Insert ``nodes`` after ``anchor`` in order, optionally preceded by a newline."""
    if newline:
        nl = NavigableString("\n")
        anchor.insert_after(nl)
        anchor = nl
    for node in nodes:
        anchor.insert_after(node)
        anchor = node


def _drop_if_empty(tag: Optional[Tag]) -> None:
    if tag is None or tag.name in ("[document]", "html", "head", "body"):
        return
    if tag.find(True) is None and not tag.get_text(strip=True):
        parent = tag.parent
        tag.decompose()
        _drop_if_empty(parent)


def _remove(tag: Tag) -> None:
    """Remove ``tag`` together with the whitespace run in front of it."""
    parent = tag.parent
    previous = tag.previous_sibling
    if _is_blank(previous):
        previous.extract()
    tag.decompose()
    _drop_if_empty(parent)


def _find_heading(soup: BeautifulSoup, names: Iterable[str]) -> Optional[Tag]:
    wanted = {n.lower() for n in names}
    for h2 in soup.find_all("h2"):
        if h2.get_text(strip=True).lower() in wanted:
            return h2
    return None


def _section_body(heading: Tag) -> list:
    """Siblings after ``heading`` up to the next ``<h2>`` or the end of its parent."""
    body = []
    for sibling in heading.next_siblings:
        if isinstance(sibling, Tag) and (sibling.name == "h2" or sibling.find("h2") is not None):
            break
        body.append(sibling)
    return body


def _clear_body(heading: Tag) -> None:
    for node in _section_body(heading):
        node.extract()


def _remove_section(heading: Tag) -> None:
    parent = heading.parent
    _clear_body(heading)
    heading.decompose()
    _drop_if_empty(parent)


# Section fillers

def _fill_header(soup: BeautifulSoup, pi: Optional[PersonalInfo]) -> None:
    h1 = soup.find("h1")
    if h1 is None:
        return
    name = _text(pi.full_name) if pi else ""
    if name:
        h1.string = name
    else:
        _remove(h1)


def _contact_parts(pi: PersonalInfo) -> List[Dict[str, str]]:
    parts = []
    email = _text(pi.email)
    if email:
        parts.append({"href": f"mailto:{email}", "text": email})
    phone = _text(pi.phone)
    if phone:
        digits = "".join(c for c in phone if c.isdigit() or c == "+")
        parts.append({"href": f"tel:{digits}", "text": phone})
    city = _text(pi.city)
    if city:
        parts.append({"href": "", "text": city})
    return parts


def _fill_contact(soup: BeautifulSoup, pi: Optional[PersonalInfo]) -> None:
    contact = soup.find("div", class_="contact-info")
    if contact is None:
        return
    line1 = _contact_parts(pi) if pi else []
    address = _text(pi.address) if pi else ""
    if not line1 and not address:
        _remove(contact)
        return
    contact.clear()
    for node in _parse_fragment(render_fragment(CONTACT_FRAGMENT, line1=line1, address=address)):
        contact.append(node)


def _fill_social_links(soup: BeautifulSoup, pi: Optional[PersonalInfo]) -> None:
    for old in soup.find_all("div", class_="social-links"):
        _remove(old)
    if pi is None:
        return
    links = [(label, _text(getattr(pi, attr))) for label, attr in SOCIAL_LINKS if _text(getattr(pi, attr))]
    if not links:
        return
    anchor = soup.find("div", class_="contact-info") or soup.find("h3", class_="target-role") or soup.find("h1")
    if anchor is None:
        return
    _insert_after(anchor, _parse_fragment(render_fragment(SOCIAL_FRAGMENT, links=links)), newline=True)


def _fill_target_role(soup: BeautifulSoup, resume: ResumeDetail) -> None:
    for old in soup.find_all("h3", class_="target-role"):
        _remove(old)
    role = _text(resume.target_role)
    h1 = soup.find("h1")
    if role and h1 is not None:
        _insert_after(h1, _parse_fragment(render_fragment(TARGET_ROLE_FRAGMENT, role=role)), newline=True)


def _fill_summary(soup: BeautifulSoup, resume: ResumeDetail) -> None:
    text = _text(resume.professional_summary) or _text(resume.career_objective)
    heading = _find_heading(soup, SUMMARY_HEADINGS)
    body = soup.find("div", class_="objective")

    if not text:
        if body is not None:
            _remove(body)
        if heading is not None:
            _remove(heading)
        return

    paragraph = render_fragment(SUMMARY_FRAGMENT, text=text)
    if heading is not None:
        heading.string = SUMMARY_TITLE
    if body is not None:
        body.clear()
        for node in _parse_fragment(paragraph):
            body.append(node)
    elif heading is not None:
        _clear_body(heading)
        _insert_after(heading, _parse_fragment(f'<div class="objective">{paragraph}</div>\n'), newline=True)


def _fill_section(soup: BeautifulSoup, section: Section, resume: ResumeDetail) -> None:
    heading = _find_heading(soup, section.headings)
    if heading is None:
        return
    items = section.items(resume)
    if not items:
        _remove_section(heading)
        return
    if section.title:
        heading.string = section.title
    _clear_body(heading)
    _insert_after(heading, _parse_fragment(render_fragment(section.fragment, items=items)))


def _coerce_resume(resume: Union[ResumeDetail, Dict[str, Any]]) -> ResumeDetail:
    if isinstance(resume, ResumeDetail):
        return resume
    return ResumeDetail.model_validate(normalize_resume_detail(resume))


def populate(template_html: str, resume: Union[ResumeDetail, Dict[str, Any]]) -> str:
    """Return ``template_html`` filled with ``resume``.

    Sections are filled in a fixed order: name, contact block, social links,
    target role, summary, then the repeated-item sections. Anchors missing
    from the template simply yield no output for that section.

    Args:
        template_html: Raw template HTML as returned by the template fetcher.
        resume: The resume snapshot, as a model or a raw API payload.

    Returns:
        The populated HTML document.
    """
    resume = _coerce_resume(resume)
    soup = BeautifulSoup(template_html or "", "html.parser")
    pi = resume.personal_info

    _fill_header(soup, pi)
    _fill_contact(soup, pi)
    _fill_social_links(soup, pi)
    _fill_target_role(soup, resume)
    _fill_summary(soup, resume)
    for section in SECTIONS:
        _fill_section(soup, section, resume)

    logger.debug(f"Populated template for resume {resume.id}")
    return str(soup)


COVER_LETTER_DEFAULTS = {
    "APPLICANT_NAME": "Your Name",
    "APPLICANT_EMAIL": "your.email@example.com",
    "APPLICANT_PHONE": "Your Phone",
    "APPLICANT_ADDRESS": "Your Address",
    "COMPANY_NAME": "Company Name",
}

# Only these fixed tokens are substituted; the rest of the template is left alone.
_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Z_]+)\s*\}\}")


def format_letter_date(value: date) -> str:
    """Format a date like ``October 18, 2026``."""
    return f"{value:%B} {value.day}, {value.year}"


def letter_paragraphs(letter_text: Optional[str]) -> Markup:
    lines = [line for line in (letter_text or "").split("\n") if line.strip()]
    return Markup("").join(Markup('<div class="paragraph">{}</div>').format(line) for line in lines)


def populate_cover_letter(
    template_html: str,
    cover_letter: Union[CoverLetter, Dict[str, Any]],
    personal_info: Optional[Union[PersonalInfo, Dict[str, Any]]] = None,
    today: Optional[date] = None,
) -> str:
    """Fill the ``{{PLACEHOLDER}}`` slots of the cover-letter template.

    Missing applicant details fall back to readable placeholders such as
    "Your Name"; the letter text becomes one ``div.paragraph`` per non-blank line.
    """
    if isinstance(cover_letter, dict):
        cover_letter = CoverLetter.model_validate(cover_letter)
    if isinstance(personal_info, dict):
        personal_info = PersonalInfo.model_validate(personal_info)
    pi = personal_info or PersonalInfo()

    context = {
        "APPLICANT_NAME": _text(pi.full_name) or COVER_LETTER_DEFAULTS["APPLICANT_NAME"],
        "APPLICANT_EMAIL": _text(pi.email) or COVER_LETTER_DEFAULTS["APPLICANT_EMAIL"],
        "APPLICANT_PHONE": _text(pi.phone) or COVER_LETTER_DEFAULTS["APPLICANT_PHONE"],
        "APPLICANT_ADDRESS": _text(pi.address) or COVER_LETTER_DEFAULTS["APPLICANT_ADDRESS"],
        "COMPANY_NAME": _text(cover_letter.company_name) or COVER_LETTER_DEFAULTS["COMPANY_NAME"],
        "DATE": format_letter_date(today or date.today()),
        "LETTER_TEXT": letter_paragraphs(cover_letter.letter_text),
    }

    def _substitute(match) -> str:
        key = match.group(1)
        if key not in context:
            return match.group(0)
        return str(escape(context[key]))

    return _PLACEHOLDER_RE.sub(_substitute, template_html or "")
