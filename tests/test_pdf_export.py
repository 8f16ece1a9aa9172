"""
Tests for PDF export. WeasyPrint itself is patched out.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from jobportal.core.errors import PdfExportError
from jobportal.schemas.CoverLetterSchemas import CoverLetter
from jobportal.schemas.ResumeSchemas import PersonalInfo
from jobportal.services.resume_export import (
    cover_letter_filename,
    export_cover_letter_pdf,
    export_pdf,
    export_resume_pdf,
    resume_filename,
    sanitize_filename,
)
from jobportal.tools.pdf_generator import ExportOptions, create_pdf


def _fake_write_pdf(path, **kwargs):
    with open(path, "wb") as fh:
        fh.write(b"%PDF-1.7 fake")


@patch("jobportal.tools.pdf_generator.CSS")
@patch("jobportal.tools.pdf_generator.HTML")
def test_create_pdf_uses_export_options(mock_html, mock_css, tmp_path):
    mock_html.return_value.write_pdf.side_effect = _fake_write_pdf
    pdf_path = str(tmp_path / "out.pdf")

    assert create_pdf("<p>hi</p>", pdf_path) == pdf_path
    assert os.path.exists(pdf_path)

    mock_html.assert_called_once_with(string="<p>hi</p>", base_url=".")
    _, kwargs = mock_html.return_value.write_pdf.call_args
    assert kwargs["jpeg_quality"] == 93
    page_css = mock_css.call_args_list[0].kwargs["string"]
    assert "size: letter portrait !important" in page_css
    assert "margin: 0.5in !important" in page_css


@patch("jobportal.tools.pdf_generator.CSS")
@patch("jobportal.tools.pdf_generator.HTML")
def test_create_pdf_failure_removes_partial_file(mock_html, mock_css, tmp_path):
    pdf_path = tmp_path / "broken.pdf"

    def _fail(path, **kwargs):
        _fake_write_pdf(path)
        raise RuntimeError("renderer crashed")

    mock_html.return_value.write_pdf.side_effect = _fail

    with pytest.raises(PdfExportError) as exc:
        create_pdf("<p>hi</p>", str(pdf_path))
    assert "renderer crashed" in exc.value.message
    assert not pdf_path.exists()


def test_export_options_defaults():
    options = ExportOptions()
    assert options.margin == "0.5in"
    assert options.image_quality == 0.98
    assert options.scale == 2
    assert ExportOptions(image_quality=1.5).jpeg_quality == 95


def test_filenames(full_resume, jane_doe):
    assert resume_filename(jane_doe) == "Jane Doe - Resume.pdf"
    assert resume_filename(jane_doe.model_copy(update={"personal_info": None})) == "Resume - Resume.pdf"

    letter = CoverLetter(id=1, company_name="Acme")
    assert cover_letter_filename(letter, PersonalInfo(full_name="Jane Doe")) == "Jane Doe - Cover Letter - Acme.pdf"
    assert cover_letter_filename(CoverLetter(id=2), None) == "CoverLetter - Cover Letter - Application.pdf"


def test_sanitize_filename():
    assert sanitize_filename("John <Smith> - Resume.pdf") == "John _Smith_ - Resume.pdf"
    assert sanitize_filename("a/b") == "a_b.pdf"
    assert sanitize_filename("...") == "document.pdf"


@patch("jobportal.services.resume_export.create_pdf")
def test_export_pdf_writes_into_output_dir(mock_create, tmp_path):
    mock_create.side_effect = lambda html, path, options=None: path

    path = export_pdf("<p>x</p>", "Jane Doe - Resume.pdf", output_dir=str(tmp_path / "nested"))

    assert path == str(tmp_path / "nested" / "Jane Doe - Resume.pdf")
    assert (tmp_path / "nested").is_dir()


@patch("jobportal.services.resume_export.create_pdf")
def test_export_resume_pdf(mock_create, jane_doe, tmp_path):
    mock_create.side_effect = lambda html, path, options=None: path
    fetcher = MagicMock()
    fetcher.fetch.return_value = "<h1>Name</h1><h2>Experience</h2><p>old</p>"

    path = export_resume_pdf(jane_doe, fetcher=fetcher, output_dir=str(tmp_path))

    fetcher.fetch.assert_called_once_with("template01_classic")
    html = mock_create.call_args[0][0]
    assert "<h1>Jane Doe</h1>" in html
    assert "experience-item" in html
    assert path.endswith("Jane Doe - Resume.pdf")


@patch("jobportal.services.resume_export.create_pdf")
def test_export_resume_pdf_defaults_template(mock_create, jane_doe, tmp_path):
    mock_create.side_effect = lambda html, path, options=None: path
    fetcher = MagicMock()
    fetcher.fetch.return_value = "<h1></h1>"

    export_resume_pdf(jane_doe.model_copy(update={"template_name": None}), fetcher=fetcher, output_dir=str(tmp_path))

    fetcher.fetch.assert_called_once_with("template01_classic")


@patch("jobportal.services.resume_export.create_pdf")
def test_export_cover_letter_pdf(mock_create, tmp_path):
    mock_create.side_effect = lambda html, path, options=None: path
    fetcher = MagicMock()
    fetcher.fetch_cover_letter_template.return_value = "<p>{{APPLICANT_NAME}}</p>{{LETTER_TEXT}}"
    letter = CoverLetter(id=5, company_name="Globex", letter_text="Hello")

    path = export_cover_letter_pdf(letter, PersonalInfo(full_name="Jane Doe"), fetcher=fetcher, output_dir=str(tmp_path))

    html = mock_create.call_args[0][0]
    assert html == '<p>Jane Doe</p><div class="paragraph">Hello</div>'
    assert os.path.basename(path) == "Jane Doe - Cover Letter - Globex.pdf"


def test_page_css_overrides_template_page_rules():
    css = ExportOptions(margin="1in", page_size="A4").page_css()
    assert css == "@page { size: A4 portrait !important; margin: 1in !important; }"
