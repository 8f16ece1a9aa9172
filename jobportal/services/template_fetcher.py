"""Loads raw resume and cover-letter template HTML.

Templates live either in a local directory laid out as
``{template_id}/index.html`` (the bundled set by default) or behind a static
host, in which case they are fetched from ``{base_url}/templates/...``.
"""
import logging
import re
from pathlib import Path
from typing import Optional, Union

import requests

from jobportal.core.config import settings
from jobportal.core.errors import TemplateNotFoundError

logger = logging.getLogger(__name__)

COVER_LETTER_TEMPLATE = "cover-letter-template.html"

_TEMPLATE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class TemplateFetcher:
    def __init__(
        self,
        templates_dir: Optional[Union[str, Path]] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.templates_dir = Path(templates_dir or settings.TEMPLATES_DIR)
        base_url = base_url if base_url is not None else settings.TEMPLATES_BASE_URL
        self.base_url = base_url.rstrip("/") if base_url else None
        self.session = session or requests.Session()

    def fetch(self, template_id: str) -> str:
        """Return the raw HTML of ``{template_id}/index.html``.

        Raises:
            TemplateNotFoundError: malformed id, missing file, or non-2xx response.
        """
        if not template_id or not _TEMPLATE_ID_RE.match(template_id):
            raise TemplateNotFoundError(f"Invalid template id: {template_id!r}")
        return self._load(f"{template_id}/index.html")

    def fetch_cover_letter_template(self) -> str:
        return self._load(COVER_LETTER_TEMPLATE)

    def _load(self, relative_path: str) -> str:
        if self.base_url:
            return self._load_remote(relative_path)

        path = self.templates_dir / relative_path
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Template {relative_path} could not be read from {self.templates_dir}: {e}")
            raise TemplateNotFoundError(f"Failed to load template: {relative_path}") from e

    def _load_remote(self, relative_path: str) -> str:
        url = f"{self.base_url}/templates/{relative_path}"
        try:
            response = self.session.get(url, timeout=settings.REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"Template fetch failed for {url}: {e}")
            raise TemplateNotFoundError(f"Failed to load template: {relative_path}") from e

        if not response.ok:
            logger.warning(f"Template fetch for {url} returned {response.status_code}")
            raise TemplateNotFoundError(f"Failed to load template: {response.reason or response.status_code}")
        return response.text
