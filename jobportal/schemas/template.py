from pydantic import BaseModel
from typing import Optional


class TemplateInfo(BaseModel):
    """Catalog entry for a static HTML resume template."""
    id: str
    name: str
    description: str = ""
    preview_image: Optional[str] = None
