from pathlib import Path
from typing import Optional
import tempfile

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "static" / "templates"


class Settings(BaseSettings):
    # REST backend; every path is prefixed with /api
    API_URL: str = "http://localhost:4000"
    API_KEY: Optional[str] = None
    REQUEST_TIMEOUT: Optional[float] = 30.0

    # Static resume/cover letter templates
    TEMPLATES_DIR: Path = PACKAGE_TEMPLATES_DIR
    TEMPLATES_BASE_URL: Optional[str] = None

    # Stand-in for the browser's local storage (auth_token / auth_user)
    SESSION_FILE: Path = Path.home() / ".jobportal" / "session.json"

    PDF_OUTPUT_DIR: Path = Path(tempfile.gettempdir())
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
