from fastapi import FastAPI
from jobportal.api.v1.endpoints import preview, templates
from jobportal.core.config import settings
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Job Portal Resume Preview", version="0.1.0")
app.include_router(templates.router, prefix="/api/v1/templates", tags=["templates"])
app.include_router(preview.router, prefix="/api/v1/preview", tags=["preview"])

@app.get("/health", tags=["health"])
async def health():
    """Health check endpoint returning service status."""
    return {"status": "ok"}
