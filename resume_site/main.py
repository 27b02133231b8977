"""FastAPI application — entry point for the résumé site.

Serves the rendered résumé at ``/``, the PDF export at
``/api/generate-pdf``, the stylesheet under ``/static`` and a health
endpoint.

RESUME_ENV controls error verbosity of the export endpoint:
  production (default) — error label and message only
  development          — message plus traceback
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from resume_site import config
from resume_site.export import target_url
from resume_site.render import STATIC_DIR
from resume_site.routes.page import router as page_router
from resume_site.routes.pdf import router as pdf_router

# Load .env from the working directory so NOTION_* settings work locally
load_dotenv()

logger = logging.getLogger("resume")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective configuration once at startup."""
    logger.info(
        "Resume site starting — env=%s, content=%s, static_export=%s",
        config.get_resume_env(),
        config.get_content_source_kind(),
        config.is_static_export(),
    )
    logger.info("PDF export will capture %s", target_url())
    yield


app = FastAPI(title="Resume", version=VERSION, lifespan=lifespan)

# ---------------------------------------------------------------------------
# API route registration
# ---------------------------------------------------------------------------
app.include_router(pdf_router)
app.include_router(page_router)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": VERSION, "mode": config.get_resume_env()}


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


def run(port: int | None = None) -> None:
    """Serve the app with uvicorn on ``port`` (default: $PORT or 3000).

    An explicit ``port`` is written back to PORT so the PDF export loads the
    page from the server that is actually listening.
    """
    import uvicorn

    if port is not None:
        os.environ["PORT"] = str(port)
    uvicorn.run(app, host="0.0.0.0", port=config.get_port())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run()
