"""
FastAPI front end for the Evalyn client.

Serves the analysis page and runs the upload/poll flows from its forms.
Errors are shown in-page, so every form post answers 200 with the
re-rendered page.
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.responses import HTMLResponse

from evalyn import __version__
from evalyn.config import Settings, get_settings
from evalyn.core.workflow import AnalyzerApp
from evalyn.models.state import SelectedFile
from evalyn.services.backend import HttpAnalysisBackend
from evalyn.ui.view import HtmlSurface

# Configuration du logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(analyzer: Optional[AnalyzerApp] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the web application.

    Args:
        analyzer: Pre-built controller (tests inject one with a fake backend);
            it must write to an HtmlSurface
        settings: Settings used when building the default controller
    """
    settings = settings or get_settings()
    owned_backend: Optional[HttpAnalysisBackend] = None

    if analyzer is None:
        owned_backend = HttpAnalysisBackend(settings.backend_url, timeout=settings.request_timeout)
        analyzer = AnalyzerApp(owned_backend, surface=HtmlSurface(), settings=settings)
        logger.info(f"Using analysis service at {settings.backend_url}")

    if not isinstance(analyzer.surface, HtmlSurface):
        raise TypeError("AnalyzerApp must render to an HtmlSurface to be served")
    surface: HtmlSurface = analyzer.surface

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owned_backend is not None:
            await owned_backend.aclose()

    app = FastAPI(
        title="Evalyn",
        description="Upload videos for AI analysis and check their reports",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.analyzer = analyzer

    @app.get("/", response_class=HTMLResponse)
    async def index():
        """Current page, as last rendered."""
        return HTMLResponse(content=surface.html)

    @app.post("/upload", response_class=HTMLResponse)
    async def upload(video_file: Optional[UploadFile] = File(None)):
        """Run the upload flow on the submitted file."""
        selected = None
        if video_file is not None and video_file.filename:
            selected = SelectedFile(
                filename=video_file.filename,
                # One byte past the limit is enough for validation to reject it.
                content=await video_file.read(analyzer.settings.max_upload_bytes + 1),
                content_type=video_file.content_type or "",
            )
        await analyzer.upload_video(selected)
        return HTMLResponse(content=surface.html)

    @app.post("/results", response_class=HTMLResponse)
    async def results(video_id: str = Form("")):
        """Run the poll flow for the submitted identifier."""
        await analyzer.check_result(video_id)
        return HTMLResponse(content=surface.html)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
