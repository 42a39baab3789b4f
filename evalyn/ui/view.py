"""
View tree and renderer for the analysis page.

Design principles:
- ``render`` is a pure function of AppState (same state, same tree)
- Result boxes hold HTML that is already escaped
- A display surface is the only place a tree is written to
"""
from __future__ import annotations

from html import escape
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from evalyn.constants import MessageKind, VIDEO_MIME_PREFIX
from evalyn.models.state import AppState, PollState, UploadState
from evalyn.utils.report_formatter import wrap_message

APP_TITLE = "EVALYN"
APP_TAGLINE = "AI-Powered Video Analysis Platform"

MESSAGE_CLASSES = {
    MessageKind.SUCCESS: "success-message",
    MessageKind.ERROR: "error-message",
}


# =============================================================================
# VIEW TREE
# =============================================================================

class ResultBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    element_id: str
    content_html: str = ""

    @property
    def visible(self) -> bool:
        return bool(self.content_html)


class UploadSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    accept: str = f"{VIDEO_MIME_PREFIX}*"
    button_disabled: bool = False
    loading: bool = False
    result: ResultBox = ResultBox(element_id="uploadResult")


class ResultsSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    video_id_value: str = ""
    loading: bool = False
    result: ResultBox = ResultBox(element_id="analysisResult")


class ViewTree(BaseModel):
    """Everything visible on the page."""
    model_config = ConfigDict(frozen=True)

    title: str = APP_TITLE
    tagline: str = APP_TAGLINE
    upload: UploadSection
    results: ResultsSection

    def to_html(self) -> str:
        return _PAGE_TEMPLATE.format(
            title=escape(self.title),
            tagline=escape(self.tagline),
            accept=escape(self.upload.accept, quote=True),
            upload_disabled=" disabled" if self.upload.button_disabled else "",
            upload_loading=_display(self.upload.loading),
            upload_result_display=_display(self.upload.result.visible),
            upload_result=self.upload.result.content_html,
            video_id=escape(self.results.video_id_value, quote=True),
            results_loading=_display(self.results.loading),
            analysis_result_display=_display(self.results.result.visible),
            analysis_result=self.results.result.content_html,
        )


def _display(visible: bool) -> str:
    return "block" if visible else "none"


# =============================================================================
# RENDERER
# =============================================================================

def _upload_box(state: UploadState) -> ResultBox:
    if not state.result_message:
        return ResultBox(element_id="uploadResult")
    css_class = MESSAGE_CLASSES.get(state.message_kind, "success-message")
    return ResultBox(
        element_id="uploadResult",
        content_html=wrap_message(css_class, state.result_message),
    )


def _results_box(state: PollState) -> ResultBox:
    if state.rendered_html:
        return ResultBox(element_id="analysisResult", content_html=state.rendered_html)
    if not state.result_message:
        return ResultBox(element_id="analysisResult")
    css_class = MESSAGE_CLASSES.get(state.message_kind, "error-message")
    return ResultBox(
        element_id="analysisResult",
        content_html=wrap_message(css_class, state.result_message),
    )


def render(state: AppState) -> ViewTree:
    """Build the full view for ``state``. Has no side effects."""
    return ViewTree(
        upload=UploadSection(
            button_disabled=state.upload.loading,
            loading=state.upload.loading,
            result=_upload_box(state.upload),
        ),
        results=ResultsSection(
            video_id_value=state.poll.video_id_input,
            loading=state.poll.loading,
            result=_results_box(state.poll),
        ),
    )


# =============================================================================
# DISPLAY SURFACES
# =============================================================================

class DisplaySurface(Protocol):
    def write(self, tree: ViewTree) -> None:
        ...


class MemorySurface:
    """Keeps every written tree, oldest first. Used headless and in tests."""

    def __init__(self):
        self.frames: list[ViewTree] = []

    def write(self, tree: ViewTree) -> None:
        self.frames.append(tree)

    @property
    def latest(self) -> ViewTree | None:
        return self.frames[-1] if self.frames else None


class HtmlSurface:
    """Holds the latest page as HTML for the web front end."""

    def __init__(self):
        self.html = ""
        self.writes = 0

    def write(self, tree: ViewTree) -> None:
        self.html = tree.to_html()
        self.writes += 1


_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    .result-box {{ white-space: pre-wrap; }}
    .success-message {{ color: #276749; }}
    .error-message {{ color: #c53030; }}
    .status-pending {{ border-left: 4px solid #718096; }}
    .status-processing {{ border-left: 4px solid #4299e1; }}
    .status-completed {{ border-left: 4px solid #48bb78; }}
    .status-failed {{ border-left: 4px solid #f56565; }}
  </style>
</head>
<body>
<div id="root">
  <div class="container">
    <div class="header">
      <h1>{title}</h1>
      <p>{tagline}</p>
    </div>

    <div class="content">
      <div class="section">
        <h2>Upload &amp; Analyze Video</h2>
        <form method="post" action="/upload" enctype="multipart/form-data">
          <div class="input-group">
            <label for="videoFile">Select Video File (MP4, MOV, AVI)</label>
            <input type="file" id="videoFile" name="video_file" class="file-input" accept="{accept}">
          </div>
          <button type="submit" class="btn" id="uploadBtn"{upload_disabled}>Analyze Video</button>
        </form>

        <div class="loading" id="uploadLoading" style="display: {upload_loading}">
          <div class="spinner"></div>
          <p>Uploading and processing video...</p>
        </div>

        <div id="uploadResult" class="result-box" style="display: {upload_result_display}">{upload_result}</div>
      </div>

      <div class="section">
        <h2>Check Analysis Results</h2>
        <form method="post" action="/results">
          <div class="input-group">
            <label for="videoId">Video ID</label>
            <input type="text" id="videoId" name="video_id" placeholder="vid_1234567890..." value="{video_id}">
          </div>
          <button type="submit" class="btn" id="resultsBtn">Get Results</button>
        </form>

        <div class="loading" id="resultLoading" style="display: {results_loading}">
          <div class="spinner"></div>
          <p>Fetching results...</p>
        </div>

        <div id="analysisResult" class="result-box" style="display: {analysis_result_display}">{analysis_result}</div>
      </div>
    </div>
  </div>
</div>
</body>
</html>
"""
