"""
Upload and poll workflows.

Each user action follows the same sequence:
1. Validate input (synchronous, no remote call on failure)
2. Set the loading state and render
3. Await the remote call
4. Set the result or error state and render

State transitions are plain functions from AppState to AppState. The
AnalyzerApp controller holds the current state, applies transitions, and
renders once after each of them.
"""
from typing import Optional
import logging

from evalyn.config import Settings, get_settings
from evalyn.constants import MessageKind, VIDEO_MIME_PREFIX
from evalyn.models.analysis import AnalysisRecord, AnalyzeResponse
from evalyn.models.state import AppState, FlowResult, PollState, SelectedFile, UploadState
from evalyn.services.backend import AnalysisBackend
from evalyn.ui.view import DisplaySurface, MemorySurface, ViewTree, render
from evalyn.utils.api_helpers import (
    EvalynError,
    NotFoundError,
    RequestSequencer,
    ValidationError,
    call_with_timeout,
)
from evalyn.utils.report_formatter import (
    format_analysis_report,
    format_upload_confirmation,
    wrap_status_container,
)

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "Please select a video file first!"
TOO_LARGE_MESSAGE = "File too large! Please select a video under 50MB."
NOT_VIDEO_MESSAGE = "Unsupported file type! Please select a video file."
UPLOAD_IN_PROGRESS_MESSAGE = "An upload is already in progress."
MISSING_ID_MESSAGE = "Please enter a Video ID!"
NOT_FOUND_MESSAGE = "Video ID not found! Please check the ID and try again."


# ============================================================================
# VALIDATION
# ============================================================================

def validate_selected_file(selected_file: Optional[SelectedFile], settings: Settings) -> SelectedFile:
    """
    Check a picked file before uploading it.

    Raises:
        ValidationError: No file, file larger than the limit, or (when
            enforced) a non-video content type
    """
    if selected_file is None:
        raise ValidationError(NO_FILE_MESSAGE)

    if selected_file.size > settings.max_upload_bytes:
        raise ValidationError(TOO_LARGE_MESSAGE)

    if settings.enforce_video_mime and not selected_file.content_type.startswith(VIDEO_MIME_PREFIX):
        raise ValidationError(NOT_VIDEO_MESSAGE)

    return selected_file


def validate_video_id(raw: Optional[str]) -> str:
    """Return the trimmed identifier or raise ValidationError if empty."""
    video_id = (raw or "").strip()
    if not video_id:
        raise ValidationError(MISSING_ID_MESSAGE)
    return video_id


# ============================================================================
# UPLOAD TRANSITIONS
# ============================================================================

def upload_started(state: AppState) -> AppState:
    return state.model_copy(update={"upload": UploadState(loading=True)})


def upload_succeeded(state: AppState, response: AnalyzeResponse, selected_file: SelectedFile) -> AppState:
    upload = UploadState(
        result_message=format_upload_confirmation(response, selected_file.filename, selected_file.size),
        message_kind=MessageKind.SUCCESS,
        last_assigned_id=response.video_id,
    )
    # Upload success seeds the poll input.
    poll = state.poll.model_copy(update={"video_id_input": response.video_id})
    return state.model_copy(update={"upload": upload, "poll": poll})


def upload_failed(state: AppState, error: EvalynError) -> AppState:
    message = error.message
    if not isinstance(error, ValidationError):
        message = f"Upload failed: {error.message}"
    upload = UploadState(result_message=message, message_kind=MessageKind.ERROR)
    return state.model_copy(update={"upload": upload})


# ============================================================================
# POLL TRANSITIONS
# ============================================================================

def poll_started(state: AppState, video_id_input: str) -> AppState:
    poll = PollState(loading=True, video_id_input=video_id_input)
    return state.model_copy(update={"poll": poll})


def poll_succeeded(state: AppState, record: AnalysisRecord, report_text: str) -> AppState:
    poll = PollState(
        result_message=report_text,
        message_kind=MessageKind.REPORT,
        rendered_html=wrap_status_container(record.status, report_text),
        video_id_input=state.poll.video_id_input,
    )
    return state.model_copy(update={"poll": poll})


def poll_failed(state: AppState, error: EvalynError, video_id_input: Optional[str] = None) -> AppState:
    message = error.message
    if not isinstance(error, (ValidationError, NotFoundError)):
        message = f"Error checking results: {error.message}"
    poll = PollState(
        result_message=message,
        message_kind=MessageKind.ERROR,
        video_id_input=state.poll.video_id_input if video_id_input is None else video_id_input,
    )
    return state.model_copy(update={"poll": poll})


# ============================================================================
# CONTROLLER
# ============================================================================

class AnalyzerApp:
    """
    Holds the UI state and runs the two flows against a backend.

    Every state change goes through ``_commit``, which renders exactly once.
    Both flows tag their remote call with a ticket; a response whose ticket
    is no longer the latest is discarded without touching the state.
    """

    def __init__(self,
                 backend: AnalysisBackend,
                 surface: Optional[DisplaySurface] = None,
                 settings: Optional[Settings] = None):
        self.backend = backend
        self.surface = surface if surface is not None else MemorySurface()
        self.settings = settings or get_settings()
        self.state = AppState()
        self._upload_requests = RequestSequencer("upload")
        self._poll_requests = RequestSequencer("poll")
        self.render()

    def render(self) -> ViewTree:
        tree = render(self.state)
        self.surface.write(tree)
        return tree

    def _commit(self, state: AppState) -> None:
        self.state = state
        self.render()

    def set_video_id_input(self, value: str) -> None:
        """Reflect the user typing into the identifier field."""
        poll = self.state.poll.model_copy(update={"video_id_input": value})
        self._commit(self.state.model_copy(update={"poll": poll}))

    async def upload_video(self, selected_file: Optional[SelectedFile]) -> FlowResult:
        """
        Upload Flow: validate, send the raw bytes, report the assigned id.

        Returns:
            FlowResult holding the AnalyzeResponse, or the error shown to the user
        """
        if self.state.upload.loading:
            # The upload control is disabled while a request is in flight.
            logger.info("Upload ignored: another upload is in progress")
            return FlowResult.failure(ValidationError(UPLOAD_IN_PROGRESS_MESSAGE))

        ticket = self._upload_requests.next()

        try:
            selected_file = validate_selected_file(selected_file, self.settings)
        except ValidationError as e:
            logger.info(f"Upload rejected: {e.message}")
            self._commit(upload_failed(self.state, e))
            return FlowResult.failure(e)

        self._commit(upload_started(self.state))
        logger.info(f"Uploading {selected_file.filename} ({selected_file.size} bytes)")

        try:
            response = await call_with_timeout(
                self.backend.analyze_video(selected_file.content),
                self.settings.request_timeout,
            )
        except EvalynError as e:
            if not self._upload_requests.is_current(ticket):
                return FlowResult.superseded()
            logger.error(f"Upload of {selected_file.filename} failed: {e.message}")
            self._commit(upload_failed(self.state, e))
            return FlowResult.failure(e)

        if not self._upload_requests.is_current(ticket):
            return FlowResult.superseded()

        logger.info(f"Upload accepted: video_id={response.video_id} status={response.status}")
        self._commit(upload_succeeded(self.state, response, selected_file))
        return FlowResult.success(response)

    async def check_result(self, video_id: Optional[str] = None) -> FlowResult:
        """
        Poll Flow: look up an analysis and render its report.

        Args:
            video_id: Identifier to look up; defaults to the identifier field

        Returns:
            FlowResult holding the report text, or the error shown to the user
        """
        raw = self.state.poll.video_id_input if video_id is None else video_id
        ticket = self._poll_requests.next()

        try:
            lookup_id = validate_video_id(raw)
        except ValidationError as e:
            logger.info(f"Result lookup rejected: {e.message}")
            self._commit(poll_failed(self.state, e, video_id_input=raw))
            return FlowResult.failure(e)

        self._commit(poll_started(self.state, raw))
        logger.info(f"Fetching analysis result for {lookup_id}")

        try:
            record = await call_with_timeout(
                self.backend.get_analysis_result(lookup_id),
                self.settings.request_timeout,
            )
            if not self._poll_requests.is_current(ticket):
                return FlowResult.superseded()
            if record is None:
                raise NotFoundError(NOT_FOUND_MESSAGE)
            report_text = format_analysis_report(record)
        except EvalynError as e:
            if not self._poll_requests.is_current(ticket):
                return FlowResult.superseded()
            if isinstance(e, NotFoundError):
                logger.info(f"No analysis found for {lookup_id}")
            else:
                logger.error(f"Result lookup for {lookup_id} failed: {e.message}")
            self._commit(poll_failed(self.state, e))
            return FlowResult.failure(e)

        logger.info(f"Analysis {lookup_id} is {record.status.value}")
        self._commit(poll_succeeded(self.state, record, report_text))
        return FlowResult.success(report_text)
