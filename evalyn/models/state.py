"""
UI state records.

Each flow owns one record and replaces it wholesale; the renderer only reads.
"""
from dataclasses import dataclass
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

from evalyn.constants import MessageKind
from evalyn.utils.api_helpers import EvalynError


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user."""
    filename: str
    content: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


class UploadState(BaseModel):
    model_config = ConfigDict(frozen=True)

    loading: bool = False
    result_message: str = ""
    message_kind: MessageKind = MessageKind.SUCCESS
    last_assigned_id: Optional[str] = None


class PollState(BaseModel):
    model_config = ConfigDict(frozen=True)

    loading: bool = False
    result_message: str = ""
    message_kind: MessageKind = MessageKind.REPORT
    rendered_html: str = ""
    # Contents of the identifier field; a successful upload seeds it.
    video_id_input: str = ""


class AppState(BaseModel):
    """Complete UI state handed to the renderer."""
    model_config = ConfigDict(frozen=True)

    upload: UploadState = UploadState()
    poll: PollState = PollState()


@dataclass
class FlowResult:
    """
    Outcome of one user action.

    ``stale`` is set when a newer action superseded this one before its
    remote call returned; its outcome was discarded.
    """
    value: Any = None
    error: Optional[EvalynError] = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale

    @classmethod
    def success(cls, value: Any) -> "FlowResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: EvalynError) -> "FlowResult":
        return cls(error=error)

    @classmethod
    def superseded(cls) -> "FlowResult":
        return cls(stale=True)
