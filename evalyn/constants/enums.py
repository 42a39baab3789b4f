"""
Enumeration classes for the application.

The analysis status is a closed set: every place that branches on it must
cover all four members.
"""

from enum import Enum


class AnalysisStatus(str, Enum):
    """
    Status of a remote video analysis.

    - PENDING: Video received, queued for processing
    - PROCESSING: AI analysis is running
    - COMPLETED: Analysis finished, report available
    - FAILED: Analysis did not complete
    """
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def css_class(self) -> str:
        """Returns the container class used when rendering a report."""
        return f"status-{self.value}"

    @property
    def notice(self) -> str:
        """Returns the user-facing notice shown for non-completed statuses."""
        notices = {
            self.PENDING: "⏳ Your video is queued for processing. Please check back in a few moments.",
            self.PROCESSING: "🔄 AI is currently analyzing your video. This may take a few minutes.",
            self.COMPLETED: "",
            self.FAILED: "❌ Analysis failed. Please try uploading the video again.",
        }
        return notices[self]


class MessageKind(str, Enum):
    """Styling of a result box message."""
    SUCCESS = "success"
    ERROR = "error"
    REPORT = "report"
