from .analysis import (
    AnalyzeResponse,
    AnalysisRecord,
    Grading,
    Performance,
    AiReport,
)
from .state import (
    SelectedFile,
    UploadState,
    PollState,
    AppState,
    FlowResult,
)

__all__ = [
    "AnalyzeResponse",
    "AnalysisRecord",
    "Grading",
    "Performance",
    "AiReport",
    "SelectedFile",
    "UploadState",
    "PollState",
    "AppState",
    "FlowResult",
]
