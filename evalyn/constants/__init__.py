"""
Application Constants Package.

All constants are re-exported from this __init__.py for convenience:

    from evalyn.constants import AnalysisStatus, MAX_UPLOAD_BYTES
    from evalyn.constants.enums import AnalysisStatus
"""

# ============================================================================
# ENUMERATIONS
# ============================================================================

from .enums import (
    AnalysisStatus,
    MessageKind,
)

# ============================================================================
# API & NETWORK
# ============================================================================

from .api import (
    DEFAULT_BACKEND_URL,
    ANALYZE_PATH,
    RESULTS_PATH,
    DEFAULT_REQUEST_TIMEOUT,
)

# ============================================================================
# LIMITS & UNITS
# ============================================================================

from .limits import (
    BYTES_PER_MIB,
    MAX_UPLOAD_BYTES,
    VIDEO_MIME_PREFIX,
    NANOSECONDS_PER_MILLISECOND,
    SCORE_SCALE,
)

__all__ = [
    "AnalysisStatus",
    "MessageKind",
    "DEFAULT_BACKEND_URL",
    "ANALYZE_PATH",
    "RESULTS_PATH",
    "DEFAULT_REQUEST_TIMEOUT",
    "BYTES_PER_MIB",
    "MAX_UPLOAD_BYTES",
    "VIDEO_MIME_PREFIX",
    "NANOSECONDS_PER_MILLISECOND",
    "SCORE_SCALE",
]
