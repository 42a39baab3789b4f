"""
API and Network Configuration Constants.

Endpoint defaults and paths of the remote analysis service.
"""

# ============================================================================
# ENDPOINT
# ============================================================================

DEFAULT_BACKEND_URL = "http://localhost:4943"
"""Default base URL of the remote analysis service."""

ANALYZE_PATH = "/analyze"
"""POST raw video bytes here to start an analysis."""

RESULTS_PATH = "/results/{video_id}"
"""GET the analysis record of a video."""


# ============================================================================
# TIMEOUTS (in seconds)
# ============================================================================

DEFAULT_REQUEST_TIMEOUT = None
"""No timeout unless configured; expiry is reported as a remote error."""
