"""
Content Limits and Unit Constants.

Size limits for uploads and unit conversions for remote data.
"""

# ============================================================================
# UPLOAD
# ============================================================================

BYTES_PER_MIB = 1024 * 1024
"""Bytes in one mebibyte; displayed sizes are in MiB labelled "MB"."""

MAX_UPLOAD_BYTES = 50 * BYTES_PER_MIB
"""Largest accepted video (50 MiB). Larger files are rejected before upload."""

VIDEO_MIME_PREFIX = "video/"
"""Content type prefix accepted by the file picker."""


# ============================================================================
# REMOTE DATA
# ============================================================================

NANOSECONDS_PER_MILLISECOND = 1_000_000
"""Remote timestamps are nanoseconds since epoch; divide by this for epoch-ms."""

SCORE_SCALE = 100
"""Upper bound of every AI score; scores are displayed as "<n>/100"."""
