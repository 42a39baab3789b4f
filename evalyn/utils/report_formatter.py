"""
Builds the human-readable texts shown in the result boxes.

Covers the upload confirmation and the status-dependent analysis report.
"""
from datetime import datetime, tzinfo
from html import escape
from typing import Optional

from evalyn.constants import (
    AnalysisStatus,
    BYTES_PER_MIB,
    NANOSECONDS_PER_MILLISECOND,
    SCORE_SCALE,
)
from evalyn.models.analysis import AiReport, AnalysisRecord, AnalyzeResponse

INVALID_DATE = "Invalid Date"


def format_size_mb(size_bytes: int) -> str:
    """Size in MiB rounded to two decimals, e.g. ``"10.00 MB"``."""
    return f"{size_bytes / BYTES_PER_MIB:.2f} MB"


def format_score(score: int) -> str:
    return f"{score}/{SCORE_SCALE}"


def epoch_ms_from_ns(timestamp_ns: int) -> int:
    """Convert a remote timestamp (ns since epoch) to epoch milliseconds."""
    return int(timestamp_ns) // NANOSECONDS_PER_MILLISECOND


def format_timestamp_ns(timestamp_ns: int, tz: Optional[tzinfo] = None) -> str:
    """
    Localized display string of a remote timestamp.

    Args:
        timestamp_ns: Nanoseconds since epoch
        tz: Display timezone (default: local time)

    Returns:
        Date and time in the locale's representation, or INVALID_DATE when
        the timestamp is outside the platform's range
    """
    epoch_ms = epoch_ms_from_ns(timestamp_ns)
    try:
        moment = datetime.fromtimestamp(epoch_ms / 1000, tz=tz)
    except (OverflowError, ValueError, OSError):
        return INVALID_DATE
    return moment.strftime("%x, %X")


def format_upload_confirmation(response: AnalyzeResponse, filename: str, size_bytes: int) -> str:
    """Confirmation text shown after a successful upload."""
    return (
        "✅ Upload Successful!\n"
        "\n"
        f"Video ID: {response.video_id}\n"
        f"Status: {response.status}\n"
        f"File: {filename}\n"
        f"Size: {format_size_mb(size_bytes)}\n"
        "\n"
        '💡 Copy the Video ID above and use it in the "Check Results" section '
        "below to see your analysis results!"
    )


def format_ai_report(report: AiReport) -> str:
    grading = report.grading
    performance = report.performance
    return (
        "🎯 AI Analysis Results:\n"
        "\n"
        "📈 GRADING:\n"
        f"• Overall Score: {format_score(grading.overall_score)}\n"
        f"• Creativity: {format_score(grading.creativity)}\n"
        f"• Clarity: {format_score(grading.clarity)}\n"
        "\n"
        "📝 SUMMARY:\n"
        f"{report.summary}\n"
        "\n"
        "🎭 PERFORMANCE METRICS:\n"
        f"• Confidence: {format_score(performance.confidence)}\n"
        f"• Engagement: {format_score(performance.engagement)}\n"
        f"• Time Management: {format_score(performance.time_management)}"
    )


def format_analysis_report(record: AnalysisRecord, tz: Optional[tzinfo] = None) -> str:
    """
    Text report of an analysis, shaped by its status.

    The AI payload is parsed only for completed analyses; a completed record
    without payload yields the header alone.

    Raises:
        MalformedPayloadError: If a completed analysis carries an invalid payload
    """
    text = (
        "📊 Analysis Results\n"
        "\n"
        f"Video ID: {record.video_id}\n"
        f"Status: {record.status.value.upper()}\n"
        f"Timestamp: {format_timestamp_ns(record.timestamp, tz=tz)}\n"
        "\n"
    )

    if record.status is AnalysisStatus.COMPLETED:
        if record.ai_response:
            text += format_ai_report(AiReport.from_json(record.ai_response))
    elif record.status in (AnalysisStatus.PENDING, AnalysisStatus.PROCESSING, AnalysisStatus.FAILED):
        text += record.status.notice

    return text


def wrap_status_container(status: AnalysisStatus, text: str) -> str:
    """HTML fragment of a report, styled by its status."""
    return f'<div class="{status.css_class}">{escape(text)}</div>'


def wrap_message(css_class: str, text: str) -> str:
    return f'<div class="{css_class}">{escape(text)}</div>'
