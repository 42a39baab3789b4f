"""Shared fixtures: project root on sys.path and a scriptable fake backend."""

import asyncio
import os
import sys
from typing import Callable, Optional

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from evalyn.config import Settings
from evalyn.models.analysis import AnalysisRecord, AnalyzeResponse
from evalyn.models.state import SelectedFile

MIB = 1024 * 1024

COMPLETED_PAYLOAD = (
    '{"grading": {"overall_score": 87, "creativity": 91, "clarity": 78},'
    ' "summary": "Clear pitch with a strong opening.",'
    ' "performance": {"confidence": 82, "engagement": 88, "time_management": 70}}'
)


class FakeBackend:
    """
    In-memory AnalysisBackend.

    ``gates`` maps a video id to an asyncio.Event the lookup waits on, so a
    test can decide in which order responses arrive. ``on_call`` runs at the
    moment a remote call is issued.
    """

    def __init__(self,
                 analyze_response: Optional[AnalyzeResponse] = None,
                 records: Optional[dict] = None,
                 analyze_error: Optional[Exception] = None,
                 lookup_error: Optional[Exception] = None):
        self.analyze_response = analyze_response or AnalyzeResponse(video_id="vid_123", status="pending")
        self.records = records or {}
        self.analyze_error = analyze_error
        self.lookup_error = lookup_error
        self.gates: dict[str, asyncio.Event] = {}
        self.upload_gate: Optional[asyncio.Event] = None
        self.on_call: Optional[Callable[[str], None]] = None
        self.uploads: list[bytes] = []
        self.lookups: list[str] = []

    async def analyze_video(self, data: bytes) -> AnalyzeResponse:
        self.uploads.append(data)
        if self.on_call:
            self.on_call("analyze_video")
        if self.upload_gate is not None:
            await self.upload_gate.wait()
        if self.analyze_error:
            raise self.analyze_error
        return self.analyze_response

    async def get_analysis_result(self, video_id: str) -> Optional[AnalysisRecord]:
        self.lookups.append(video_id)
        if self.on_call:
            self.on_call("get_analysis_result")
        gate = self.gates.get(video_id)
        if gate is not None:
            await gate.wait()
        if self.lookup_error:
            raise self.lookup_error
        return self.records.get(video_id)


def make_record(video_id: str = "vid_123",
                status: str = "completed",
                timestamp: int = 1700000000000000000,
                ai_response=None) -> AnalysisRecord:
    return AnalysisRecord.model_validate({
        "videoId": video_id,
        "status": status,
        "timestamp": timestamp,
        "aiResponse": ai_response,
    })


def make_file(size: int, filename: str = "pitch.mp4", content_type: str = "video/mp4") -> SelectedFile:
    return SelectedFile(filename=filename, content=b"\0" * size, content_type=content_type)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def backend():
    return FakeBackend()
