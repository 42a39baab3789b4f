import asyncio

import pytest

from conftest import COMPLETED_PAYLOAD, FakeBackend, make_file, make_record
from evalyn.constants import MessageKind
from evalyn.core.workflow import AnalyzerApp, MISSING_ID_MESSAGE, NOT_FOUND_MESSAGE
from evalyn.ui.view import MemorySurface
from evalyn.utils.api_helpers import (
    MalformedPayloadError,
    NotFoundError,
    RemoteCallError,
    ValidationError,
)


def make_app(backend, settings, surface=None):
    return AnalyzerApp(backend, surface=surface or MemorySurface(), settings=settings)


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
async def test_blank_id_makes_no_remote_call(backend, settings, raw):
    app = make_app(backend, settings)

    result = await app.check_result(raw)

    assert isinstance(result.error, ValidationError)
    assert backend.lookups == []
    assert app.state.poll.result_message == MISSING_ID_MESSAGE
    assert app.state.poll.loading is False


@pytest.mark.asyncio
async def test_id_is_trimmed_before_lookup(settings):
    backend = FakeBackend(records={"vid_1": make_record("vid_1", status="pending")})
    app = make_app(backend, settings)

    result = await app.check_result("  vid_1 \n")

    assert result.ok
    assert backend.lookups == ["vid_1"]


@pytest.mark.asyncio
async def test_unknown_id_renders_not_found(backend, settings):
    app = make_app(backend, settings)

    result = await app.check_result("vid_999")

    assert isinstance(result.error, NotFoundError)
    assert app.state.poll.result_message == NOT_FOUND_MESSAGE
    assert app.state.poll.message_kind is MessageKind.ERROR
    assert app.state.poll.loading is False
    assert "Video ID not found" in app.surface.latest.results.result.content_html


@pytest.mark.asyncio
async def test_completed_report_is_rendered(settings):
    record = make_record("vid_1", ai_response=[COMPLETED_PAYLOAD])
    app = make_app(FakeBackend(records={"vid_1": record}), settings)

    result = await app.check_result("vid_1")

    assert result.ok
    text = app.state.poll.result_message
    assert "Status: COMPLETED" in text
    assert "Overall Score: 87/100" in text
    assert "Clear pitch with a strong opening." in text
    assert "Time Management: 70/100" in text
    assert app.state.poll.rendered_html.startswith('<div class="status-completed">')
    assert app.surface.latest.results.result.visible


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["pending", "processing", "failed"])
async def test_status_container_class(settings, status):
    app = make_app(FakeBackend(records={"vid_1": make_record("vid_1", status=status)}), settings)

    await app.check_result("vid_1")

    assert f'class="status-{status}"' in app.state.poll.rendered_html


@pytest.mark.asyncio
async def test_malformed_payload_is_reported_not_raised(settings):
    record = make_record("vid_1", ai_response="{not json")
    app = make_app(FakeBackend(records={"vid_1": record}), settings)

    result = await app.check_result("vid_1")

    assert isinstance(result.error, MalformedPayloadError)
    assert app.state.poll.result_message.startswith("Error checking results: Invalid AI report")
    assert app.state.poll.rendered_html == ""
    assert app.state.poll.loading is False


@pytest.mark.asyncio
async def test_remote_error_is_reported(settings):
    backend = FakeBackend(lookup_error=RemoteCallError("service unavailable"))
    app = make_app(backend, settings)

    result = await app.check_result("vid_1")

    assert isinstance(result.error, RemoteCallError)
    assert app.state.poll.result_message == "Error checking results: service unavailable"


@pytest.mark.asyncio
async def test_defaults_to_identifier_field(settings):
    backend = FakeBackend(records={"vid_123": make_record("vid_123", status="processing")})
    app = make_app(backend, settings)
    app.set_video_id_input("vid_123")

    result = await app.check_result()

    assert result.ok
    assert backend.lookups == ["vid_123"]


@pytest.mark.asyncio
async def test_upload_then_poll_uses_seeded_id(settings):
    backend = FakeBackend(records={"vid_123": make_record("vid_123", status="pending")})
    app = make_app(backend, settings)

    await app.upload_video(make_file(10))
    result = await app.check_result()

    assert result.ok
    assert backend.lookups == ["vid_123"]
    assert "queued for processing" in app.state.poll.result_message


@pytest.mark.asyncio
async def test_loading_is_rendered_before_lookup(settings):
    surface = MemorySurface()
    backend = FakeBackend(records={"vid_1": make_record("vid_1", status="pending")})
    app = make_app(backend, settings, surface=surface)
    seen = []
    backend.on_call = lambda name: seen.append(surface.latest)

    await app.check_result("vid_1")

    assert seen[0].results.loading is True
    assert seen[0].results.result.visible is False
    assert surface.latest.results.loading is False


@pytest.mark.asyncio
async def test_slow_earlier_response_does_not_overwrite_later_one(settings):
    backend = FakeBackend(records={
        "vid_a": make_record("vid_a", status="processing"),
        "vid_b": make_record("vid_b", status="failed"),
    })
    backend.gates["vid_a"] = asyncio.Event()
    surface = MemorySurface()
    app = make_app(backend, settings, surface=surface)

    first = asyncio.create_task(app.check_result("vid_a"))
    await asyncio.sleep(0)
    second = await app.check_result("vid_b")
    frames_after_second = len(surface.frames)

    backend.gates["vid_a"].set()
    first_result = await first

    assert second.ok
    assert first_result.stale
    assert "Video ID: vid_b" in app.state.poll.result_message
    assert 'class="status-failed"' in app.state.poll.rendered_html
    assert len(surface.frames) == frames_after_second


@pytest.mark.asyncio
async def test_stale_error_is_discarded_too(settings):
    backend = FakeBackend(records={"vid_b": make_record("vid_b", status="pending")})
    backend.gates["vid_a"] = asyncio.Event()
    app = make_app(backend, settings)

    first = asyncio.create_task(app.check_result("vid_a"))
    await asyncio.sleep(0)
    await app.check_result("vid_b")
    backend.gates["vid_a"].set()

    assert (await first).stale
    assert "Video ID: vid_b" in app.state.poll.result_message


@pytest.mark.asyncio
async def test_poll_timeout_is_reported(settings):
    backend = FakeBackend()
    backend.gates["vid_1"] = asyncio.Event()
    settings.request_timeout = 0.01
    app = make_app(backend, settings)

    result = await app.check_result("vid_1")

    assert isinstance(result.error, RemoteCallError)
    assert app.state.poll.result_message == "Error checking results: Request timed out after 0.01s"
    assert app.state.poll.loading is False


@pytest.mark.asyncio
async def test_out_of_range_timestamp_renders_invalid_date(settings):
    record = make_record("vid_1", status="pending", timestamp=10**30)
    app = make_app(FakeBackend(records={"vid_1": record}), settings)

    result = await app.check_result("vid_1")

    assert result.ok
    assert "Timestamp: Invalid Date" in app.state.poll.result_message
    assert "queued for processing" in app.state.poll.result_message
    assert app.state.poll.loading is False
