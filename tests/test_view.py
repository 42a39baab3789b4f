from evalyn.constants import MessageKind
from evalyn.models.state import AppState, PollState, UploadState
from evalyn.ui.view import HtmlSurface, MemorySurface, render


def test_initial_view_is_empty():
    tree = render(AppState())

    assert tree.title == "EVALYN"
    assert tree.upload.accept == "video/*"
    assert tree.upload.loading is False
    assert tree.upload.button_disabled is False
    assert tree.upload.result.visible is False
    assert tree.results.result.visible is False
    assert tree.results.video_id_value == ""


def test_render_is_idempotent():
    state = AppState(
        upload=UploadState(result_message="Upload failed: boom", message_kind=MessageKind.ERROR),
        poll=PollState(rendered_html='<div class="status-pending">x</div>', video_id_input="vid_1"),
    )
    assert render(state) == render(state)
    assert render(state).to_html() == render(state).to_html()


def test_loading_upload_disables_button():
    tree = render(AppState(upload=UploadState(loading=True)))
    assert tree.upload.button_disabled is True
    assert 'id="uploadBtn" disabled' in tree.to_html()


def test_message_classes():
    state = AppState(
        upload=UploadState(result_message="✅ Upload Successful!", message_kind=MessageKind.SUCCESS),
        poll=PollState(result_message="Please enter a Video ID!", message_kind=MessageKind.ERROR),
    )
    tree = render(state)
    assert tree.upload.result.content_html.startswith('<div class="success-message">')
    assert tree.results.result.content_html.startswith('<div class="error-message">')


def test_rendered_report_takes_precedence():
    state = AppState(poll=PollState(
        result_message="report text",
        rendered_html='<div class="status-completed">report text</div>',
    ))
    assert render(state).results.result.content_html == '<div class="status-completed">report text</div>'


def test_html_escapes_user_input():
    state = AppState(poll=PollState(video_id_input='"><script>'))
    html = render(state).to_html()
    assert '"><script>' not in html
    assert 'value="&quot;&gt;&lt;script&gt;"' in html


def test_result_boxes_hidden_when_empty():
    html = render(AppState()).to_html()
    assert 'id="uploadResult" class="result-box" style="display: none"' in html
    assert 'id="analysisResult" class="result-box" style="display: none"' in html


def test_surfaces_receive_trees():
    tree = render(AppState())
    memory, html = MemorySurface(), HtmlSurface()

    memory.write(tree)
    html.write(tree)

    assert memory.latest == tree
    assert html.writes == 1
    assert "<h1>EVALYN</h1>" in html.html
