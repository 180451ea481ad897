# ruff: noqa: S101
from courier.dispatcher import Dispatcher
from courier.models import (
    Failed,
    HelpFocus,
    MethodDropdownFocus,
    Pending,
    RequestSpec,
    ResponseView,
    Succeeded,
    UrlFocus,
    ValuesFocus,
    ValuesView,
)
from courier.render import (
    render_dropdown,
    render_help,
    render_response,
    render_status,
    render_tab_bar,
    render_url,
    render_values,
    section_of,
)


def _tab(**changes):
    dispatcher = Dispatcher([RequestSpec(url="https://api.test/a", headers=[("Accept", "text/plain")])])
    tab = dispatcher.registry.active_tab()
    for name, value in changes.items():
        setattr(tab, name, value)
    return dispatcher, tab


def test_section_of_follows_help_to_previous():
    assert section_of(HelpFocus(previous=ValuesFocus())) == "values"
    assert section_of(MethodDropdownFocus()) == "url"


def test_render_url_shows_draft_while_editing():
    _, tab = _tab()
    tab.edit.url_draft = "https://draft"
    assert "GET" in render_url(tab.snapshot(), UrlFocus()).plain
    assert "https://api.test/a" in render_url(tab.snapshot(), UrlFocus()).plain
    assert "https://draft" in render_url(tab.snapshot(), UrlFocus(editing=True)).plain


def test_render_values_lists_headers():
    _, tab = _tab(values_view=ValuesView.HEADERS)
    text = render_values(tab.snapshot(), ValuesFocus(view=ValuesView.HEADERS)).plain
    assert "Accept: text/plain" in text


def test_render_response_states():
    _, tab = _tab(response=Pending())
    assert "Sending request..." in render_response(tab.snapshot()).plain
    tab.response = Failed(error="Request timed out after 30 seconds", timed_out=True)
    assert "Request timed out after 30 seconds" in render_response(tab.snapshot()).plain


def test_render_response_body_scrolls():
    body = '{"a":1,"b":2}'
    _, tab = _tab(response=Succeeded(status=404, headers=(("X", "1"),), body=body, elapsed_ms=2.0), response_scroll=2)
    text = render_response(tab.snapshot()).plain
    assert "Status: 404" in text
    assert "Size: 13 bytes" in text
    assert '"a": 1' not in text
    assert '"b": 2' in text
    tab.response_view = ResponseView.HEADERS
    assert "X: 1" in render_response(tab.snapshot()).plain


def test_render_tab_bar_marks_pending_tabs():
    dispatcher, tab = _tab(response=Pending())
    dispatcher.registry.create_tab()
    text = render_tab_bar(dispatcher.snapshot()).plain
    assert "Tab 1 …" in text
    assert "Tab 2" in text


def test_render_overlays():
    assert "› PUT" in render_dropdown(MethodDropdownFocus(2)).plain
    assert "Toggle this help" in render_help(HelpFocus(previous=UrlFocus())).plain


def test_render_status_prefers_message():
    dispatcher, _ = _tab()
    assert "URL Input" in render_status(dispatcher.snapshot()).plain
    dispatcher.message = "Cannot close the last tab."
    assert render_status(dispatcher.snapshot()).plain == "Cannot close the last tab."


def test_render_response_prefers_content_length_header():
    response = Succeeded(status=200, headers=(("Content-Length", "2048"),), body="{}", elapsed_ms=1.0)
    _, tab = _tab(response=response)
    assert "Size: 2048 bytes" in render_response(tab.snapshot()).plain
