"""Turn read-only snapshots into rich Text for each panel."""

from rich.text import Text

from .config import HELP_ENTRIES
from .dispatcher import AppSnapshot
from .models import (
    METHODS,
    Empty,
    Failed,
    FocusState,
    FormField,
    HelpFocus,
    HttpMethod,
    MethodDropdownFocus,
    Pending,
    ResponseView,
    Succeeded,
    UrlFocus,
    ValuesFocus,
    ValuesView,
)
from .parsing import format_response_body
from .tabs import TabSnapshot

CURSOR = "▏"

METHOD_STYLES = {
    HttpMethod.GET: "bold green",
    HttpMethod.POST: "bold blue",
    HttpMethod.PUT: "bold yellow",
    HttpMethod.DELETE: "bold red",
}


def section_of(focus: FocusState) -> str:
    """Name of the panel that should be highlighted for this focus."""
    if isinstance(focus, HelpFocus):
        return section_of(focus.previous)
    if isinstance(focus, (UrlFocus, MethodDropdownFocus)):
        return "url"
    if isinstance(focus, ValuesFocus):
        return "values"
    return "response"


def render_tab_bar(snapshot: AppSnapshot) -> Text:
    text = Text()
    for index, tab in enumerate(snapshot.tabs):
        if index:
            text.append(" │ ", style="dim")
        label = tab.title + (" …" if isinstance(tab.response, Pending) else "")
        style = "bold reverse" if index == snapshot.active_index else ""
        text.append(f" {label} ", style=style)
    return text


def render_url(tab: TabSnapshot, focus: FocusState) -> Text:
    text = Text()
    text.append(f" {tab.method.value} ", style=METHOD_STYLES[tab.method] + " reverse")
    text.append(" ")
    if isinstance(focus, UrlFocus) and focus.editing:
        text.append(tab.url_draft)
        text.append(CURSOR, style="blink")
    else:
        text.append(tab.url or "<no URL>", style="" if tab.url else "dim")
    return text


def render_values(tab: TabSnapshot, focus: FocusState) -> Text:
    text = _view_strip(list(ValuesView), tab.values_view)
    text.append("\n")
    editing = isinstance(focus, ValuesFocus) and focus.editing
    if tab.values_view is ValuesView.BODY:
        body = tab.body_draft if editing else (tab.body or "")
        text.append(body or ("" if editing else "<empty body>"), style="" if body or editing else "dim")
        if editing:
            text.append(CURSOR, style="blink")
        return text

    pairs = tab.headers if tab.values_view is ValuesView.HEADERS else tab.params
    separator = ": " if tab.values_view is ValuesView.HEADERS else "="
    if not pairs and not editing:
        text.append(f"No {tab.values_view.value.lower()} yet. Press i to add.", style="dim")
    for key, value in pairs:
        text.append(key, style="bold cyan")
        text.append(f"{separator}{value}\n")
    if editing:
        text.append(_form_line(tab, separator))
    return text


def _form_line(tab: TabSnapshot, separator: str) -> Text:
    line = Text("+ ", style="yellow")
    key_style = "reverse" if tab.form_field is FormField.KEY else "underline"
    value_style = "reverse" if tab.form_field is FormField.VALUE else "underline"
    line.append(tab.form_key or "key", style=key_style)
    line.append(separator)
    line.append(tab.form_value or "value", style=value_style)
    return line


def render_response(tab: TabSnapshot) -> Text:
    text = _view_strip(list(ResponseView), tab.response_view)
    text.append("\n")
    response = tab.response
    if isinstance(response, Empty):
        text.append("No response yet. Press Enter to send.", style="dim")
    elif isinstance(response, Pending):
        text.append("Sending request...", style="italic yellow")
    elif isinstance(response, Failed):
        text.append(response.error, style="bold red")
    elif isinstance(response, Succeeded):
        text.append(_status_line(response))
        text.append("\n")
        if tab.response_view is ResponseView.HEADERS:
            for key, value in response.headers:
                text.append(key, style="bold cyan")
                text.append(f": {value}\n")
        else:
            lines = format_response_body(response).splitlines()
            text.append("\n".join(lines[tab.response_scroll :]))
    return text


def _status_line(response: Succeeded) -> Text:
    style = "bold green" if response.status < 400 else "bold red"
    line = Text(f"Status: {response.status}", style=style)
    line.append(f"  Time: {response.elapsed_ms:.1f} ms", style="dim")
    size = response.content_length()
    if size is None:
        size = len(response.body.encode("utf-8"))
    line.append(f"  Size: {size} bytes", style="dim")
    return line


def _view_strip(views: list, active) -> Text:
    text = Text()
    for index, view in enumerate(views):
        if index:
            text.append(" | ", style="dim")
        text.append(view.value, style="bold underline" if view is active else "dim")
    return text


def render_dropdown(focus: MethodDropdownFocus) -> Text:
    text = Text()
    for index, method in enumerate(METHODS):
        marker = "› " if index == focus.highlighted else "  "
        style = METHOD_STYLES[method] + (" reverse" if index == focus.highlighted else "")
        text.append(marker)
        text.append(method.value, style=style)
        text.append("\n")
    return text


def render_help(focus: HelpFocus) -> Text:
    text = Text()
    for keys, description in HELP_ENTRIES[focus.scroll :]:
        if not description:
            text.append(f"{keys}\n", style="bold yellow")
            continue
        text.append(f"{keys:<22}", style="bold green")
        text.append(f"{description}\n")
    text.append(f"\nj/k to scroll, Esc to close ({focus.scroll + 1}/{len(HELP_ENTRIES)})", style="dim")
    return text


def render_status(snapshot: AppSnapshot) -> Text:
    if snapshot.message:
        return Text(snapshot.message, style="bold yellow")
    text = Text(snapshot.context, style="bold")
    if snapshot.in_flight:
        text.append(f"  ·  {snapshot.in_flight} in flight", style="italic")
    text.append("  ·  ? for help", style="dim")
    return text
