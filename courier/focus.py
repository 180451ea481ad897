"""Modal focus handling: which region owns the keyboard and what each command does there."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from .config import HELP_ENTRIES
from .errors import CourierError, StateInvariantViolation, ValidationError
from .events import Command, InputEvent
from .models import (
    DEFAULT_FOCUS,
    METHODS,
    FocusState,
    FormField,
    HelpFocus,
    MethodDropdownFocus,
    ResponseFocus,
    ResponseView,
    Succeeded,
    UrlFocus,
    ValuesFocus,
    ValuesView,
)
from .parsing import clean_pair, describe_request, format_response_body, looks_like_json
from .tabs import Tab, TabRegistry

if TYPE_CHECKING:
    from .coordinator import RequestCoordinator

logger = logging.getLogger(__name__)

TAB_COMMANDS = {Command.NEW_TAB, Command.CLOSE_TAB, Command.NEXT_TAB, Command.PREV_TAB}
KEY_VALUE_SEPARATORS = {ValuesView.HEADERS: ":", ValuesView.PARAMS: "="}


T = TypeVar("T")


def _rotate(items: list[T], current: T, step: int) -> T:
    return items[(items.index(current) + step) % len(items)]


def _max_scroll(tab: Tab) -> int:
    response = tab.response
    if not isinstance(response, Succeeded):
        return 0
    lines = format_response_body(response).splitlines()
    return max(len(lines) - 1, 0)


class FocusMachine:
    def __init__(self, registry: TabRegistry, coordinator: RequestCoordinator) -> None:
        self.registry = registry
        self.coordinator = coordinator
        self.state: FocusState = DEFAULT_FOCUS

    def reset(self) -> None:
        self.state = DEFAULT_FOCUS

    def handle(self, event: InputEvent) -> str | None:
        """Apply one command. Returns a message for the status line, if any."""
        if event.command is Command.HELP_TOGGLE:
            return self._toggle_help()
        state = self.state
        try:
            if isinstance(state, HelpFocus):
                return self._handle_help(state, event)
            if isinstance(state, MethodDropdownFocus):
                return self._handle_dropdown(state, event)
            if isinstance(state, (UrlFocus, ValuesFocus)) and state.editing:
                return self._handle_editing(state, event)
            if event.command in TAB_COMMANDS:
                return self._handle_tabs(event.command)
            return self._handle_navigation(event)
        except ValidationError as exc:
            return str(exc)
        except StateInvariantViolation as exc:
            logger.debug("Ignoring command %s: %s", event.command.name, exc)
            self.reset()
            return None

    def describe(self) -> str:
        state = self.state
        match state:
            case HelpFocus():
                return "Help"
            case MethodDropdownFocus():
                return "Select Method"
            case UrlFocus(editing=True):
                return "Editing URL"
            case UrlFocus():
                return "URL Input"
            case ValuesFocus(view=view, editing=True):
                return f"Editing {view.value}"
            case ValuesFocus(view=view):
                return f"Values - {view.value}"
            case ResponseFocus(view=view):
                return f"Response - {view.value}"
        return ""

    # -- overlays -------------------------------------------------------

    def _toggle_help(self) -> None:
        if isinstance(self.state, HelpFocus):
            self.state = self.state.previous
        else:
            self.state = HelpFocus(previous=self.state)
        return None

    def _handle_help(self, state: HelpFocus, event: InputEvent) -> None:
        if event.command is Command.EXIT_EDIT:
            self.state = state.previous
        elif event.command is Command.SCROLL_DOWN:
            last = max(len(HELP_ENTRIES) - 1, 0)
            self.state = HelpFocus(previous=state.previous, scroll=min(state.scroll + 1, last))
        elif event.command is Command.SCROLL_UP:
            self.state = HelpFocus(previous=state.previous, scroll=max(state.scroll - 1, 0))
        return None

    def _handle_dropdown(self, state: MethodDropdownFocus, event: InputEvent) -> None:
        if event.command is Command.DROPDOWN_NEXT:
            self.state = MethodDropdownFocus((state.highlighted + 1) % len(METHODS))
        elif event.command is Command.DROPDOWN_PREV:
            self.state = MethodDropdownFocus((state.highlighted - 1) % len(METHODS))
        elif event.command is Command.DROPDOWN_CONFIRM:
            self.registry.active_tab().request.method = METHODS[state.highlighted]
            self.state = UrlFocus()
        elif event.command is Command.DROPDOWN_CANCEL:
            self.state = UrlFocus()
        return None

    # -- navigation -----------------------------------------------------

    def _handle_navigation(self, event: InputEvent) -> str | None:
        tab = self.registry.active_tab()
        command = event.command
        if command is Command.SEND:
            self.coordinator.send(tab)
            return f"Sent {describe_request(tab.request)}"
        if command in (Command.FOCUS_NEXT, Command.FOCUS_PREV):
            self.state = self._cross_section(tab, 1 if command is Command.FOCUS_NEXT else -1)
            return None

        state = self.state
        match state:
            case UrlFocus():
                if command is Command.ENTER_EDIT:
                    tab.edit.url_draft = tab.request.url
                    self.state = UrlFocus(editing=True)
                elif command is Command.DROPDOWN_OPEN:
                    self.state = MethodDropdownFocus(METHODS.index(tab.request.method))
            case ValuesFocus():
                if command in (Command.SUB_VIEW_NEXT, Command.SUB_VIEW_PREV):
                    step = 1 if command is Command.SUB_VIEW_NEXT else -1
                    tab.values_view = _rotate(list(ValuesView), state.view, step)
                    self.state = ValuesFocus(view=tab.values_view)
                elif command is Command.ENTER_EDIT:
                    self._begin_values_edit(tab, state.view)
            case ResponseFocus():
                if command in (Command.SUB_VIEW_NEXT, Command.SUB_VIEW_PREV):
                    step = 1 if command is Command.SUB_VIEW_NEXT else -1
                    tab.response_view = _rotate(list(ResponseView), state.view, step)
                    self.state = ResponseFocus(view=tab.response_view)
                elif command is Command.SCROLL_DOWN:
                    tab.response_scroll = min(tab.response_scroll + 1, _max_scroll(tab))
                elif command is Command.SCROLL_UP:
                    tab.response_scroll = max(tab.response_scroll - 1, 0)
                elif command is Command.ENTER_EDIT:
                    return "Response section is read-only."
        return None

    def _cross_section(self, tab: Tab, step: int) -> FocusState:
        sections: list[FocusState] = [
            UrlFocus(),
            ValuesFocus(view=tab.values_view),
            ResponseFocus(view=tab.response_view),
        ]
        current = next(i for i, s in enumerate(sections) if type(s) is type(self.state))
        return sections[(current + step) % len(sections)]

    def _begin_values_edit(self, tab: Tab, view: ValuesView) -> None:
        if view is ValuesView.BODY:
            tab.edit.body_draft = tab.request.body or ""
        else:
            tab.edit.clear_form()
        self.state = ValuesFocus(view=view, editing=True, field=FormField.KEY)

    # -- tabs -----------------------------------------------------------

    def _handle_tabs(self, command: Command) -> str | None:
        previous_id = self.registry.active_tab().id
        try:
            if command is Command.NEW_TAB:
                self.registry.create_tab()
            elif command is Command.CLOSE_TAB:
                closed = self.registry.close_tab(self.registry.active_index)
                self.coordinator.abandon(closed.id)
            elif command is Command.NEXT_TAB:
                self.registry.next_tab()
            elif command is Command.PREV_TAB:
                self.registry.prev_tab()
        except StateInvariantViolation:
            raise
        except CourierError as exc:
            return str(exc)
        if self.registry.active_tab().id != previous_id:
            self.reset()
        return None

    # -- editing --------------------------------------------------------

    def _handle_editing(self, state: UrlFocus | ValuesFocus, event: InputEvent) -> str | None:
        tab = self.registry.active_tab()
        if isinstance(state, UrlFocus):
            return self._edit_url(tab, event)
        if state.view is ValuesView.BODY:
            return self._edit_body(tab, event)
        return self._edit_form(tab, state, event)

    def _edit_url(self, tab: Tab, event: InputEvent) -> None:
        edit = tab.edit
        if event.command is Command.INSERT_TEXT:
            edit.url_draft += event.text
        elif event.command is Command.DELETE_BACK:
            edit.url_draft = edit.url_draft[:-1]
        elif event.command is Command.CONFIRM:
            tab.request.url = edit.url_draft.strip()
            edit.url_draft = ""
            self.state = UrlFocus()
        elif event.command is Command.EXIT_EDIT:
            edit.url_draft = ""
            self.state = UrlFocus()
        return None

    def _edit_body(self, tab: Tab, event: InputEvent) -> None:
        edit = tab.edit
        if event.command is Command.INSERT_TEXT:
            edit.body_draft += event.text
        elif event.command is Command.NEWLINE:
            edit.body_draft += "\n"
        elif event.command is Command.DELETE_BACK:
            edit.body_draft = edit.body_draft[:-1]
        elif event.command in (Command.EXIT_EDIT, Command.CONFIRM):
            tab.request.body = edit.body_draft or None
            if tab.request.body and tab.request.content_type() is None and looks_like_json(tab.request.body):
                tab.request.set_content_type("application/json")
            edit.body_draft = ""
            self.state = ValuesFocus(view=ValuesView.BODY)
        return None

    def _edit_form(self, tab: Tab, state: ValuesFocus, event: InputEvent) -> str | None:
        edit = tab.edit
        command = event.command
        if command is Command.INSERT_TEXT:
            separator = KEY_VALUE_SEPARATORS[state.view]
            if state.field is FormField.KEY and event.text == separator and edit.form_key.strip():
                self._set_field(tab, state, FormField.VALUE)
            elif state.field is FormField.KEY:
                edit.form_key += event.text
            else:
                edit.form_value += event.text
        elif command is Command.DELETE_BACK:
            if state.field is FormField.KEY:
                edit.form_key = edit.form_key[:-1]
            else:
                edit.form_value = edit.form_value[:-1]
        elif command is Command.SWITCH_FIELD:
            other = FormField.VALUE if state.field is FormField.KEY else FormField.KEY
            self._set_field(tab, state, other)
        elif command in (Command.ADD_ENTRY, Command.CONFIRM):
            pair = clean_pair(edit.form_key, edit.form_value)
            target = tab.request.headers if state.view is ValuesView.HEADERS else tab.request.params
            target.append(pair)
            edit.clear_form()
            self._set_field(tab, state, FormField.KEY)
            return f"Added {state.view.value.lower()[:-1]} {pair[0]}."
        elif command is Command.EXIT_EDIT:
            edit.clear_form()
            self.state = ValuesFocus(view=state.view)
        return None

    def _set_field(self, tab: Tab, state: ValuesFocus, field: FormField) -> None:
        tab.edit.form_field = field
        self.state = ValuesFocus(view=state.view, editing=True, field=field)
