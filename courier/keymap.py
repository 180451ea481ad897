"""Translate Textual key names into core commands, given the current focus."""

from .events import Command, InputEvent
from .models import FocusState, HelpFocus, MethodDropdownFocus, UrlFocus, ValuesFocus, ValuesView, is_editing

ALWAYS = {
    "ctrl+c": Command.QUIT,
    "f1": Command.HELP_TOGGLE,
}

HELP_KEYS = {
    "escape": Command.HELP_TOGGLE,
    "question_mark": Command.HELP_TOGGLE,
    "j": Command.SCROLL_DOWN,
    "down": Command.SCROLL_DOWN,
    "k": Command.SCROLL_UP,
    "up": Command.SCROLL_UP,
}

DROPDOWN_KEYS = {
    "up": Command.DROPDOWN_PREV,
    "k": Command.DROPDOWN_PREV,
    "down": Command.DROPDOWN_NEXT,
    "j": Command.DROPDOWN_NEXT,
    "enter": Command.DROPDOWN_CONFIRM,
    "escape": Command.DROPDOWN_CANCEL,
}

EDIT_KEYS = {
    "escape": Command.EXIT_EDIT,
    "backspace": Command.DELETE_BACK,
}

NAVIGATION_KEYS = {
    "q": Command.QUIT,
    "question_mark": Command.HELP_TOGGLE,
    "ctrl+j": Command.FOCUS_NEXT,
    "ctrl+down": Command.FOCUS_NEXT,
    "ctrl+k": Command.FOCUS_PREV,
    "ctrl+up": Command.FOCUS_PREV,
    "u": Command.ENTER_EDIT,
    "i": Command.ENTER_EDIT,
    "e": Command.ENTER_EDIT,
    "m": Command.DROPDOWN_OPEN,
    "enter": Command.SEND,
    "ctrl+s": Command.SEND,
    "f5": Command.SEND,
    "l": Command.SUB_VIEW_NEXT,
    "right": Command.SUB_VIEW_NEXT,
    "h": Command.SUB_VIEW_PREV,
    "left": Command.SUB_VIEW_PREV,
    "j": Command.SCROLL_DOWN,
    "down": Command.SCROLL_DOWN,
    "k": Command.SCROLL_UP,
    "up": Command.SCROLL_UP,
    "t": Command.NEW_TAB,
    "x": Command.CLOSE_TAB,
    "tab": Command.NEXT_TAB,
    "shift+tab": Command.PREV_TAB,
}


def decode_key(key: str, character: str | None, focus: FocusState) -> InputEvent | None:
    if key in ALWAYS:
        return InputEvent(ALWAYS[key])
    if isinstance(focus, HelpFocus):
        return _lookup(HELP_KEYS, key)
    if isinstance(focus, MethodDropdownFocus):
        return _lookup(DROPDOWN_KEYS, key)
    if is_editing(focus):
        return _decode_editing(key, character, focus)
    return _lookup(NAVIGATION_KEYS, key)


def _decode_editing(key: str, character: str | None, focus: FocusState) -> InputEvent | None:
    if key in EDIT_KEYS:
        return InputEvent(EDIT_KEYS[key])
    body = isinstance(focus, ValuesFocus) and focus.view is ValuesView.BODY
    if key == "enter":
        if body:
            return InputEvent(Command.NEWLINE)
        return InputEvent(Command.CONFIRM if isinstance(focus, UrlFocus) else Command.ADD_ENTRY)
    if key == "ctrl+s" and body:
        return InputEvent(Command.CONFIRM)
    if key == "tab" and not body:
        return InputEvent(Command.SWITCH_FIELD)
    if key == "tab":
        return InputEvent(Command.INSERT_TEXT, "    ")
    if character and character.isprintable():
        return InputEvent(Command.INSERT_TEXT, character)
    return None


def _lookup(table: dict[str, Command], key: str) -> InputEvent | None:
    command = table.get(key)
    return InputEvent(command) if command is not None else None
