from dataclasses import dataclass
from enum import Enum, auto

from .models import Failed, Succeeded


class Command(Enum):
    """Discrete commands produced by the key decoder."""

    FOCUS_NEXT = auto()
    FOCUS_PREV = auto()
    ENTER_EDIT = auto()
    EXIT_EDIT = auto()
    CONFIRM = auto()
    SUB_VIEW_NEXT = auto()
    SUB_VIEW_PREV = auto()
    DROPDOWN_OPEN = auto()
    DROPDOWN_PREV = auto()
    DROPDOWN_NEXT = auto()
    DROPDOWN_CONFIRM = auto()
    DROPDOWN_CANCEL = auto()
    ADD_ENTRY = auto()
    SWITCH_FIELD = auto()
    INSERT_TEXT = auto()
    DELETE_BACK = auto()
    NEWLINE = auto()
    SEND = auto()
    NEW_TAB = auto()
    CLOSE_TAB = auto()
    NEXT_TAB = auto()
    PREV_TAB = auto()
    HELP_TOGGLE = auto()
    SCROLL_UP = auto()
    SCROLL_DOWN = auto()
    QUIT = auto()


@dataclass(frozen=True)
class InputEvent:
    command: Command
    text: str = ""


@dataclass(frozen=True)
class KeyPressed:
    """A raw key from the terminal host, decoded against the focus current at dispatch time."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class RequestCompleted:
    tab_id: int
    generation: int
    outcome: Succeeded | Failed


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


Event = KeyPressed | InputEvent | RequestCompleted | Resized
