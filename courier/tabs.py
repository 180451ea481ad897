from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import DEFAULT_REQUEST
from .errors import InvalidIndex, LastTabError
from .models import (
    Empty,
    FormField,
    HttpMethod,
    Pending,
    RequestSpec,
    ResponseState,
    ResponseView,
    ValuesView,
)

logger = logging.getLogger(__name__)


@dataclass
class TabEditState:
    """Uncommitted edit buffers. Only meaningful while the tab is active."""

    url_draft: str = ""
    body_draft: str = ""
    form_key: str = ""
    form_value: str = ""
    form_field: FormField = FormField.KEY

    def clear_form(self) -> None:
        self.form_key = ""
        self.form_value = ""
        self.form_field = FormField.KEY


@dataclass
class Tab:
    id: int
    title: str
    request: RequestSpec = field(default_factory=RequestSpec)
    response: ResponseState = field(default_factory=Empty)
    generation: int = 0
    values_view: ValuesView = ValuesView.BODY
    response_view: ResponseView = ResponseView.BODY
    response_scroll: int = 0
    edit: TabEditState = field(default_factory=TabEditState)

    def begin_request(self) -> int:
        """Start a new send generation and mark the response as pending."""
        self.generation += 1
        self.response = Pending()
        self.response_scroll = 0
        return self.generation

    def reset_edit_state(self) -> None:
        self.edit = TabEditState()

    def snapshot(self) -> TabSnapshot:
        return TabSnapshot(
            id=self.id,
            title=self.title,
            method=self.request.method,
            url=self.request.url,
            headers=tuple(self.request.headers),
            params=tuple(self.request.params),
            body=self.request.body,
            response=self.response,
            generation=self.generation,
            values_view=self.values_view,
            response_view=self.response_view,
            response_scroll=self.response_scroll,
            url_draft=self.edit.url_draft,
            body_draft=self.edit.body_draft,
            form_key=self.edit.form_key,
            form_value=self.edit.form_value,
            form_field=self.edit.form_field,
        )


@dataclass(frozen=True)
class TabSnapshot:
    id: int
    title: str
    method: HttpMethod
    url: str
    headers: tuple[tuple[str, str], ...]
    params: tuple[tuple[str, str], ...]
    body: str | None
    response: ResponseState
    generation: int
    values_view: ValuesView
    response_view: ResponseView
    response_scroll: int
    url_draft: str
    body_draft: str
    form_key: str
    form_value: str
    form_field: FormField


class TabRegistry:
    """Ordered tabs plus the index of the active one."""

    def __init__(self, specs: Iterable[RequestSpec] | None = None) -> None:
        self._ids = itertools.count(1)
        self.tabs: list[Tab] = []
        self.active_index = 0
        for spec in list(specs or []) or [DEFAULT_REQUEST]:
            self.create_tab(spec)
        self.active_index = 0

    def __len__(self) -> int:
        return len(self.tabs)

    def create_tab(self, spec: RequestSpec | None = None) -> Tab:
        tab_id = next(self._ids)
        request = spec.copy() if spec is not None else DEFAULT_REQUEST.copy()
        tab = Tab(id=tab_id, title=f"Tab {tab_id}", request=request)
        self._leave_active()
        self.tabs.append(tab)
        self.active_index = len(self.tabs) - 1
        logger.debug("Created %s", tab.title)
        return tab

    def close_tab(self, index: int) -> Tab:
        self._check_index(index)
        if len(self.tabs) == 1:
            raise LastTabError()
        tab = self.tabs.pop(index)
        if index < self.active_index or self.active_index >= len(self.tabs):
            self.active_index -= 1
        logger.debug("Closed %s (id=%s)", tab.title, tab.id)
        return tab

    def activate(self, index: int) -> Tab:
        self._check_index(index)
        if index != self.active_index:
            self._leave_active()
            self.active_index = index
        return self.tabs[index]

    def next_tab(self) -> Tab:
        return self.activate((self.active_index + 1) % len(self.tabs))

    def prev_tab(self) -> Tab:
        return self.activate((self.active_index - 1) % len(self.tabs))

    def active_tab(self) -> Tab:
        self._check_index(self.active_index)
        return self.tabs[self.active_index]

    def find(self, tab_id: int) -> Tab | None:
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    def snapshot(self) -> tuple[TabSnapshot, ...]:
        return tuple(tab.snapshot() for tab in self.tabs)

    def _leave_active(self) -> None:
        if 0 <= self.active_index < len(self.tabs):
            self.tabs[self.active_index].reset_edit_state()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tabs):
            raise InvalidIndex(index, len(self.tabs))
