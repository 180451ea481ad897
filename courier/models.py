from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


METHODS: tuple[HttpMethod, ...] = tuple(HttpMethod)


class ValuesView(str, Enum):
    BODY = "Body"
    HEADERS = "Headers"
    PARAMS = "Params"


class ResponseView(str, Enum):
    HEADERS = "Headers"
    BODY = "Body"


class FormField(str, Enum):
    KEY = "key"
    VALUE = "value"


def _last_header(pairs, key: str) -> str | None:
    wanted = key.lower()
    found = None
    for name, value in pairs:
        if name.lower() == wanted:
            found = value
    return found


@dataclass
class RequestSpec:
    """One editable HTTP request. Pairs keep insertion order; header lookups are last-write-wins."""

    url: str = ""
    method: HttpMethod = HttpMethod.GET
    headers: list[tuple[str, str]] = field(default_factory=list)
    params: list[tuple[str, str]] = field(default_factory=list)
    body: str | None = None

    def header(self, key: str) -> str | None:
        return _last_header(self.headers, key)

    def content_type(self) -> str | None:
        return self.header("Content-Type")

    def set_content_type(self, content_type: str) -> None:
        self.headers = [(k, v) for k, v in self.headers if k.lower() != "content-type"]
        self.headers.append(("Content-Type", content_type))

    def copy(self) -> RequestSpec:
        return RequestSpec(
            url=self.url,
            method=self.method,
            headers=list(self.headers),
            params=list(self.params),
            body=self.body,
        )


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: tuple[tuple[str, str], ...]
    body: str
    elapsed_ms: float


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Succeeded:
    status: int
    headers: tuple[tuple[str, str], ...]
    body: str
    elapsed_ms: float

    @classmethod
    def from_response(cls, response: HttpResponse) -> Succeeded:
        return cls(
            status=response.status,
            headers=response.headers,
            body=response.body,
            elapsed_ms=response.elapsed_ms,
        )

    def header(self, key: str) -> str | None:
        return _last_header(self.headers, key)

    def content_type(self) -> str | None:
        return self.header("Content-Type")

    def content_length(self) -> int | None:
        raw = self.header("Content-Length")
        try:
            return int(raw) if raw is not None else None
        except ValueError:
            return None

    def is_json(self) -> bool:
        return "application/json" in (self.content_type() or "").lower()

    def is_xml(self) -> bool:
        content_type = (self.content_type() or "").lower()
        return "application/xml" in content_type or "text/xml" in content_type


@dataclass(frozen=True)
class Failed:
    error: str
    timed_out: bool = False


ResponseState = Empty | Pending | Succeeded | Failed


@dataclass(frozen=True)
class UrlFocus:
    editing: bool = False


@dataclass(frozen=True)
class ValuesFocus:
    view: ValuesView = ValuesView.BODY
    editing: bool = False
    field: FormField = FormField.KEY


@dataclass(frozen=True)
class ResponseFocus:
    view: ResponseView = ResponseView.BODY


@dataclass(frozen=True)
class MethodDropdownFocus:
    highlighted: int = 0


@dataclass(frozen=True)
class HelpFocus:
    previous: UrlFocus | ValuesFocus | ResponseFocus | MethodDropdownFocus
    scroll: int = 0


FocusState = UrlFocus | ValuesFocus | ResponseFocus | MethodDropdownFocus | HelpFocus

DEFAULT_FOCUS = UrlFocus()


def is_editing(state: FocusState) -> bool:
    return isinstance(state, (UrlFocus, ValuesFocus)) and state.editing
