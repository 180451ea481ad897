"""Single cooperative loop that owns all tab and focus state."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .config import MIN_TERMINAL_HEIGHT, MIN_TERMINAL_WIDTH, REQUEST_TIMEOUT_SECONDS
from .coordinator import Executor, RequestCoordinator
from .events import Command, Event, InputEvent, KeyPressed, RequestCompleted, Resized
from .focus import FocusMachine
from .http_client import perform_http_request
from .keymap import decode_key
from .models import FocusState, RequestSpec
from .tabs import TabRegistry, TabSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSnapshot:
    tabs: tuple[TabSnapshot, ...]
    active_index: int
    focus: FocusState
    context: str
    message: str
    in_flight: int
    size: tuple[int, int] | None

    @property
    def active(self) -> TabSnapshot:
        return self.tabs[self.active_index]


class Dispatcher:
    def __init__(
        self,
        specs: Iterable[RequestSpec] | None = None,
        *,
        execute: Executor = perform_http_request,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        verify_tls: bool = True,
        redraw: Callable[[AppSnapshot], None] | None = None,
    ) -> None:
        self._events: asyncio.Queue[Event] = asyncio.Queue()
        self.registry = TabRegistry(specs)
        self.coordinator = RequestCoordinator(
            self.registry,
            self.post,
            execute=execute,
            timeout=timeout,
            verify_tls=verify_tls,
        )
        self.focus = FocusMachine(self.registry, self.coordinator)
        self.redraw = redraw
        self.message = ""
        self.size: tuple[int, int] | None = None
        self.quitting = False

    def post(self, event: Event) -> None:
        self._events.put_nowait(event)

    async def run(self) -> None:
        self._redraw()
        try:
            while await self.step():
                pass
        finally:
            self.coordinator.shutdown()

    async def step(self) -> bool:
        """Process the next event and redraw once. Returns False after quit."""
        event = await self._events.get()
        self.dispatch(event)
        self._redraw()
        return not self.quitting

    def dispatch(self, event: Event) -> None:
        if isinstance(event, KeyPressed):
            decoded = decode_key(event.key, event.character, self.focus.state)
            if decoded is not None:
                self._handle_input(decoded)
        elif isinstance(event, InputEvent):
            self._handle_input(event)
        elif isinstance(event, RequestCompleted):
            self.coordinator.apply(event)
        elif isinstance(event, Resized):
            self._handle_resize(event)

    def snapshot(self) -> AppSnapshot:
        return AppSnapshot(
            tabs=self.registry.snapshot(),
            active_index=self.registry.active_index,
            focus=self.focus.state,
            context=self.focus.describe(),
            message=self.message,
            in_flight=len(self.coordinator.in_flight),
            size=self.size,
        )

    def _handle_input(self, event: InputEvent) -> None:
        if event.command is Command.QUIT:
            logger.debug("Quit requested")
            self.quitting = True
            return
        self.message = self.focus.handle(event) or ""

    def _handle_resize(self, event: Resized) -> None:
        self.size = (event.width, event.height)
        if event.width < MIN_TERMINAL_WIDTH:
            self.message = f"Terminal width too small: {event.width} (minimum: {MIN_TERMINAL_WIDTH})"
        elif event.height < MIN_TERMINAL_HEIGHT:
            self.message = f"Terminal height too small: {event.height} (minimum: {MIN_TERMINAL_HEIGHT})"

    def _redraw(self) -> None:
        if self.redraw is None:
            return
        try:
            self.redraw(self.snapshot())
        except Exception:
            logger.exception("Redraw failed; continuing")
