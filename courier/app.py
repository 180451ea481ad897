from collections.abc import Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Header, Static

from .config import REQUEST_TIMEOUT_SECONDS
from .dispatcher import AppSnapshot, Dispatcher
from .events import KeyPressed, Resized
from .models import HelpFocus, MethodDropdownFocus, RequestSpec, is_editing
from .render import (
    render_dropdown,
    render_help,
    render_response,
    render_status,
    render_tab_bar,
    render_url,
    render_values,
    section_of,
)

PANELS = (("url", "URL"), ("values", "Request"), ("response", "Response"))


class CourierApp(App[int]):
    """A tabbed, keyboard-driven HTTP client built with Textual."""

    TITLE = "Courier"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: #0b1221;
        layers: base overlay;
    }

    #app-header {
        background: #1f2f6b;
        color: white;
    }

    #main {
        height: 1fr;
        padding: 0 1;
    }

    #tab-bar {
        height: 1;
        color: #8fb2ff;
    }

    .panel {
        border: round #22345b;
        background: #0b1529;
        color: #e5edff;
        padding: 0 1;
    }

    .panel.-active {
        border: round #4f8dff;
    }

    .panel.-editing {
        border: round #e5c07b;
    }

    #url {
        height: 3;
    }

    #values {
        height: 2fr;
    }

    #response {
        height: 3fr;
        scrollbar-size-vertical: 1;
        scrollbar-color: #4f8dff;
        scrollbar-background: #0b1221;
    }

    #status {
        height: 1;
        color: #87d7ff;
        padding: 0 1;
    }

    #overlay {
        layer: overlay;
        display: none;
        width: 64;
        height: auto;
        max-height: 80%;
        offset: 8 4;
        border: round #e5c07b;
        background: #0f182b;
        padding: 0 1;
    }

    #overlay.-visible {
        display: block;
    }
    """

    BINDINGS = [
        Binding("tab", "forward_key('tab')", show=False, priority=True),
        Binding("shift+tab", "forward_key('shift+tab')", show=False, priority=True),
        Binding("ctrl+c", "forward_key('ctrl+c')", show=False, priority=True),
    ]

    def __init__(
        self,
        tab_specs: Sequence[RequestSpec] | RequestSpec | None = None,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        verify_tls: bool = True,
    ) -> None:
        super().__init__()
        self.dispatcher = Dispatcher(
            self._normalize_specs(tab_specs),
            timeout=timeout,
            verify_tls=verify_tls,
            redraw=self.refresh_view,
        )

    def compose(self) -> ComposeResult:
        yield Header(id="app-header", show_clock=True)
        with Container(id="main"):
            yield Static(id="tab-bar")
            for panel_id, title in PANELS:
                panel = Static(id=panel_id, classes="panel")
                panel.border_title = title
                yield panel
        yield Static(id="status")
        yield Static(id="overlay")

    def on_mount(self) -> None:
        self.run_worker(self._drive(), name="dispatcher", exclusive=True)

    def on_unmount(self) -> None:
        self.dispatcher.coordinator.shutdown()

    async def _drive(self) -> None:
        await self.dispatcher.run()
        self.exit(0)

    def on_key(self, event: events.Key) -> None:
        self._forward(event.key, event.character)
        event.stop()
        event.prevent_default()

    def on_resize(self, event: events.Resize) -> None:
        self.dispatcher.post(Resized(event.size.width, event.size.height))

    def action_forward_key(self, key: str) -> None:
        self._forward(key, None)

    def _forward(self, key: str, character: str | None) -> None:
        self.dispatcher.post(KeyPressed(key, character))

    def refresh_view(self, snapshot: AppSnapshot) -> None:
        tab = snapshot.active
        focus = snapshot.focus
        self.query_one("#tab-bar", Static).update(render_tab_bar(snapshot))

        contents = {
            "url": render_url(tab, focus),
            "values": render_values(tab, focus),
            "response": render_response(tab),
        }
        highlighted = section_of(focus)
        editing = is_editing(focus.previous if isinstance(focus, HelpFocus) else focus)
        for panel_id, content in contents.items():
            panel = self.query_one(f"#{panel_id}", Static)
            panel.update(content)
            panel.set_class(panel_id == highlighted and not editing, "-active")
            panel.set_class(panel_id == highlighted and editing, "-editing")

        overlay = self.query_one("#overlay", Static)
        if isinstance(focus, HelpFocus):
            overlay.border_title = "Courier - Key Bindings"
            overlay.update(render_help(focus))
        elif isinstance(focus, MethodDropdownFocus):
            overlay.border_title = "Method"
            overlay.update(render_dropdown(focus))
        overlay.set_class(isinstance(focus, (HelpFocus, MethodDropdownFocus)), "-visible")

        self.query_one("#status", Static).update(render_status(snapshot))

    @staticmethod
    def _normalize_specs(tab_specs: Sequence[RequestSpec] | RequestSpec | None) -> list[RequestSpec]:
        if tab_specs is None:
            return []
        if isinstance(tab_specs, RequestSpec):
            return [tab_specs]
        return list(tab_specs)
