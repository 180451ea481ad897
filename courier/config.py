from .models import HttpMethod, RequestSpec

DEFAULT_URL = "https://jsonplaceholder.typicode.com/posts/1"
DEFAULT_METHOD = HttpMethod.GET
REQUEST_TIMEOUT_SECONDS = 30.0

MIN_TERMINAL_WIDTH = 80
MIN_TERMINAL_HEIGHT = 24

DEFAULT_REQUEST = RequestSpec(url=DEFAULT_URL, method=DEFAULT_METHOD)

# (keys, description); a row with an empty description is a section header.
HELP_ENTRIES: list[tuple[str, str]] = [
    ("Global", ""),
    ("q / Ctrl+C", "Quit"),
    ("? / F1", "Toggle this help"),
    ("", ""),
    ("Navigation", ""),
    ("Ctrl+J / Ctrl+Down", "Next section"),
    ("Ctrl+K / Ctrl+Up", "Previous section"),
    ("h / l", "Previous / next sub-view"),
    ("j / k", "Scroll response body"),
    ("", ""),
    ("Request", ""),
    ("u / i / e", "Edit the focused field"),
    ("m", "Choose HTTP method (URL section)"),
    ("Enter / Ctrl+S / F5", "Send request"),
    ("", ""),
    ("Editing", ""),
    ("Esc", "Leave edit mode"),
    ("Enter", "Commit URL / add header or param"),
    ("Tab", "Switch between key and value"),
    (": or =", "Jump to the value field"),
    ("", ""),
    ("Tabs", ""),
    ("t", "New tab"),
    ("x", "Close tab"),
    ("Tab / Shift+Tab", "Next / previous tab"),
]
