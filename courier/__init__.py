"""Courier: a tabbed, keyboard-driven HTTP client for the terminal."""

from .app import CourierApp
from .config import DEFAULT_METHOD, DEFAULT_REQUEST, DEFAULT_URL, REQUEST_TIMEOUT_SECONDS
from .coordinator import RequestCoordinator
from .dispatcher import AppSnapshot, Dispatcher
from .focus import FocusMachine
from .models import Empty, Failed, HttpMethod, HttpResponse, Pending, RequestSpec, Succeeded
from .tabs import Tab, TabRegistry

__all__ = [
    "CourierApp",
    "Dispatcher",
    "AppSnapshot",
    "FocusMachine",
    "RequestCoordinator",
    "Tab",
    "TabRegistry",
    "RequestSpec",
    "HttpMethod",
    "HttpResponse",
    "Empty",
    "Pending",
    "Succeeded",
    "Failed",
    "DEFAULT_URL",
    "DEFAULT_METHOD",
    "DEFAULT_REQUEST",
    "REQUEST_TIMEOUT_SECONDS",
]

__version__ = "0.1.0"
