class CourierError(Exception):
    """Base class for errors raised by Courier."""


class ValidationError(CourierError, ValueError):
    """User input that cannot be accepted (bad URL, empty form field)."""


class TransportError(CourierError):
    """The HTTP call failed before a response was received."""


class RequestTimeout(TransportError):
    def __init__(self, seconds: float) -> None:
        super().__init__(f"Request timed out after {seconds:g} seconds")
        self.seconds = seconds


class TerminalEnvironmentError(CourierError):
    """The terminal cannot host the application (fatal at startup)."""


class StateInvariantViolation(CourierError):
    """An operation referred to state that no longer exists."""


class InvalidIndex(StateInvariantViolation, IndexError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Invalid tab index: {index} (tabs: {length})")
        self.index = index
        self.length = length


class LastTabError(CourierError):
    def __init__(self) -> None:
        super().__init__("Cannot close the last tab.")
