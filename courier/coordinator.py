"""Runs HTTP calls off the event loop's critical path and routes results back by tab id."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .config import REQUEST_TIMEOUT_SECONDS
from .errors import RequestTimeout, TransportError
from .events import RequestCompleted
from .http_client import perform_http_request
from .models import Failed, HttpResponse, Pending, RequestSpec, Succeeded
from .parsing import validate_url
from .tabs import Tab, TabRegistry

logger = logging.getLogger(__name__)

Executor = Callable[..., Awaitable[HttpResponse]]


@dataclass
class InFlightRequest:
    tab_id: int
    generation: int
    task: asyncio.Task[None] | None = None
    abandoned: bool = False


class RequestCoordinator:
    def __init__(
        self,
        registry: TabRegistry,
        post: Callable[[RequestCompleted], None],
        execute: Executor = perform_http_request,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        verify_tls: bool = True,
    ) -> None:
        self.registry = registry
        self._post = post
        self._execute = execute
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._in_flight: dict[tuple[int, int], InFlightRequest] = {}

    @property
    def in_flight(self) -> tuple[InFlightRequest, ...]:
        return tuple(self._in_flight.values())

    def send(self, tab: Tab) -> InFlightRequest:
        """Validate and issue the tab's request. Raises ValidationError without touching the response."""
        url = validate_url(tab.request.url)
        spec = tab.request.copy()
        spec.url = url
        generation = tab.begin_request()
        entry = InFlightRequest(tab_id=tab.id, generation=generation)
        self._in_flight[(tab.id, generation)] = entry
        entry.task = asyncio.create_task(self._run(entry, spec))
        entry.task.add_done_callback(lambda _task: self._in_flight.pop((entry.tab_id, entry.generation), None))
        logger.debug("Sending %s %s for tab %s (generation %s)", spec.method.value, url, tab.id, generation)
        return entry

    def apply(self, completion: RequestCompleted) -> bool:
        """Apply a finished call to its tab. Returns False when the result is discarded."""
        tab = self.registry.find(completion.tab_id)
        if tab is None:
            logger.debug("Discarding result for closed tab %s", completion.tab_id)
            return False
        if tab.generation != completion.generation:
            logger.debug(
                "Discarding stale result for tab %s (generation %s, current %s)",
                tab.id,
                completion.generation,
                tab.generation,
            )
            return False
        if not isinstance(tab.response, Pending):
            logger.debug("Tab %s is not pending; ignoring completion", tab.id)
            return False
        tab.response = completion.outcome
        return True

    def abandon(self, tab_id: int) -> None:
        for entry in self._in_flight.values():
            if entry.tab_id == tab_id:
                entry.abandoned = True
                logger.debug("Abandoned in-flight request for tab %s (generation %s)", tab_id, entry.generation)

    def shutdown(self) -> None:
        for entry in list(self._in_flight.values()):
            if entry.task is not None and not entry.task.done():
                entry.task.cancel()
        self._in_flight.clear()

    async def _run(self, entry: InFlightRequest, spec: RequestSpec) -> None:
        outcome = await self._perform(spec)
        if entry.abandoned:
            logger.debug("Dropping result for abandoned tab %s (generation %s)", entry.tab_id, entry.generation)
            return
        self._post(RequestCompleted(tab_id=entry.tab_id, generation=entry.generation, outcome=outcome))

    async def _perform(self, spec: RequestSpec) -> Succeeded | Failed:
        try:
            async with asyncio.timeout(self.timeout):
                response = await self._execute(spec, timeout=self.timeout, verify_tls=self.verify_tls)
        except (TimeoutError, RequestTimeout):
            return Failed(error=str(RequestTimeout(self.timeout)), timed_out=True)
        except TransportError as exc:
            return Failed(error=str(exc))
        except Exception as exc:  # pragma: no cover - unexpected transport failures are runtime-only
            logger.exception("Unexpected failure while sending request")
            return Failed(error=f"Request failed: {exc!r}")
        return Succeeded.from_response(response)
