"""Background streaming of stack events"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from ..constants import POLL_INTERVAL
from ..models import StackEvent
from ..orchestration import StackOrchestrator

logger = logging.getLogger(__name__)

EventCallback = Callable[[Optional[StackEvent], Optional[Exception]], None]


class EventTailer:
    """Polls a stack's event history and reports each new event once

    The first poll reports only the newest event. Later polls report every
    event newer than the last one reported, oldest first. Errors while
    polling are passed to the callback and the loop keeps going; errors
    raised by the callback itself are logged.
    """

    def __init__(self,
                 orchestrator: StackOrchestrator,
                 stack_id: str,
                 on_event: EventCallback,
                 poll_interval: float = POLL_INTERVAL):
        self.orchestrator = orchestrator
        self.stack_id = stack_id
        self.on_event = on_event
        self.poll_interval = poll_interval
        self.last_event_id: Optional[str] = None
        self._seen: Set[str] = set()
        self._stop = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the polling loop as a background task"""
        if self._task is None:
            self._task = asyncio.ensure_future(self._run())

    def cancel(self) -> None:
        """Ask the loop to exit at the next tick boundary"""
        self._stop.set()

    async def stop(self) -> None:
        """Cancel the loop and wait for the in-flight tick to finish"""
        self.cancel()
        if self._task is not None:
            await self._task

    async def _run(self) -> None:
        while not self._stop.is_set():
            await self.poll_once()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass

    def _new_events(self, page: List[StackEvent]) -> List[StackEvent]:
        """Events in a newest-first page that come after the last reported one"""
        if self.last_event_id is None:
            return page[:1]

        for i, event in enumerate(page):
            if event.event_id == self.last_event_id:
                return page[:i]

        # Last reported event rotated out of the page
        return page

    def _notify(self, event: Optional[StackEvent], error: Optional[Exception]) -> None:
        """Invoke the callback; its failures are logged and never end the tail"""
        try:
            self.on_event(event, error)
        except Exception as e:
            logger.warning(f"Stack event callback failed: {e}")

    async def poll_once(self) -> List[StackEvent]:
        """
        Fetch the latest events and report the new ones

        Returns:
            Events reported during this poll, oldest first
        """
        try:
            page = await self.orchestrator.describe_stack_events(self.stack_id)
        except Exception as e:
            logger.debug(f"Polling events for {self.stack_id} failed: {e}")
            self._notify(None, e)
            return []

        emitted = []
        for event in reversed(self._new_events(page)):
            if event.event_id in self._seen:
                continue
            self._seen.add(event.event_id)
            self.last_event_id = event.event_id
            self._notify(event, None)
            emitted.append(event)

        return emitted
