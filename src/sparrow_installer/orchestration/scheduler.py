"""Single-threaded event loop iteration.

The terminal front-end calls iterate() every POLL_INTERVAL_SECONDS. Each
iteration renders, then dispatches at most one queued key event, then
advances timers. A dispatch that awaits a real command suspends the
whole iteration, so keys pressed meanwhile stay queued and animation
stops until the command returns.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from sparrow_installer.models.events import KeyEvent
from sparrow_installer.models.session import Session
from sparrow_installer.orchestration.state_machine import InstallerStateMachine

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.05


class Scheduler:
    """Feeds queued key events and clock ticks into the state machine."""

    def __init__(
        self,
        machine: InstallerStateMachine,
        render: Callable[[Session], None] | None = None,
    ) -> None:
        self.machine = machine
        self.render = render
        self._events: deque[KeyEvent] = deque()

    @property
    def session(self) -> Session:
        return self.machine.session

    @property
    def pending(self) -> int:
        """Number of key events waiting to be dispatched."""
        return len(self._events)

    def post(self, event: KeyEvent) -> None:
        """Queue a key event for a later iteration."""
        self._events.append(event)

    def poll(self) -> KeyEvent | None:
        """Take the oldest queued event, if any."""
        if not self._events:
            return None
        return self._events.popleft()

    async def iterate(self) -> bool:
        """Run one loop iteration; returns True once the loop should stop."""
        if self.session.should_quit:
            return True

        if self.render is not None:
            self.render(self.session)

        event = self.poll()
        if event is not None:
            await self.machine.dispatch(event)

        self.machine.advance()

        if self.session.should_quit:
            logger.info(
                "Loop finished (pending action: %s, %d unread keys)",
                self.session.pending_system_action,
                self.pending,
            )
        return self.session.should_quit
