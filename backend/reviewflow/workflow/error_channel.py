"""
ErrorChannel: the last user-facing error message of one workflow instance.

The auto-clear timer lives on the running asyncio loop, so
``set_with_auto_clear`` must be called from inside a coroutine.
"""

from __future__ import annotations

import asyncio

from reviewflow.core.logging import get_logger

logger = get_logger(__name__)


class ErrorChannel:
    """Holds at most one message; optionally clears itself after a delay."""

    def __init__(self) -> None:
        self._message: str | None = None
        self._timer: asyncio.TimerHandle | None = None

    def current(self) -> str | None:
        return self._message

    @property
    def auto_clear_pending(self) -> bool:
        return self._timer is not None

    def set(self, message: str) -> None:
        """Replace the message.  A pending auto-clear is dropped."""
        self.cancel_auto_clear()
        self._message = message

    def set_with_auto_clear(self, message: str, delay_seconds: float) -> asyncio.TimerHandle:
        self.set(message)
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay_seconds, self._auto_clear)
        return self._timer

    def clear(self) -> None:
        self.cancel_auto_clear()
        self._message = None

    def cancel_auto_clear(self) -> bool:
        """Cancel the pending timer.  Returns True if one was pending."""
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    def close(self) -> None:
        """Teardown: never let a timer fire against a discarded owner."""
        self.cancel_auto_clear()

    def _auto_clear(self) -> None:
        self._timer = None
        logger.debug("Error message auto-cleared", message=self._message)
        self._message = None
