import asyncio
import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from research_navigator.core.session import SessionContext
from research_navigator.views.notifications import Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


def serialized(method):
    """Drop calls made while the view is busy, like a disabled button."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        if self.busy:
            logger.debug(f"{type(self).__name__}.{method.__name__} ignored while busy")
            return None
        self.busy = True
        try:
            return await method(self, *args, **kwargs)
        finally:
            self.busy = False

    return wrapper


class PageView:
    """Page-level controller: local UI state plus calls into the data-access layer.

    Local state changes only after a remote call succeeds; on failure an error
    notification is pushed and the state is left as it was.
    """

    def __init__(self, session: SessionContext, notifier: Optional[Notifier] = None):
        self.session = session
        self.notifier = notifier or Notifier()
        self.busy = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    def bind(self) -> None:
        """Refetch whenever the signed-in user changes."""
        if self._unsubscribe is None:
            self._unsubscribe = self.session.subscribe(self._on_user_changed)

    def unbind(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_user_changed(self, user) -> None:
        if user is None:
            self.clear()
        else:
            await self.load()

    async def load(self) -> None:
        pass

    def clear(self) -> None:
        pass

    @staticmethod
    async def _remote(fn: Callable[..., T], *args: Any) -> T:
        # the Supabase SDK is synchronous; keep the event loop free while it runs
        return await asyncio.to_thread(fn, *args)
