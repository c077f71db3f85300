"""Best-effort "data changed" broadcast for live shift views."""
from typing import AsyncIterator, Awaitable, Callable, List, Optional
import asyncio
import logging

from app.config import settings


# Configure logging
logger = logging.getLogger(__name__)


class ChangeNotifier:
    """
    Fan-out of payload-less refresh signals to any number of subscribers.

    Each subscriber owns a bounded queue. When a queue is full the signal is
    dropped for that subscriber only; subscribers re-fetch data on refresh,
    so a missed signal is harmless.
    """

    def __init__(self, queue_size: Optional[int] = None):
        """
        Initialize notifier.

        Args:
            queue_size: Pending signals kept per subscriber
        """
        self.queue_size = queue_size or settings.notifier_queue_size
        self.subscribers: List[asyncio.Queue] = []

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self.subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        if queue in self.subscribers:
            self.subscribers.remove(queue)

    def notify(self) -> int:
        """
        Signal every subscriber that shift data changed.

        Returns:
            Number of subscribers the signal was delivered to
        """
        delivered = 0
        for queue in list(self.subscribers):
            try:
                queue.put_nowait(1)
                delivered += 1
            except asyncio.QueueFull:
                logger.debug("Subscriber lagging, refresh signal dropped")
        return delivered

    async def events(
        self,
        is_disconnected: Callable[[], Awaitable[bool]],
        keepalive: float = 15.0
    ) -> AsyncIterator[str]:
        """
        Server-sent events stream of refresh signals.

        Args:
            is_disconnected: Coroutine function telling whether the client left
            keepalive: Seconds between keep-alive comments

        Yields:
            SSE frames
        """
        queue = self.subscribe()
        try:
            while not await is_disconnected():
                try:
                    await asyncio.wait_for(queue.get(), timeout=keepalive)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield "data: \n\n"
        finally:
            self.unsubscribe(queue)


# Global notifier instance
notifier = ChangeNotifier()
