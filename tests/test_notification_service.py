"""Tests for the shift change notifier."""
import asyncio

from app.services.notification_service import ChangeNotifier


class TestChangeNotifier:
    """Test cases for ChangeNotifier."""

    def test_notify_without_subscribers(self):
        assert ChangeNotifier(queue_size=2).notify() == 0

    def test_every_subscriber_is_signalled(self):
        async def run():
            notifier = ChangeNotifier(queue_size=2)
            first = notifier.subscribe()
            second = notifier.subscribe()

            assert notifier.notify() == 2
            assert first.qsize() == 1
            assert second.qsize() == 1

        asyncio.run(run())

    def test_full_queue_drops_signal(self):
        async def run():
            notifier = ChangeNotifier(queue_size=1)
            slow = notifier.subscribe()
            fast = notifier.subscribe()

            notifier.notify()
            await fast.get()

            # The lagging subscriber misses the second signal only
            assert notifier.notify() == 1
            assert slow.qsize() == 1
            assert fast.qsize() == 1

        asyncio.run(run())

    def test_unsubscribe(self):
        async def run():
            notifier = ChangeNotifier(queue_size=1)
            queue = notifier.subscribe()
            notifier.unsubscribe(queue)
            notifier.unsubscribe(queue)

            assert notifier.notify() == 0

        asyncio.run(run())

    def test_events_stream(self):
        async def run():
            notifier = ChangeNotifier(queue_size=4)
            checks = {"count": 0}

            async def is_disconnected():
                checks["count"] += 1
                return checks["count"] > 2

            stream = notifier.events(is_disconnected, keepalive=0.01)
            frames = [await stream.__anext__()]
            notifier.notify()
            frames.append(await stream.__anext__())
            remaining = [frame async for frame in stream]

            assert frames[0] == ": keep-alive\n\n"
            assert frames[1] == "data: \n\n"
            assert remaining == []
            assert notifier.subscribers == []

        asyncio.run(run())
