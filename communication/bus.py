import asyncio
import time

from internal.logging import get_logger


class Subscriber:
    __slots__ = ("name", "queue", "created_at", "received", "dropped")

    def __init__(self, name, queue):
        self.name = name
        self.queue = queue
        self.created_at = time.time()
        self.received = 0
        self.dropped = 0


class EventBus:
    """Fan-out of generation snapshots to observers.

    Subscribers are kept in a copy-on-write list so publish never takes the
    lock. A full subscriber queue drops the new item instead of blocking.
    """

    def __init__(self, queue_size=50):
        self._lock = asyncio.Lock()
        self._subscribers = {}
        self._subscribers_snapshot = []
        self._queue_size = queue_size
        self._log = get_logger()
        self.total_published = 0
        self.total_delivered = 0
        self.total_dropped = 0

    async def subscribe(self, name, max_queue_size=None):
        async with self._lock:
            if name in self._subscribers:
                return self._subscribers[name]
            subscriber = Subscriber(name, asyncio.Queue(maxsize=max_queue_size or self._queue_size))
            self._subscribers[name] = subscriber
            self._subscribers_snapshot = list(self._subscribers.values())
            self._log.info("subscriber added", name=name)
            return subscriber

    async def unsubscribe(self, name):
        async with self._lock:
            if self._subscribers.pop(name, None) is None:
                return False
            self._subscribers_snapshot = list(self._subscribers.values())
            self._log.info("subscriber removed", name=name)
            return True

    async def publish(self, item):
        delivered = dropped = 0
        for subscriber in self._subscribers_snapshot:
            try:
                subscriber.queue.put_nowait(item)
            except asyncio.QueueFull:
                subscriber.dropped += 1
                dropped += 1
                continue
            subscriber.received += 1
            delivered += 1
        self.total_published += 1
        self.total_delivered += delivered
        self.total_dropped += dropped
        return delivered

    def get_stats(self):
        return {
            "subscriber_count": len(self._subscribers_snapshot),
            "total_published": self.total_published,
            "total_delivered": self.total_delivered,
            "total_dropped": self.total_dropped,
        }

    async def get_subscriber_info(self):
        return [
            {
                "name": subscriber.name,
                "queued": subscriber.queue.qsize(),
                "received": subscriber.received,
                "dropped": subscriber.dropped,
            } for subscriber in self._subscribers_snapshot
        ]
