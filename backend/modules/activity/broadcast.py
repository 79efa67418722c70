"""
In-process broadcast hub for the live activity feed.

Each subscriber gets a bounded asyncio.Queue. Publishing puts the record
on every queue without awaiting; a full queue drops the record for that
subscriber. Delivery is at-most-once and nothing is replayed to late
subscribers.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .exceptions import UnknownTopicError
from .models import Activity

logger = logging.getLogger(__name__)

ACTIVITY_FEED_TOPIC = "activity-feed"


class BroadcastHub:
    """Fan-out of activity records to subscribers of named topics."""

    def __init__(
        self,
        topics: tuple[str, ...] = (ACTIVITY_FEED_TOPIC,),
        queue_size: int = 100,
    ):
        self._queue_size = queue_size
        self._subscribers: dict[str, set[asyncio.Queue[Activity]]] = {
            topic: set() for topic in topics
        }

    def has_topic(self, topic: str) -> bool:
        return topic in self._subscribers

    def subscriber_count(self, topic: str = ACTIVITY_FEED_TOPIC) -> int:
        return len(self._subscribers.get(topic, ()))

    @asynccontextmanager
    async def subscribe(self, topic: str = ACTIVITY_FEED_TOPIC) -> AsyncIterator[asyncio.Queue[Activity]]:
        """
        Join a topic for the duration of the context.

        Raises:
            UnknownTopicError: If the hub does not serve the topic
        """
        if topic not in self._subscribers:
            raise UnknownTopicError(topic)

        queue: asyncio.Queue[Activity] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers[topic].add(queue)
        logger.info(f"Subscriber joined {topic} ({self.subscriber_count(topic)} connected)")
        try:
            yield queue
        finally:
            self._subscribers[topic].discard(queue)
            logger.info(f"Subscriber left {topic} ({self.subscriber_count(topic)} connected)")

    def publish(self, topic: str, activity: Activity) -> int:
        delivered = 0
        for queue in list(self._subscribers.get(topic, ())):
            try:
                queue.put_nowait(activity)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Dropped activity {activity.id} for a slow {topic} subscriber")
        logger.debug(
            f"Emitted activity: {activity.user_name} {activity.action.value} "
            f'"{activity.recipe_title}" to {delivered} subscriber(s)'
        )
        return delivered


class NullBroadcaster:
    """Broadcaster used when live push is disabled. Publishing is a no-op."""

    def publish(self, topic: str, activity: Activity) -> int:
        return 0
