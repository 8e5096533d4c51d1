import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, Optional
from uuid import uuid4

from ..models.schemas import Event
from .broadcast import BroadcastTopic, Subscription, SubscriptionLagged, TopicClosed

logger = logging.getLogger(__name__)


class EventRelay:
    """
    Owns the broadcast topic and the registry of open SSE connections.

    One instance is created per application (see ``event_relay.main``) and
    handed to request handlers through a dependency.
    """

    def __init__(self, capacity: int, heartbeat_interval: float):
        self.topic: BroadcastTopic[Event] = BroadcastTopic(capacity)
        self.heartbeat_interval = heartbeat_interval
        # Active SSE connections: connection_id -> connection_data
        self.active_connections: Dict[str, Dict[str, Any]] = {}

    @property
    def receiver_count(self) -> int:
        return self.topic.receiver_count

    @property
    def published_count(self) -> int:
        return self.topic.published_count

    @property
    def capacity(self) -> int:
        return self.topic.capacity

    def publish(self, event: Event) -> int:
        """
        Fan an event out to all current subscribers.

        Returns the number of subscribers at publish time; zero is not an error.
        """
        delivered_to = self.topic.publish(event)
        logger.debug(f"Published {event!r} to {delivered_to} listeners")
        return delivered_to

    def subscribe(self) -> Subscription[Event]:
        """Open a raw subscription on the topic."""
        return self.topic.subscribe()

    def shutdown(self) -> None:
        """Close the topic; open streams end on their next read."""
        logger.info(f"Closing topic with {len(self.active_connections)} active streams")
        self.topic.close()

    async def create_stream(
        self,
        user_agent: Optional[str] = None,
        check_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> AsyncGenerator[Dict[str, str], None]:
        """
        Create an SSE stream generator for one client connection.

        Yields a ``connected`` frame once the subscription is live, then one
        ``message`` frame per published event, and a ``heartbeat`` frame after
        every idle ``heartbeat_interval`` seconds.
        """
        connection_id = str(uuid4())
        subscription = self.topic.subscribe()

        self.active_connections[connection_id] = {
            "user_agent": user_agent,
            "connected_at": datetime.now(timezone.utc),
        }
        logger.info(f"{user_agent or 'unknown client'} connected ({connection_id})")

        try:
            yield {
                "event": "connected",
                "data": json.dumps({"connection_id": connection_id}),
            }

            while True:
                if check_disconnected and await check_disconnected():
                    logger.info(f"Client {connection_id} disconnected")
                    break

                try:
                    event = await asyncio.wait_for(
                        subscription.recv(),
                        timeout=self.heartbeat_interval,
                    )
                except asyncio.TimeoutError:
                    yield {
                        "event": "heartbeat",
                        "data": json.dumps({"connection_id": connection_id}),
                    }
                    continue
                except SubscriptionLagged as e:
                    logger.error(f"Error: stream {connection_id} closed, {e}")
                    break
                except TopicClosed:
                    logger.info(f"Topic closed, ending stream {connection_id}")
                    break

                yield {
                    "event": "message",
                    "data": event.to_frame_data(),
                }
        except asyncio.CancelledError:
            logger.info(f"Stream cancelled for connection {connection_id}")
            raise
        finally:
            logger.info(f"Cleaning up connection {connection_id}")
            subscription.close()
            self.active_connections.pop(connection_id, None)
