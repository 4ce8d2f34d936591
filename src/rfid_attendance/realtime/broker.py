"""In-process publish/subscribe for dashboard observers.

Each subscriber owns a bounded queue. Publishing never blocks: when a
subscriber's queue is full the event is dropped for that subscriber only.
"""
from __future__ import annotations

import json
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def publish(self, topic: str, payload: dict) -> None:
        raise NotImplementedError


class NullNotifier:
    """Notifier that discards everything (tests, scripts)."""

    def publish(self, topic: str, payload: dict) -> None:
        return None


@dataclass(frozen=True)
class Message:
    topic: str
    payload: dict

    def to_sse(self) -> str:
        return f"event: {self.topic}\ndata: {json.dumps(self.payload)}\n\n"


class Subscription:
    def __init__(self, broker: "EventBroker", maxsize: int):
        self._broker = broker
        self._queue: "queue.Queue[Message]" = queue.Queue(maxsize=maxsize)
        self.dropped = 0

    def offer(self, message: Message) -> bool:
        try:
            self._queue.put_nowait(message)
            return True
        except queue.Full:
            self.dropped += 1
            return False

    def get(self, timeout: Optional[float] = None) -> Optional[Message]:
        """Next message, or None when ``timeout`` elapses first."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._broker.unsubscribe(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class EventBroker:
    def __init__(self, *, queue_size: int = 100):
        self._queue_size = int(queue_size)
        self._subs: set[Subscription] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subs)

    def subscribe(self) -> Subscription:
        sub = Subscription(self, self._queue_size)
        with self._lock:
            self._subs.add(sub)
        logger.info("Client connected (%d subscribers)", self.subscriber_count)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            self._subs.discard(sub)
        logger.info("Client disconnected (%d subscribers)", self.subscriber_count)

    def publish(self, topic: str, payload: dict) -> None:
        message = Message(topic=topic, payload=payload)
        with self._lock:
            subs = list(self._subs)
        for sub in subs:
            if not sub.offer(message):
                logger.warning("Subscriber queue full, dropped %s event", topic)


def stream_events(broker: EventBroker, *, keepalive_seconds: float) -> Iterator[str]:
    """Yield SSE frames until the client goes away.

    The subscription is opened on first iteration and closed when the
    generator is closed by the server.
    """
    with broker.subscribe() as sub:
        yield ": connected\n\n"
        while True:
            message = sub.get(timeout=keepalive_seconds)
            if message is None:
                yield ": keep-alive\n\n"
                continue
            yield message.to_sse()
