# pubstock/events.py
import logging
from typing import Callable, List, Literal, NamedTuple

logger = logging.getLogger(__name__)

Level = Literal["success", "error", "info"]


class Notification(NamedTuple):
    level: Level
    message: str


Subscriber = Callable[[Notification], None]


class NotificationBus:
    """Fan-out channel for user-facing messages.

    Publishing never blocks on the user; every subscriber is called in
    registration order and decides for itself how to show the message.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, level: Level, message: str) -> Notification:
        note = Notification(level, message)
        logger.debug("notify %s: %s", level, message)
        for callback in list(self._subscribers):
            try:
                callback(note)
            except Exception:
                logger.exception("notification subscriber %r failed", callback)
        return note

    def success(self, message: str) -> Notification:
        return self.publish("success", message)

    def error(self, message: str) -> Notification:
        return self.publish("error", message)

    def info(self, message: str) -> Notification:
        return self.publish("info", message)
