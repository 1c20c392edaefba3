"""In-process notification center.

A minimal implementation of :class:`NotificationSinkPort` that delivers
posted notifications synchronously to subscribers registered by name.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    NotificationCallback = Callable[[str, object], None]

logger = logging.getLogger(__name__)


class NotificationCenter:
    """Synchronous publish/subscribe hub keyed by notification name.

    Delivery is fire-and-forget: a failing subscriber is logged and does
    not prevent delivery to the remaining subscribers.

    Example:
        >>> center = NotificationCenter()
        >>> seen = []
        >>> unsubscribe = center.subscribe("changed", lambda n, s: seen.append(n))
        >>> center.post("changed", object())
        >>> seen
        ['changed']
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[NotificationCallback]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, name: str, callback: NotificationCallback) -> Callable[[], None]:
        """Register ``callback`` for notifications named ``name``.

        Args:
            name: Notification identifier.
            callback: Called with ``(name, source)`` on every post.

        Returns:
            A callable that removes the subscription.
        """
        with self._lock:
            self._subscribers[name].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(name, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def post(self, name: str, source: object) -> None:
        """Deliver a notification to every current subscriber.

        Args:
            name: Notification identifier.
            source: Object that triggered the notification.
        """
        with self._lock:
            callbacks = list(self._subscribers.get(name, []))
        for callback in callbacks:
            try:
                callback(name, source)
            except Exception:
                logger.exception("notification_subscriber_failed", extra={"notification": name})


@lru_cache(maxsize=1)
def get_notification_center() -> NotificationCenter:
    """Get the process-wide notification center singleton.

    Returns:
        Singleton NotificationCenter instance.
    """
    return NotificationCenter()
