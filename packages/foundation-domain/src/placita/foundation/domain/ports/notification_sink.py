"""Port interface for change notification delivery.

The preference core only needs to announce that a change happened; how
subscribers are reached is up to the implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationSinkPort(Protocol):
    """Port for fire-and-forget notifications.

    Example:
        >>> class PrintSink:
        ...     def post(self, name: str, source: object) -> None:
        ...         print(name)
        >>> isinstance(PrintSink(), NotificationSinkPort)
        True
    """

    def post(self, name: str, source: object) -> None:
        """Announce an event.

        Args:
            name: Notification identifier.
            source: Object that triggered the notification.
        """
        ...
