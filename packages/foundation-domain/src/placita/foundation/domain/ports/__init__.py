"""Domain port interfaces for hexagonal architecture.

Ports define abstract interfaces that the preference core uses to interact
with external collaborators. Implementations (adapters) live in infrastructure.
"""

from placita.foundation.domain.ports.notification_sink import NotificationSinkPort
from placita.foundation.domain.ports.storage_backend import PreferencesBackendPort

__all__ = ["NotificationSinkPort", "PreferencesBackendPort"]
