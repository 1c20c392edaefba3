"""Reserved domain names and the suite name value object.

Reserved names identify domains that every store knows about. They can
never be used as suite names.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from placita.foundation.domain.exceptions import InvalidSuiteNameError

ARGUMENT_DOMAIN: str = "placita.ArgumentDomain"
"""Volatile domain holding values parsed from process launch arguments."""

REGISTRATION_DOMAIN: str = "placita.RegistrationDomain"
"""Process-wide domain holding registered fallback values."""

GLOBAL_DOMAIN: str = "placita.GlobalDomain"
"""Persistent domain shared by every application identity."""

DID_CHANGE_NOTIFICATION: str = "placita.PreferencesDidChange"
"""Notification posted after a persistent domain is replaced or removed."""

RESERVED_DOMAIN_NAMES: frozenset[str] = frozenset(
    {ARGUMENT_DOMAIN, REGISTRATION_DOMAIN, GLOBAL_DOMAIN}
)

MAX_SUITE_NAME_LENGTH = 255


@dataclass(frozen=True, slots=True)
class SuiteName:
    """Validated suite name (immutable after creation).

    Format: 1-255 characters after stripping surrounding whitespace, no
    control characters, and not one of the reserved domain names.

    Attributes:
        value: The validated suite name.

    Raises:
        InvalidSuiteNameError: If the name does not meet the requirements.
    """

    value: str

    def __post_init__(self) -> None:
        stripped = self.value.strip()
        if not stripped:
            raise InvalidSuiteNameError(self.value, "suite name must not be empty")
        if len(stripped) > MAX_SUITE_NAME_LENGTH:
            raise InvalidSuiteNameError(
                self.value, f"suite name must be at most {MAX_SUITE_NAME_LENGTH} characters"
            )
        if any(unicodedata.category(ch) == "Cc" for ch in stripped):
            raise InvalidSuiteNameError(self.value, "suite name must not contain control characters")
        if stripped in RESERVED_DOMAIN_NAMES:
            raise InvalidSuiteNameError(self.value, "suite name is a reserved domain name")
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value
