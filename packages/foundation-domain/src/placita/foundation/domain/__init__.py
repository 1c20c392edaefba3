"""Placita Foundation Domain -- pure Python preference primitives.

This package provides the foundational building blocks of the preference
store: the canonical value model, lenient coercion, reserved domain names,
exceptions, and port interfaces.
"""

from placita.foundation.domain.coercion import parse_bool, parse_float, parse_int
from placita.foundation.domain.domain_names import (
    ARGUMENT_DOMAIN,
    DID_CHANGE_NOTIFICATION,
    GLOBAL_DOMAIN,
    REGISTRATION_DOMAIN,
    RESERVED_DOMAIN_NAMES,
    SuiteName,
)
from placita.foundation.domain.exceptions import (
    DomainError,
    InvalidSuiteNameError,
    StorageBackendError,
    UnsupportedValueTypeError,
    ValidationError,
)
from placita.foundation.domain.ports import NotificationSinkPort, PreferencesBackendPort
from placita.foundation.domain.values import (
    ArrayValue,
    BooleanValue,
    DataValue,
    DateValue,
    DictionaryValue,
    FloatValue,
    IntegerValue,
    PathValue,
    StringValue,
    Value,
    ValueKind,
    archive_file_reference,
    convert_mapping,
    from_canonical,
    is_canonical,
    to_canonical,
    unarchive_file_reference,
)

__all__ = [
    "ARGUMENT_DOMAIN",
    "DID_CHANGE_NOTIFICATION",
    "GLOBAL_DOMAIN",
    "REGISTRATION_DOMAIN",
    "RESERVED_DOMAIN_NAMES",
    "ArrayValue",
    "BooleanValue",
    "DataValue",
    "DateValue",
    "DictionaryValue",
    "DomainError",
    "FloatValue",
    "IntegerValue",
    "InvalidSuiteNameError",
    "NotificationSinkPort",
    "PathValue",
    "PreferencesBackendPort",
    "StorageBackendError",
    "StringValue",
    "SuiteName",
    "UnsupportedValueTypeError",
    "ValidationError",
    "Value",
    "ValueKind",
    "archive_file_reference",
    "convert_mapping",
    "from_canonical",
    "is_canonical",
    "parse_bool",
    "parse_float",
    "parse_int",
    "to_canonical",
    "unarchive_file_reference",
]
