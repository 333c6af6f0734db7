"""Protocols and core types for the Conduit client."""

from conduit_client.protocols.interfaces import (
    KeyValueStoreProtocol,
    LoggerProtocol,
    NavigatorProtocol,
    TransportProtocol,
)
from conduit_client.protocols.types import (
    REQUIRED_FILTER,
    RESERVED_FILTERS,
    Article,
    Comment,
    ErrorSet,
    FilterValue,
    Identity,
    ListResult,
    LoadingState,
    Profile,
    QueryDescriptor,
    SelectionType,
)

__all__ = [
    # Interfaces
    "KeyValueStoreProtocol",
    "LoggerProtocol",
    "NavigatorProtocol",
    "TransportProtocol",
    # Types
    "REQUIRED_FILTER",
    "RESERVED_FILTERS",
    "Article",
    "Comment",
    "ErrorSet",
    "FilterValue",
    "Identity",
    "ListResult",
    "LoadingState",
    "Profile",
    "QueryDescriptor",
    "SelectionType",
]
