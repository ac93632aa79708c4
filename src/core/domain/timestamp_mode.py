"""Timestamp resolution modes for resx-http.

This module centralizes the modes used to decide which clock is
authoritative for a fetched resource. Keeping it in the domain layer allows
configuration, services and the CLI to share a single source of truth
without creating circular imports with adapters.
"""

from __future__ import annotations

from enum import Enum


class TimestampMode(str, Enum):
    """Where the timestamp of a resource comes from."""

    SERVER = "server"
    CLIENT = "client"

    @classmethod
    def default(cls) -> "TimestampMode":
        """Return the mode used when nothing is configured."""

        return cls.SERVER

    @classmethod
    def coerce(cls, value: "TimestampMode | str | None") -> "TimestampMode | None":
        """Accept `TimestampMode`, `"client"`, `":client"` (any case) or `None`."""

        if value is None or isinstance(value, cls):
            return value
        return cls(str(value).strip().lstrip(":").lower())

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "server headers" if self is TimestampMode.SERVER else "client clock"
