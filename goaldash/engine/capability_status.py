"""Capability status port — who reports whether a capability (agent) is busy.

The engine never fabricates telemetry; it asks a provider for each tag.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from goaldash.config import settings


class CapabilityStatusProvider(ABC):
    @abstractmethod
    def get_status(self, capability: str) -> str:
        """Current status label for a capability tag."""


class StaticCapabilityStatus(CapabilityStatusProvider):
    """Fixed status per tag. Used when no live collaborator is wired in."""

    def __init__(self, default: str | None = None, overrides: dict[str, str] | None = None):
        self._default = default or settings.capability_default_status
        self._overrides = dict(overrides or {})

    def get_status(self, capability: str) -> str:
        return self._overrides.get(capability, self._default)
