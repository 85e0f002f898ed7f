"""Base class and registry for context providers.

Providers return plain-text snapshots the agent runtime places in its
context window.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for context providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'device-state')."""
        pass

    @abstractmethod
    async def get(self) -> str:
        """Render the current snapshot as text."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"


class ProviderRegistry:
    """Registered context providers keyed by name."""

    def __init__(self) -> None:
        self._providers: dict[str, BaseProvider] = {}

    def register(self, provider: BaseProvider) -> None:
        """Register a provider, replacing any with the same name."""
        if provider.name in self._providers:
            logger.warning(f"Provider '{provider.name}' already registered, replacing")
        self._providers[provider.name] = provider
        logger.info(f"Registered provider: {provider.name}")

    def get_provider(self, name: str) -> BaseProvider | None:
        return self._providers.get(name)

    def list_providers(self) -> list[str]:
        return list(self._providers.keys())

    async def render(self, name: str) -> str | None:
        """Render a provider by name, or None if it is not registered."""
        provider = self._providers.get(name)
        if provider is None:
            return None
        return await provider.get()

    def __len__(self) -> int:
        return len(self._providers)
