"""Last-known state cache.

A key/value store of per-entity state kept separately from the states
embedded in the entity registry. The two are written at different
moments (polling copies registry states in after each discovery, a
successful command writes both) so they may briefly disagree; neither
is ever invalidated automatically.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CachedState:
    """A cached state entry."""

    entity_id: str
    state: Any
    name: str | None = None

    @property
    def label(self) -> str:
        """Display label, falling back to the entity id."""
        return self.name or self.entity_id


class StateCache:
    """Per-entity last-known state store."""

    def __init__(self) -> None:
        """Initialize empty cache."""
        self._states: dict[str, CachedState] = {}

    def update_state(self, entity_id: str, state: Any, name: str | None = None) -> None:
        """Store the latest state for an entity.

        Args:
            entity_id: Entity identifier
            state: Status payload
            name: Display name (keeps the previous one when omitted)
        """
        previous = self._states.get(entity_id)
        if name is None and previous is not None:
            name = previous.name
        self._states[entity_id] = CachedState(entity_id=entity_id, state=state, name=name)

    def get_state(self, entity_id: str) -> Any:
        """Get the cached state for an entity, or None."""
        cached = self._states.get(entity_id)
        return cached.state if cached else None

    def get_all_states(self) -> dict[str, Any]:
        """Copy of all cached states keyed by entity id."""
        return {entity_id: cached.state for entity_id, cached in self._states.items()}

    def snapshot(self) -> str:
        """Render all cached states as ``name: state`` lines."""
        return "\n".join(
            f"{cached.label}: {render_state(cached.state)}" for cached in self._states.values()
        )

    def __len__(self) -> int:
        return len(self._states)


def render_state(state: Any) -> str:
    """Render a state payload as compact text."""
    if isinstance(state, str):
        return state
    try:
        return json.dumps(state, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return str(state)
