"""Registry of agent actions."""

from __future__ import annotations

import logging

from home_gateway.services.actions.base import ActionMessage, BaseAction

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Registered actions keyed by name."""

    def __init__(self) -> None:
        self._actions: dict[str, BaseAction] = {}

    def register(self, action: BaseAction) -> None:
        """Register an action, replacing any with the same name."""
        if action.name in self._actions:
            logger.warning(f"Action '{action.name}' already registered, replacing")
        self._actions[action.name] = action
        logger.info(f"Registered action: {action.name}")

    def get_action(self, name: str) -> BaseAction | None:
        """Look up an action by name or simile."""
        action = self._actions.get(name)
        if action is not None:
            return action
        for candidate in self._actions.values():
            if name in candidate.similes:
                return candidate
        return None

    def list_actions(self) -> list[str]:
        return list(self._actions.keys())

    def match(self, message: ActionMessage) -> list[BaseAction]:
        """Actions whose validation accepts the message, in registration order."""
        return [action for action in self._actions.values() if action.validate(message)]

    def __len__(self) -> int:
        return len(self._actions)
