"""Resolve which device an utterance is talking about.

The parsed command only says *what* to do. The target device is bound
from, in order: an explicit device id, a configured alias, an entity
name spelled out in the text, and finally a fuzzy name match. If none
of these yields exactly one device the request fails instead of
guessing.
"""

from __future__ import annotations

import logging

from rapidfuzz import fuzz, process

from home_gateway.core.errors import TargetNotResolved
from home_gateway.core.models.entity import Entity

logger = logging.getLogger(__name__)


class TargetResolver:
    """Binds utterances to a single target device."""

    def __init__(self, aliases: dict[str, str] | None = None, threshold: int = 70) -> None:
        """Initialize target resolver.

        Args:
            aliases: Lower-cased spoken alias -> device id
            threshold: Minimum fuzzy match score (0-100) to accept a name
        """
        self.aliases = aliases or {}
        self.threshold = threshold

    def resolve(
        self,
        text: str,
        entities: list[Entity],
        capability: str | None = None,
        device_id: str | None = None,
    ) -> str:
        """Resolve the target device id for an utterance.

        Args:
            text: User utterance
            entities: Known entities
            capability: Capability the command needs; narrows candidates
            device_id: Explicit target supplied by the caller

        Returns:
            Device id to target

        Raises:
            TargetNotResolved: If no single device can be determined
        """
        if device_id:
            return device_id

        text_lower = text.lower()

        # Aliases (longest first so "porch light" beats "porch")
        for alias in sorted(self.aliases, key=len, reverse=True):
            if alias in text_lower:
                logger.debug(f"Target resolved by alias '{alias}'")
                return self.aliases[alias]

        candidates = _filter_by_capability(entities, capability)
        if not candidates:
            raise TargetNotResolved(text)

        # Exact name contained in the text (longest name wins)
        named = [e for e in candidates if e.name and e.name.lower() in text_lower]
        if named:
            longest = max(len(e.name) for e in named)
            best = [e for e in named if len(e.name) == longest]
            return _single(text, best)

        # Fuzzy name match
        choices = {e.entity_id: e.name.lower() for e in candidates if e.name}
        matches = process.extract(text_lower, choices, scorer=fuzz.partial_ratio, limit=None)
        if not matches:
            raise TargetNotResolved(text)

        best_score = matches[0][1]
        if best_score < self.threshold:
            logger.debug(f"Best fuzzy target score {best_score:.0f} below threshold {self.threshold}")
            raise TargetNotResolved(text)

        by_id = {e.entity_id: e for e in candidates}
        best = [by_id[key] for _, score, key in matches if score == best_score]
        logger.debug(f"Fuzzy target match score={best_score:.0f}: {[e.name for e in best]}")
        return _single(text, best)


def _filter_by_capability(entities: list[Entity], capability: str | None) -> list[Entity]:
    """Prefer entities that support the capability, if any do."""
    if capability is None:
        return list(entities)
    capable = [e for e in entities if e.has_capability(capability)]
    return capable or list(entities)


def _single(text: str, entities: list[Entity]) -> str:
    """Return the only entity id, or fail as ambiguous."""
    if len(entities) == 1:
        return entities[0].entity_id
    raise TargetNotResolved(text, [e.name for e in entities])
