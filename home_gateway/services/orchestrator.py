"""Command pipeline for device-control utterances.

State flow:
    IDLE -> GATING -> PARSING -> MAPPING -> EXECUTING -> SYNTHESIZING -> DONE

GATING ends in DECLINED when the intent oracle answers IGNORE or STOP.
Any stage after IDLE may end in FAILED; the triggering error is then
re-raised to the caller unchanged. Nothing is retried.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, TypeVar

from home_gateway.core.errors import CommandExecutionFailed, HomeGatewayError, OperationTimeout
from home_gateway.core.interfaces.gateway import DeviceGateway
from home_gateway.core.interfaces.runtime import CompletionOracle, IntentDecision, IntentOracle
from home_gateway.core.models.command import CommandResult, DeviceCommand, ParsedCommand
from home_gateway.services.command_parser import CommandParser, get_command_parser
from home_gateway.services.entity_registry import EntityRegistry
from home_gateway.services.prompts import MESSAGE_HANDLER_TEMPLATE, SHOULD_RESPOND_TEMPLATE
from home_gateway.services.state_cache import StateCache
from home_gateway.services.target_resolver import TargetResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNAVAILABLE_STATE = "Unable to fetch current state"


class PipelineState(Enum):
    """Command pipeline stages."""

    IDLE = auto()
    GATING = auto()          # Asking the intent oracle
    PARSING = auto()         # Text -> ParsedCommand
    MAPPING = auto()         # ParsedCommand -> DeviceCommand
    EXECUTING = auto()       # Target resolution + device API call
    SYNTHESIZING = auto()    # Completion oracle confirmation
    DONE = auto()
    DECLINED = auto()        # Oracle said IGNORE/STOP
    FAILED = auto()


VALID_TRANSITIONS: dict[PipelineState, set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.GATING},
    PipelineState.GATING: {PipelineState.PARSING, PipelineState.DECLINED, PipelineState.FAILED},
    PipelineState.PARSING: {PipelineState.MAPPING, PipelineState.FAILED},
    PipelineState.MAPPING: {PipelineState.EXECUTING, PipelineState.FAILED},
    PipelineState.EXECUTING: {PipelineState.SYNTHESIZING, PipelineState.FAILED},
    PipelineState.SYNTHESIZING: {PipelineState.DONE, PipelineState.FAILED},
    PipelineState.DONE: set(),
    PipelineState.DECLINED: set(),
    PipelineState.FAILED: set(),
}


@dataclass
class PipelineRun:
    """Trace of a single pass through the pipeline."""

    text: str
    user_id: str
    device_id: str | None = None
    state: PipelineState = PipelineState.IDLE
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.IDLE])
    started_at: float = field(default_factory=time.time)
    parsed: ParsedCommand | None = None
    command: DeviceCommand | None = None
    result: Any = None
    error: Exception | None = None

    def transition(self, new_state: PipelineState) -> None:
        """Move to a new stage.

        Raises:
            RuntimeError: If the transition is not allowed
        """
        if new_state not in VALID_TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid pipeline transition: {self.state.name} -> {new_state.name}")
        logger.debug(f"Pipeline: {self.state.name} -> {new_state.name}")
        self.state = new_state
        self.history.append(new_state)

    def fail(self, error: Exception) -> None:
        """Record a failure and move to FAILED."""
        self.error = error
        self.transition(PipelineState.FAILED)

    @property
    def duration(self) -> float:
        """Seconds since the run started."""
        return time.time() - self.started_at


class CommandOrchestrator:
    """Runs utterances through gate, parse, map, execute and synthesize."""

    def __init__(
        self,
        gateway: DeviceGateway,
        entity_registry: EntityRegistry,
        state_cache: StateCache,
        intent_oracle: IntentOracle,
        completion_oracle: CompletionOracle,
        parser: CommandParser | None = None,
        resolver: TargetResolver | None = None,
        call_timeout: float = 30.0,
    ) -> None:
        """Initialize orchestrator.

        Args:
            gateway: Device API gateway
            entity_registry: Registry used to resolve target devices
            state_cache: Cache providing the state snapshot for gating
            intent_oracle: Should-respond classifier
            completion_oracle: Natural-language confirmation generator
            parser: Command parser (default: global instance)
            resolver: Target device resolver
            call_timeout: Deadline for each external call in seconds
        """
        self.gateway = gateway
        self.entity_registry = entity_registry
        self.state_cache = state_cache
        self.intent_oracle = intent_oracle
        self.completion_oracle = completion_oracle
        self.parser = parser or get_command_parser()
        self.resolver = resolver or TargetResolver()
        self.call_timeout = call_timeout
        self.last_run: PipelineRun | None = None

    async def handle_command(
        self,
        text: str,
        user_id: str,
        device_id: str | None = None,
    ) -> CommandResult | None:
        """Run an utterance through the pipeline.

        Args:
            text: User utterance
            user_id: Requesting user
            device_id: Explicit target device (skips name resolution)

        Returns:
            CommandResult, or None when the intent oracle declined

        Raises:
            HomeGatewayError: Any pipeline failure, with the cause chained
        """
        run = PipelineRun(text=text, user_id=user_id, device_id=device_id)
        self.last_run = run

        try:
            run.transition(PipelineState.GATING)
            decision = await self._bounded(
                self.intent_oracle.should_respond(
                    SHOULD_RESPOND_TEMPLATE,
                    {"homeState": self.state_cache.snapshot(), "message": text},
                ),
                "intent oracle",
            )
            if decision != IntentDecision.RESPOND:
                logger.info(f"Intent oracle returned {getattr(decision, 'value', decision)}, not handling: {text}")
                run.transition(PipelineState.DECLINED)
                return None

            run.transition(PipelineState.PARSING)
            run.parsed = self.parser.parse(text)

            run.transition(PipelineState.MAPPING)
            run.command = self.parser.map_to_device_command(run.parsed.command, run.parsed.args)

            run.transition(PipelineState.EXECUTING)
            target = await self._resolve_target(run, run.command.capability)
            run.command = run.command.bind(target)
            run.result = await self.execute_command(run.command)
            await self._refresh_device_state(target)

            run.transition(PipelineState.SYNTHESIZING)
            message = await self._bounded(
                self.completion_oracle.complete(
                    MESSAGE_HANDLER_TEMPLATE,
                    {
                        "command": text,
                        "result": run.result,
                        "homeState": await self.get_current_state(),
                    },
                ),
                "completion oracle",
            )

            run.transition(PipelineState.DONE)
        except Exception as e:
            logger.error(f"Error handling smart home command in {run.state.name}: {e}")
            run.fail(e)
            raise

        logger.info(
            f"Command {run.parsed.command.value} -> {target} completed in {run.duration:.2f}s"
        )
        return CommandResult(success=True, message=message, data=run.result, device_id=target)

    async def execute_command(self, command: DeviceCommand) -> Any:
        """Send a bound device command to the gateway.

        Raises:
            CommandExecutionFailed: If the API call fails or times out
        """
        if not command.device_id:
            raise ValueError("DeviceCommand has no target device id")
        try:
            return await self._bounded(
                self.gateway.devices.execute_command(command.device_id, command.to_payload()),
                f"execute {command.capability}.{command.command}",
            )
        except HomeGatewayError as e:
            logger.error(f"Error executing smart home command on {command.device_id}: {e}")
            raise CommandExecutionFailed(e, command) from e

    async def get_current_state(self) -> str:
        """Aggregate live state of all devices as ``name: status`` lines.

        Returns:
            Newline-joined states, or a fixed notice when listing fails
        """
        try:
            devices = await self._bounded(self.gateway.devices.list(), "list devices")
        except HomeGatewayError as e:
            logger.error(f"Error getting current state: {e}")
            return UNAVAILABLE_STATE
        return "\n".join(
            f"{device.get('label') or device.get('name')}: {json.dumps(device.get('status'), default=str)}"
            for device in devices
        )

    async def _resolve_target(self, run: PipelineRun, capability: str) -> str:
        """Bind the run to a device id, discovering devices if needed."""
        if not run.device_id and len(self.entity_registry) == 0:
            logger.info("Entity registry empty, running discovery before resolving target")
            await self.entity_registry.discover_entities()
        return self.resolver.resolve(
            run.text,
            self.entity_registry.list_entities(),
            capability=capability,
            device_id=run.device_id,
        )

    async def _refresh_device_state(self, device_id: str) -> None:
        """Write the post-command status into the registry and the cache.

        The command has already executed, so a failure here is logged only.
        """
        try:
            status = await self._bounded(self.gateway.devices.get_status(device_id), "get device status")
        except HomeGatewayError as e:
            logger.warning(f"Post-command state refresh failed for {device_id}: {e}")
            return

        await self.entity_registry.update_entity_state(device_id, status)
        entity = self.entity_registry.get_entity(device_id)
        self.state_cache.update_state(device_id, status, name=entity.name if entity else None)

    async def _bounded(self, awaitable: Awaitable[T], operation: str) -> T:
        """Await an external call with the configured deadline.

        Raises:
            OperationTimeout: If the deadline passes
        """
        try:
            return await asyncio.wait_for(awaitable, timeout=self.call_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{operation} timed out after {self.call_timeout}s")
            raise OperationTimeout(operation, self.call_timeout) from e
