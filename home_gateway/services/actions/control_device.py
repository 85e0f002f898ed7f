"""CONTROL_DEVICE action: run an utterance through the command pipeline."""

from __future__ import annotations

import logging

from home_gateway.core.errors import HomeGatewayError
from home_gateway.services.actions.base import (
    ActionCallback,
    ActionMessage,
    ActionResponse,
    BaseAction,
    describe_error,
)
from home_gateway.services.orchestrator import CommandOrchestrator

logger = logging.getLogger(__name__)


class ControlDeviceAction(BaseAction):
    """Controls smart home devices with specific commands."""

    similes = ("DEVICE_CONTROL", "SMART_HOME_CONTROL", "HOME_CONTROL")
    description = "Controls smart home devices with specific commands"
    keywords = (
        "turn on",
        "turn off",
        "switch",
        "toggle",
        "set",
        "change",
        "adjust",
        "dim",
        "brighten",
        "lock",
        "unlock",
    )

    def __init__(self, orchestrator: CommandOrchestrator) -> None:
        self.orchestrator = orchestrator

    @property
    def name(self) -> str:
        return "CONTROL_DEVICE"

    async def handler(
        self,
        message: ActionMessage,
        callback: ActionCallback | None = None,
    ) -> ActionResponse:
        try:
            result = await self.orchestrator.handle_command(
                message.text, message.user_id, device_id=message.device_id
            )
        except HomeGatewayError as e:
            logger.warning(f"Device control failed: {e}")
            response = ActionResponse(text=describe_error(e), action="DEVICE_CONTROL_ERROR")
            return await self._respond(response, callback)

        if result is None:
            response = ActionResponse(
                text="That doesn't look like something I should do with your devices.",
                action="DEVICE_CONTROL_IGNORED",
            )
        else:
            response = ActionResponse(
                text=f"Command executed: {result.message or 'Success'}",
                action="DEVICE_CONTROL_RESPONSE",
            )
        return await self._respond(response, callback)
