"""Tests for ControlDeviceAction."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from home_gateway.core.errors import CommandExecutionFailed, TargetNotResolved, TransportError
from home_gateway.core.models import CommandResult
from home_gateway.services.actions import ActionMessage, ControlDeviceAction


@pytest.fixture
def mock_orchestrator():
    orchestrator = MagicMock()
    orchestrator.handle_command = AsyncMock(
        return_value=CommandResult(success=True, message="The fan is off.", device_id="fan-1")
    )
    return orchestrator


@pytest.fixture
def action(mock_orchestrator) -> ControlDeviceAction:
    return ControlDeviceAction(mock_orchestrator)


class TestControlDeviceAction:
    """Test suite for ControlDeviceAction."""

    def test_action_name(self, action):
        assert action.name == "CONTROL_DEVICE"
        assert "DEVICE_CONTROL" in action.similes
        assert repr(action) == "<ControlDeviceAction(name='CONTROL_DEVICE')>"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Turn on the lamp", True),
            ("dim the bedroom", True),
            ("unlock the door", True),
            ("hello there", False),
        ],
    )
    def test_validate(self, action, text, expected):
        assert action.validate(ActionMessage(text=text)) is expected

    @pytest.mark.asyncio
    async def test_success(self, action, mock_orchestrator):
        callback = AsyncMock()

        response = await action.handler(
            ActionMessage(text="turn off the fan", user_id="user-1", device_id="fan-1"),
            callback,
        )

        assert response.text == "Command executed: The fan is off."
        assert response.action == "DEVICE_CONTROL_RESPONSE"
        assert response.source == "home-assistant"
        mock_orchestrator.handle_command.assert_awaited_once_with("turn off the fan", "user-1", device_id="fan-1")
        callback.assert_awaited_once_with(response)

    @pytest.mark.asyncio
    async def test_empty_message_reports_success(self, action, mock_orchestrator):
        mock_orchestrator.handle_command.return_value = CommandResult(success=True, message="")

        response = await action.handler(ActionMessage(text="turn on the lamp"))

        assert response.text == "Command executed: Success"

    @pytest.mark.asyncio
    async def test_declined(self, action, mock_orchestrator):
        mock_orchestrator.handle_command.return_value = None

        response = await action.handler(ActionMessage(text="switch topics please"))

        assert response.action == "DEVICE_CONTROL_IGNORED"

    @pytest.mark.asyncio
    async def test_unresolved_target(self, action, mock_orchestrator):
        mock_orchestrator.handle_command.side_effect = TargetNotResolved("turn on the lamp", ["Desk Lamp", "Floor Lamp"])
        callback = AsyncMock()

        response = await action.handler(ActionMessage(text="turn on the lamp"), callback)

        assert response.action == "DEVICE_CONTROL_ERROR"
        assert "Desk Lamp, Floor Lamp" in response.text
        callback.assert_awaited_once_with(response)

    @pytest.mark.asyncio
    async def test_execution_failure(self, action, mock_orchestrator):
        cause = TransportError("Conflict", 409, api="SmartThings")
        mock_orchestrator.handle_command.side_effect = CommandExecutionFailed(cause)

        response = await action.handler(ActionMessage(text="turn on the lamp"))

        assert response.action == "DEVICE_CONTROL_ERROR"
        assert "SmartThings API error: Conflict" in response.text
