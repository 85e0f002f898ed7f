"""Exception hierarchy for the home gateway.

Per-request failures abort the command pipeline and reach the caller
with the original cause chained. Only the polling loop swallows errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from home_gateway.core.models.command import DeviceCommand


class HomeGatewayError(Exception):
    """Base exception for gateway errors."""


class ConfigValidationFailed(HomeGatewayError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, errors: list[str]) -> None:
        """Initialize config validation error.

        Args:
            errors: One ``field: message`` line per validation problem
        """
        self.errors = errors
        super().__init__("SmartThings configuration validation failed:\n" + "\n".join(errors))


class TransportError(HomeGatewayError):
    """Raised on a non-2xx response or a network failure."""

    def __init__(self, status_text: str, status_code: int | None = None, api: str | None = None) -> None:
        """Initialize transport error.

        Args:
            status_text: Response status text or network error description
            status_code: HTTP status code (None for network failures)
            api: Name of the API that failed (optional)
        """
        self.status_text = status_text
        self.status_code = status_code
        self.api = api
        super().__init__(f"{api} API error: {status_text}" if api else status_text)


class OperationTimeout(HomeGatewayError):
    """Raised when a bounded external call exceeds its deadline."""

    def __init__(self, operation: str, timeout: float) -> None:
        """Initialize timeout error.

        Args:
            operation: Description of the call that timed out
            timeout: Deadline in seconds
        """
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout:.1f}s")


class DiscoveryFailed(HomeGatewayError):
    """Raised when entity discovery fails. The registry is left untouched."""

    def __init__(self, cause: Exception) -> None:
        """Initialize discovery error.

        Args:
            cause: Underlying transport or timeout error
        """
        self.cause = cause
        super().__init__(f"Entity discovery failed: {cause}")


class UnparseableCommand(HomeGatewayError):
    """Raised when no command pattern matches the text."""

    def __init__(self, text: str) -> None:
        """Initialize parse error.

        Args:
            text: The utterance that could not be parsed
        """
        self.text = text
        super().__init__("Unable to parse command")


class UnknownCommand(HomeGatewayError):
    """Raised when a command name has no device mapping."""

    def __init__(self, command: str) -> None:
        """Initialize unknown command error.

        Args:
            command: The unmapped command name
        """
        self.command = command
        super().__init__(f"Unknown command: {command}")


class InvalidCommandArgument(HomeGatewayError):
    """Raised when a command argument is missing or malformed."""

    def __init__(self, command: str, value: str | None) -> None:
        """Initialize argument validation error.

        Args:
            command: Command the argument belongs to
            value: Raw argument text (None when missing)
        """
        self.command = command
        self.value = value
        if value is None:
            message = f"Command {command} requires an argument"
        else:
            message = f"Invalid argument for {command}: {value!r}"
        super().__init__(message)


class TargetNotResolved(HomeGatewayError):
    """Raised when an utterance cannot be bound to exactly one device."""

    def __init__(self, text: str, candidates: list[str] | None = None) -> None:
        """Initialize target resolution error.

        Args:
            text: The utterance
            candidates: Names of equally likely devices, when ambiguous
        """
        self.text = text
        self.candidates = candidates or []
        if self.candidates:
            message = f"Ambiguous target device, candidates: {', '.join(self.candidates)}"
        else:
            message = "Could not determine which device to control"
        super().__init__(message)


class CommandExecutionFailed(HomeGatewayError):
    """Raised when the device API rejects or fails a command."""

    def __init__(self, cause: Exception, command: DeviceCommand | None = None) -> None:
        """Initialize execution error.

        Args:
            cause: Underlying transport or timeout error
            command: The device command that failed (optional)
        """
        self.cause = cause
        self.command = command
        device = command.device_id if command else None
        prefix = f"Command execution failed for device {device}" if device else "Command execution failed"
        super().__init__(f"{prefix}: {cause}")


class OracleError(HomeGatewayError):
    """Raised when the intent or completion oracle fails."""
