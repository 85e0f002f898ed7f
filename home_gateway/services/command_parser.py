"""Regex command parser for device-control utterances.

Turns free text into a ParsedCommand by walking an ordered pattern list
(first match wins), then maps the parsed command onto a SmartThings
capability/command/arguments triple.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from home_gateway.core.errors import InvalidCommandArgument, UnknownCommand, UnparseableCommand
from home_gateway.core.models.command import (
    CommandArgs,
    CommandName,
    DeviceCommand,
    ParsedCommand,
)

logger = logging.getLogger(__name__)

# Ordered: earlier entries win when several patterns match.
COMMAND_PATTERNS: tuple[tuple[CommandName, re.Pattern[str]], ...] = (
    (CommandName.TURN_ON, re.compile(r"turn on|switch on|enable", re.IGNORECASE)),
    (CommandName.TURN_OFF, re.compile(r"turn off|switch off|disable", re.IGNORECASE)),
    (
        CommandName.SET_BRIGHTNESS,
        re.compile(r"set brightness to (\d+)|dim to (\d+)|brighten to (\d+)", re.IGNORECASE),
    ),
    (
        CommandName.SET_TEMPERATURE,
        re.compile(r"set temperature to (\d+)|change temp to (\d+)", re.IGNORECASE),
    ),
    (
        CommandName.SET_COLOR,
        re.compile(r"change colou?r to (\w+)|set colou?r to (\w+)", re.IGNORECASE),
    ),
    # Word boundaries keep "unlock" from matching the lock pattern.
    (CommandName.LOCK, re.compile(r"\block\b|\bsecure\b", re.IGNORECASE)),
    (CommandName.UNLOCK, re.compile(r"\bunlock\b|\bunsecure\b", re.IGNORECASE)),
    (CommandName.OPEN, re.compile(r"\bopen\b|\braise\b", re.IGNORECASE)),
    (CommandName.CLOSE, re.compile(r"\bclose\b|\blower\b", re.IGNORECASE)),
)


class ArgumentKind(Enum):
    """How a command's captured argument is converted."""

    NONE = "none"
    INTEGER = "integer"
    COLOR = "color"


@dataclass(frozen=True)
class CommandMapping:
    """SmartThings capability command a parsed command maps to."""

    capability: str
    command: str
    argument: ArgumentKind = ArgumentKind.NONE


COMMAND_MAPPINGS: dict[CommandName, CommandMapping] = {
    CommandName.TURN_ON: CommandMapping("switch", "on"),
    CommandName.TURN_OFF: CommandMapping("switch", "off"),
    CommandName.SET_BRIGHTNESS: CommandMapping("switchLevel", "setLevel", ArgumentKind.INTEGER),
    CommandName.SET_TEMPERATURE: CommandMapping("thermostat", "setTemperature", ArgumentKind.INTEGER),
    CommandName.SET_COLOR: CommandMapping("colorControl", "setColor", ArgumentKind.COLOR),
    CommandName.LOCK: CommandMapping("lock", "lock"),
    CommandName.UNLOCK: CommandMapping("lock", "unlock"),
    CommandName.OPEN: CommandMapping("windowShade", "open"),
    CommandName.CLOSE: CommandMapping("windowShade", "close"),
}

COLOR_HEX = {
    "red": "#FF0000",
    "green": "#00FF00",
    "blue": "#0000FF",
    "white": "#FFFFFF",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "purple": "#800080",
    "pink": "#FFC0CB",
    "cyan": "#00FFFF",
}

_HEX_RE = re.compile(r"^[0-9a-f]{6}$", re.IGNORECASE)


class CommandParser:
    """Pattern-based command parser and device command mapper."""

    def __init__(
        self,
        patterns: tuple[tuple[CommandName, re.Pattern[str]], ...] = COMMAND_PATTERNS,
        mappings: dict[CommandName, CommandMapping] | None = None,
    ) -> None:
        """Initialize command parser.

        Args:
            patterns: Ordered (command, regex) pairs
            mappings: Command -> capability mapping table
        """
        self.patterns = patterns
        self.mappings = COMMAND_MAPPINGS if mappings is None else mappings

    def parse(self, text: str) -> ParsedCommand:
        """Parse an utterance into a command.

        Args:
            text: Free-text utterance

        Returns:
            ParsedCommand for the first matching pattern

        Raises:
            UnparseableCommand: If no pattern matches
        """
        for command, pattern in self.patterns:
            match = pattern.search(text)
            if match:
                value = next((group for group in match.groups() if group), None)
                logger.debug(f"Parsed {command.value} (arg={value!r}) from: {text}")
                return ParsedCommand(
                    command=command,
                    args=CommandArgs(value=value) if value is not None else None,
                )

        logger.debug(f"No command pattern matched: {text}")
        raise UnparseableCommand(text)

    def map_to_device_command(
        self,
        command: CommandName | str,
        args: CommandArgs | dict[str, str] | None = None,
    ) -> DeviceCommand:
        """Map a parsed command onto a SmartThings capability command.

        The returned command has no device id; the caller binds it.

        Args:
            command: Command name
            args: Captured argument (``{"value": ...}``)

        Returns:
            DeviceCommand without a target device

        Raises:
            UnknownCommand: If the command has no mapping
            InvalidCommandArgument: If a required argument is missing or malformed
        """
        try:
            name = CommandName(command)
        except ValueError:
            raise UnknownCommand(str(command)) from None

        mapping = self.mappings.get(name)
        if mapping is None:
            raise UnknownCommand(name.value)

        if isinstance(args, dict):
            value = args.get("value")
        else:
            value = args.value if args else None

        if mapping.argument is ArgumentKind.NONE:
            arguments = None
        elif mapping.argument is ArgumentKind.INTEGER:
            arguments = [_parse_int(name, value)]
        else:
            arguments = [{"hex": _parse_color(name, value)}]

        return DeviceCommand(
            capability=mapping.capability,
            command=mapping.command,
            arguments=arguments,
        )


def _parse_int(command: CommandName, value: str | None) -> int:
    """Parse an integer argument strictly."""
    if value is None:
        raise InvalidCommandArgument(command.value, None)
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidCommandArgument(command.value, value) from None


def _parse_color(command: CommandName, value: str | None) -> str:
    """Resolve a color name or bare hex code to ``#RRGGBB``."""
    if value is None:
        raise InvalidCommandArgument(command.value, None)
    color = value.strip().lower()
    if color in COLOR_HEX:
        return COLOR_HEX[color]
    if _HEX_RE.match(color):
        return f"#{color.upper()}"
    raise InvalidCommandArgument(command.value, value)


# Global instance
_command_parser: CommandParser | None = None


def get_command_parser() -> CommandParser:
    """Get or create global CommandParser instance.

    Returns:
        CommandParser instance
    """
    global _command_parser
    if _command_parser is None:
        _command_parser = CommandParser()
    return _command_parser
