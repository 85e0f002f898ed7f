"""Prompt templates for the intent and completion oracles.

Placeholders use ``{{name}}`` syntax and are filled by render_template.
"""

from __future__ import annotations

import json
import re
from typing import Any

SHOULD_RESPOND_TEMPLATE = """
# Task: Decide if the assistant should respond to home automation requests.

# Current home state:
{{homeState}}

# Recent message:
{{message}}

# Instructions: Determine if the assistant should respond to the message and control home devices.
Response options are [RESPOND], [IGNORE] and [STOP].

The assistant should:
- Respond with [RESPOND] to direct home automation requests (e.g., "turn on the lights")
- Respond with [RESPOND] to questions about device states (e.g., "are the lights on?")
- Respond with [IGNORE] to unrelated messages
- Respond with [STOP] if asked to stop controlling devices

Choose the option that best describes how the assistant should respond to the message:"""

MESSAGE_HANDLER_TEMPLATE = """
# Task: Generate a response for a home automation request.

# Current home state:
{{homeState}}

# User command:
{{command}}

# Command result:
{{result}}

# Instructions: Write a natural response that confirms the action taken and its result.
The response should be friendly and conversational while clearly indicating what was done.

Response:"""

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def render_template(template: str, variables: dict[str, Any]) -> str:
    """Fill ``{{name}}`` placeholders.

    Non-string values are JSON encoded. Unknown placeholders render empty.

    Args:
        template: Template text
        variables: Placeholder values

    Returns:
        Rendered text
    """

    def _replace(match: re.Match[str]) -> str:
        value = variables.get(match.group(1), "")
        if isinstance(value, str):
            return value
        return json.dumps(value, default=str)

    return _PLACEHOLDER_RE.sub(_replace, template)
