"""OpenAI-compatible LLM client implementing both agent oracles.

Used when the gateway runs standalone instead of inside an agent
runtime that provides its own should-respond and completion functions.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from home_gateway.core.errors import OracleError
from home_gateway.core.interfaces.runtime import IntentDecision
from home_gateway.services.prompts import render_template

logger = logging.getLogger(__name__)

_BRACKETED_DECISION_RE = re.compile(r"\[(RESPOND|IGNORE|STOP)\]", re.IGNORECASE)
_BARE_DECISION_RE = re.compile(r"\b(RESPOND|IGNORE|STOP)\b")

# Declining decisions win whenever the output names more than one.
_DECISION_PRIORITY = (IntentDecision.STOP, IntentDecision.IGNORE, IntentDecision.RESPOND)


def parse_decision(text: str) -> IntentDecision:
    """Extract the intent decision from model output.

    Bracketed tokens (``[RESPOND]``) are read first; only when there are
    none are whole upper-case words considered, so prose such as "I
    should not respond" or "correspond" never counts. If several
    decisions appear, STOP beats IGNORE beats RESPOND.

    Returns:
        The decision, or IGNORE when the output names none
    """
    text = text or ""
    found = {token.upper() for token in _BRACKETED_DECISION_RE.findall(text)}
    if not found:
        found = set(_BARE_DECISION_RE.findall(text))

    for decision in _DECISION_PRIORITY:
        if decision.value in found:
            return decision

    logger.warning(f"No intent decision found in oracle output: {text!r}")
    return IntentDecision.IGNORE


class LLMOracle:
    """Chat-completions client for intent gating and response synthesis."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize LLM oracle.

        Args:
            api_key: API key for the completions endpoint
            model: Model name
            base_url: API root URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError("LLM_API_KEY is required for the LLM oracle")

        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def should_respond(self, template: str, variables: dict[str, Any]) -> IntentDecision:
        """Ask the model whether to respond, ignore or stop."""
        text = await self._chat(render_template(template, variables), max_tokens=10)
        decision = parse_decision(text)
        logger.info(f"Intent oracle decision: {decision.value}")
        return decision

    async def complete(self, template: str, variables: dict[str, Any]) -> str:
        """Generate text for a rendered template."""
        return (await self._chat(render_template(template, variables), max_tokens=200)).strip()

    async def _chat(self, prompt: str, max_tokens: int) -> str:
        """Send a single-message chat completion request.

        Raises:
            OracleError: On timeout, HTTP error or malformed response
        """
        request_body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.1,
            "max_tokens": max_tokens,
        }

        try:
            response = await self._client.post("/chat/completions", json=request_body)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling LLM (>{self.timeout}s)")
            raise OracleError(f"LLM request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from LLM: {e.response.status_code} - {e.response.text}")
            raise OracleError(f"LLM API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling LLM: {type(e).__name__}: {e}")
            raise OracleError(f"LLM request failed: {e}") from e
        except ValueError as e:
            logger.error(f"LLM returned invalid JSON: {e}")
            raise OracleError("LLM returned invalid JSON") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed LLM response: {data}")
            raise OracleError("Malformed LLM response") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
