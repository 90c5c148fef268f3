"""Narrative service HTTP client for explanatory plan and score text"""

import httpx
from typing import Any, Dict, Protocol
from budget_planner.domain.exceptions import (
    NarrativeAPIError,
    NarrativeOverloadedError,
    NarrativeResponseError,
)
from budget_planner.config import settings
from budget_planner.infrastructure.observability.metrics import narrative_latency_histogram

# Status codes the narrative service uses to signal overload or rate limiting
OVERLOAD_STATUS_CODES = {429, 503}


class NarrativeGenerator(Protocol):
    """Anything that can turn a numeric context into prose"""

    async def generate_narrative(self, context: Dict[str, Any], seed: str) -> str:
        ...


class NarrativeClient:
    """Client for the external narrative generation service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.narrative_api_base
        self.timeout = timeout or settings.narrative_timeout_seconds
        self._transport = transport

    async def generate_narrative(self, context: Dict[str, Any], seed: str) -> str:
        """
        Request explanatory text for a computed result.

        The seed is forwarded so identical requests can receive identical text.

        Raises:
            NarrativeOverloadedError: On 429/503 responses (retryable)
            NarrativeAPIError: On timeout or other HTTP errors
            NarrativeResponseError: On a malformed response body
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                with narrative_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/v1/narratives",
                        json={"kind": context.get("kind", "generic"), "context": context, "seed": seed},
                    )
                response.raise_for_status()
                data = response.json()

                text = data["text"]
                if not isinstance(text, str) or not text.strip():
                    raise ValueError("empty narrative text")
                return text.strip()

            except httpx.TimeoutException as e:
                raise NarrativeAPIError(f"Narrative API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status in OVERLOAD_STATUS_CODES:
                    raise NarrativeOverloadedError(f"Narrative API overloaded: {status}") from e
                raise NarrativeAPIError(f"Narrative API error: {status}") from e
            except httpx.RequestError as e:
                raise NarrativeAPIError(f"Narrative API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise NarrativeResponseError(f"Invalid narrative response: {e}") from e
