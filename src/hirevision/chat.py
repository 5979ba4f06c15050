"""Client for the recruiter chat/completion backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from .errors import NetworkError

GENERIC_FAILURE = "Something went wrong."


@dataclass(slots=True, frozen=True)
class ChatReply:
    """Outcome of one prompt: the reply text or the backend's error."""

    text: str
    ok: bool


class ChatClient:
    """Single request/response exchange with ``POST /recruiter-chat``."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = structlog.get_logger(__name__)

    async def send(self, prompt: str, recruiter_id: str | None = None) -> ChatReply | None:
        """Submit ``prompt``; returns ``None`` for blank prompts.

        Raises :class:`NetworkError` when the backend cannot be reached or
        answers with something other than JSON.
        """
        if not prompt.strip():
            return None
        payload: dict[str, Any] = {"prompt": prompt, "recruiter_id": recruiter_id or None}
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post("/recruiter-chat", json=payload)
                data = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                self._logger.warning("chat.request_failed", error=str(exc))
                raise NetworkError() from exc

        if not isinstance(data, dict):
            data = {}
        if response.is_success:
            return ChatReply(text=str(data.get("reply") or ""), ok=True)
        detail = data.get("detail")
        self._logger.info("chat.rejected", status=response.status_code, detail=detail)
        return ChatReply(text=str(detail) if detail else GENERIC_FAILURE, ok=False)
