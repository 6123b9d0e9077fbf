from __future__ import annotations

import logging

import httpx

from .errors import PushError
from .types import IdeasPayload

logger = logging.getLogger(__name__)


class PushClient:
    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._token = token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def push(self, payload: IdeasPayload) -> None:
        try:
            response = await self._client.post(
                self.url,
                json=payload.to_dict(),
                headers=self.headers(),
            )
        except httpx.HTTPError as exc:
            raise PushError(f"Push request failed: {exc!r}") from exc

        if not response.is_success:
            raise PushError("Push failed", status=response.status_code, body=response.text)

        logger.debug("Push accepted status=%d", response.status_code)
