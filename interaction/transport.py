"""
HTTP transport for the remote activity check.

Posts the identity and webform id to the check endpoint and maps the JSON
answer to a LockDecision. Any transport problem (connection error, timeout,
non-2xx status, unreadable body) is raised as TransportError; the controller
treats it as an inconclusive check.
"""

from __future__ import annotations

from typing import Optional

import httpx

from domain.decision import LockDecision
from domain.identity import IdentityInput
from services.activity_lock_service import CHECK_PATH


class TransportError(Exception):
    """Raised when the remote check could not be completed."""


class HttpActivityChecker:
    def __init__(
        self,
        base_url: str,
        check_path: str = CHECK_PATH,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._url = base_url.rstrip("/") + check_path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def check(self, identity: IdentityInput, webform_id: str) -> LockDecision:
        payload = {
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "email": identity.email,
            "webform_id": webform_id,
        }
        try:
            response = await self._client.post(self._url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise TransportError(f"Invalid response body: {e}") from e

        if not isinstance(data, dict):
            raise TransportError("Invalid response body: expected a JSON object")

        if data.get("activity_exists"):
            return LockDecision.locked_with(str(data.get("message") or ""))
        return LockDecision.unlocked()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
