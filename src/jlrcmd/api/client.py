"""Thin async HTTP wrapper shared by every InControl API call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from jlrcmd.api.errors import ApiError, AuthError, VehicleNotFoundError

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0


class InControlClient:
    """Send requests to the InControl hosts on behalf of one device.

    Every request carries the ``X-Device-Id`` header.  Pass *bearer* to
    authenticate a request with a session access token.  Non-2xx answers
    and transport failures are raised as :class:`ApiError` subclasses.
    """

    def __init__(
        self,
        device_id: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.device_id = device_id
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "X-Device-Id": device_id,
                "Connection": "close",
            },
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> InControlClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        url: str,
        *,
        bearer: str | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request and return the raw response (2xx only)."""
        merged: dict[str, str] = {"Content-Type": "application/json"}
        if bearer is not None:
            merged["Authorization"] = f"Bearer {bearer}"
        if headers:
            merged.update(headers)

        logger.debug("%s %s", method, url)
        try:
            resp = await self._client.request(
                method, url, headers=merged, params=params, json=json
            )
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc

        _raise_for_status(resp)
        return resp

    async def get(self, url: str, **kwargs: Any) -> dict[str, Any]:
        resp = await self.request("GET", url, **kwargs)
        return json_body(resp)

    async def post(self, url: str, **kwargs: Any) -> dict[str, Any]:
        resp = await self.request("POST", url, **kwargs)
        return json_body(resp)


def _raise_for_status(resp: httpx.Response) -> None:
    status = resp.status_code
    if status < 400:
        return
    text = resp.text
    method = resp.request.method
    url = resp.request.url
    message = f"{method} {url} returned HTTP {status}"
    if text:
        message = f"{message}: {text}"
    if status in (401, 403):
        raise AuthError(message, status_code=status, body=text)
    if status == 404:
        raise VehicleNotFoundError(message, status_code=status, body=text)
    raise ApiError(message, status_code=status, body=text)


def json_body(resp: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body; empty bodies (204) become ``{}``."""
    if resp.status_code == 204 or not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError as exc:
        raise ApiError(
            f"Malformed JSON from {resp.request.url}",
            status_code=resp.status_code,
            body=resp.text,
        ) from exc
    if not isinstance(data, dict):
        raise ApiError(
            f"Expected a JSON object from {resp.request.url}",
            status_code=resp.status_code,
            body=resp.text,
        )
    return data
