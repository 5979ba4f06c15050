"""PostgREST data source and GoTrue session provider over httpx."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..errors import DataSourceError, SessionError
from ..schemas import User
from .base import Query


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error", "detail"):
            value = body.get(key)
            if value:
                return str(value)
    return f"Request failed with status {response.status_code}"


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class _HostedService:
    """Shared HTTP plumbing for the hosted backend."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        access_token: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport
        self._logger = structlog.get_logger(__name__)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
        token = self._access_token or self._api_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        )


class RestDataSource(_HostedService):
    """Row store reached through a PostgREST endpoint (``/rest/v1``)."""

    async def select(self, collection: str, query: Query | None = None) -> list[dict[str, Any]]:
        query = query or Query()
        params: list[tuple[str, str]] = [("select", query.columns)]
        params.extend((column, f"eq.{_filter_value(value)}") for column, value in query.eq.items())
        if query.order_by:
            direction = "asc" if query.ascending else "desc"
            params.append(("order", f"{query.order_by}.{direction}"))
        if query.limit is not None:
            params.append(("limit", str(query.limit)))
        rows = await self._request("GET", collection, params=params)
        return list(rows or [])

    async def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        rows = await self._request(
            "POST",
            collection,
            json=[record],
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise DataSourceError(f"Insert into {collection} returned no rows")
        return rows[0]

    async def update(
        self,
        collection: str,
        record_id: str,
        values: dict[str, Any],
    ) -> dict[str, Any] | None:
        rows = await self._request(
            "PATCH",
            collection,
            params=[("id", f"eq.{record_id}")],
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return rows[0] if rows else None

    async def delete(self, collection: str, record_id: str) -> None:
        await self._request("DELETE", collection, params=[("id", f"eq.{record_id}")])

    async def _request(
        self,
        method: str,
        collection: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        async with self._client() as client:
            try:
                response = await client.request(
                    method,
                    f"/rest/v1/{collection}",
                    params=params,
                    json=json,
                    headers=headers,
                )
            except httpx.HTTPError as exc:
                self._logger.warning(
                    "data_source.request_failed",
                    method=method,
                    collection=collection,
                    error=str(exc),
                )
                raise DataSourceError(f"Could not reach the data store: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            self._logger.warning(
                "data_source.request_rejected",
                method=method,
                collection=collection,
                status=response.status_code,
                error=message,
            )
            raise DataSourceError(message, status_code=response.status_code)
        if not response.content:
            return None
        return response.json()


class RestSessionProvider(_HostedService):
    """Session lookup against a GoTrue auth endpoint (``/auth/v1``)."""

    async def get_current_user(self) -> User | None:
        if not self._access_token:
            return None
        async with self._client() as client:
            try:
                response = await client.get("/auth/v1/user")
            except httpx.HTTPError as exc:
                self._logger.warning("session.lookup_failed", error=str(exc))
                raise SessionError("Unable to load user session.") from exc
        if response.status_code in (401, 403):
            return None
        if response.is_error:
            self._logger.warning(
                "session.lookup_rejected",
                status=response.status_code,
                error=_error_message(response),
            )
            raise SessionError("Unable to load user session.")
        return User.model_validate(response.json())

    async def sign_out(self) -> None:
        if not self._access_token:
            return
        async with self._client() as client:
            try:
                response = await client.post("/auth/v1/logout")
            except httpx.HTTPError as exc:
                self._logger.warning("session.sign_out_failed", error=str(exc))
                raise SessionError("Failed to log out. Please try again.") from exc
        if response.is_error and response.status_code not in (401, 403):
            self._logger.warning(
                "session.sign_out_rejected",
                status=response.status_code,
                error=_error_message(response),
            )
            raise SessionError("Failed to log out. Please try again.")
        self._access_token = None
