"""
LMS Seeder - Remote store client

Thin async client for a PostgREST endpoint (Supabase `/rest/v1`).
Authenticates with the service-role key, which bypasses row-level security,
so it must only ever be used by trusted operator tooling.
"""
import logging
from typing import Any

import httpx

from lms_seeder.core.config import Settings

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class StoreError(Exception):
    """Raised when the store rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class WriteFailure(StoreError):
    """An insert or upsert failed (store error, network error, constraint violation)."""


def filter_value(value: Any) -> str:
    """Render a Python value as a PostgREST `eq.` operand."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)


class StoreClient:
    """
    Usage:
        async with StoreClient(settings) as store:
            rows = await store.upsert("users", [row], on_conflict="email")
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        key = settings.SUPABASE_SERVICE_ROLE_KEY
        self._client = httpx.AsyncClient(
            base_url=settings.rest_url,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, table: str, error_cls: type[StoreError], **kwargs) -> list[Row]:
        try:
            response = await self._client.request(method, f"/{table}", **kwargs)
        except httpx.TimeoutException:
            raise error_cls(f"Store did not respond in time ({method} {table}).")
        except httpx.RequestError as exc:
            raise error_cls(f"Store unreachable: {exc}")

        if not response.is_success:
            raise error_cls(_error_message(response), status_code=response.status_code)
        if not response.content:
            return []
        try:
            data = response.json()
        except ValueError:
            raise error_cls(
                f"Invalid response from store ({method} {table})",
                status_code=response.status_code,
            )
        return data if isinstance(data, list) else [data]

    # ─── Writes ───────────────────────────────────────────────────────────────

    async def upsert(self, table: str, rows: list[Row], on_conflict: str) -> list[Row]:
        """Insert rows, overwriting any existing row that collides on `on_conflict`."""
        return await self._request(
            "POST",
            table,
            WriteFailure,
            json=rows,
            params={"on_conflict": on_conflict},
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )

    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        return await self._request(
            "POST",
            table,
            WriteFailure,
            json=rows,
            headers={"Prefer": "return=representation"},
        )

    # ─── Reads ────────────────────────────────────────────────────────────────

    async def select(self, table: str, match: Row | None = None, limit: int | None = None) -> list[Row]:
        params = {"select": "*"}
        for column, value in (match or {}).items():
            params[column] = f"eq.{filter_value(value)}"
        if limit is not None:
            params["limit"] = str(limit)
        return await self._request("GET", table, StoreError, params=params)

    async def find_or_insert(self, table: str, row: Row, keys: list[str]) -> Row:
        """Return the row matching `keys`, inserting `row` first if none exists."""
        found = await self.select(table, {k: row[k] for k in keys}, limit=1)
        if found:
            return found[0]
        created = await self.insert(table, [row])
        if not created:
            raise WriteFailure(f"Insert into {table} returned no row.")
        logger.debug("Inserted %s row %s", table, created[0].get("id"))
        return created[0]
