"""
Shared fixtures: an in-memory PostgREST stand-in served through httpx.MockTransport.
"""
import json
import uuid

import httpx
import pytest

from lms_seeder.core.config import Settings
from lms_seeder.core.store import filter_value

REST_PREFIX = "/rest/v1/"


class FakePostgrest:
    """Just enough of PostgREST for select / insert / upsert with on_conflict."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        # (table, column, value) triples whose writes are rejected
        self.reject: set[tuple[str, str, str]] = set()

    def rows(self, table: str) -> list[dict]:
        return self.tables.setdefault(table, [])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        table = request.url.path[len(REST_PREFIX):]
        if request.method == "GET":
            return self._select(table, request.url.params)
        if request.method == "POST":
            return self._write(table, request)
        return httpx.Response(405, json={"message": "method not allowed"})

    def _select(self, table, params) -> httpx.Response:
        filters = {
            k: v[len("eq."):] for k, v in params.items()
            if k not in ("select", "limit") and v.startswith("eq.")
        }
        found = [r for r in self.rows(table) if all(filter_value(r.get(k)) == v for k, v in filters.items())]
        if "limit" in params:
            found = found[: int(params["limit"])]
        return httpx.Response(200, json=found)

    def _write(self, table, request) -> httpx.Response:
        incoming = json.loads(request.content)
        on_conflict = request.url.params.get("on_conflict")
        merge = "resolution=merge-duplicates" in request.headers.get("prefer", "")
        written = []
        for row in incoming:
            for rej_table, column, value in self.reject:
                if rej_table == table and filter_value(row.get(column)) == value:
                    return httpx.Response(
                        409, json={"code": "23505", "message": f"write rejected for {value}"}
                    )
            existing = None
            if on_conflict:
                existing = next((r for r in self.rows(table) if r.get(on_conflict) == row.get(on_conflict)), None)
            if existing is not None:
                if not merge:
                    return httpx.Response(409, json={"code": "23505", "message": "duplicate key"})
                existing.update(row)
                written.append(dict(existing))
            else:
                stored = {"id": str(uuid.uuid4()), **row}
                self.rows(table).append(stored)
                written.append(dict(stored))
        return httpx.Response(201, json=written)


@pytest.fixture()
def fake_store() -> FakePostgrest:
    return FakePostgrest()


@pytest.fixture()
def transport(fake_store) -> httpx.MockTransport:
    return httpx.MockTransport(fake_store.handler)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        SUPABASE_URL="https://lms-demo.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="service-role-key",
        BCRYPT_ROUNDS=4,
    )
