"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Backend:
    Tests never reach a real Supabase project. FakeSupabase answers the
    REST and auth endpoints through httpx.MockTransport and enforces the
    same ownership rule the production row-level policies do: a token can
    only see, update and delete rows whose user_id is its own user.
"""

import json
from collections.abc import AsyncGenerator, Generator
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx
import pytest

from notekeeper.core.auth import Principal, Session
from notekeeper.core.config import get_app_config, get_settings
from notekeeper.core.supabase import SupabaseClient
from notekeeper.repositories.note import NoteRepository
from notekeeper.services.note import NoteService

BASE_URL = "https://test-project.supabase.co"
ANON_KEY = "anon-key"
TABLE = "appnotes"


# =============================================================================
# Fake backend
# =============================================================================


class FakeSupabase:
    """In-memory stand-in for the notes table and the auth endpoints."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.users: dict[str, dict[str, str]] = {}
        self.tokens: dict[str, str] = {}
        self.requests: list[httpx.Request] = []
        self.fail_next: dict[str, tuple[int, dict[str, Any]]] = {}
        self.raise_next: dict[str, Exception] = {}
        self._next_id = 1

    def add_user(self, user_id: str, email: str, password: str = "secret") -> str:
        token = f"token-{user_id}"
        self.users[email] = {"id": user_id, "password": password}
        self.tokens[token] = user_id
        return token

    def seed(self, user_id: str, title: str, description: str | None = "", created_at: str | None = None) -> dict:
        row = {
            "id": self._next_id,
            "title": title,
            "description": description,
            "user_id": user_id,
            "created_at": created_at or datetime.now().astimezone().isoformat(),
        }
        self.rows[row["id"]] = row
        self._next_id += 1
        return dict(row)

    def table_requests(self, method: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.url.path.startswith(f"/rest/v1/{TABLE}") and (method is None or r.method == method)
        ]

    # -- request handling --------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method in self.raise_next:
            raise self.raise_next.pop(request.method)
        if request.method in self.fail_next:
            status, body = self.fail_next.pop(request.method)
            return httpx.Response(status, json=body)

        path = request.url.path
        if path.startswith("/auth/v1/"):
            return self._auth(request, path.removeprefix("/auth/v1/"))
        if path == f"/rest/v1/{TABLE}":
            return self._table(request)
        return httpx.Response(404, json={"message": f"relation \"{path}\" does not exist"})

    def _caller(self, request: httpx.Request) -> str | None:
        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        return self.tokens.get(token)

    def _auth(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        if endpoint == "token":
            body = json.loads(request.content)
            user = self.users.get(body.get("email"))
            if user is None or user["password"] != body.get("password"):
                return httpx.Response(400, json={"error_description": "Invalid login credentials"})
            return httpx.Response(200, json={
                "access_token": f"token-{user['id']}",
                "token_type": "bearer",
                "user": {"id": user["id"], "email": body["email"]},
            })

        caller = self._caller(request)
        if caller is None:
            return httpx.Response(401, json={"msg": "invalid JWT"})
        if endpoint == "user":
            email = next(e for e, u in self.users.items() if u["id"] == caller)
            return httpx.Response(200, json={"id": caller, "email": email})
        if endpoint == "logout":
            return httpx.Response(204)
        return httpx.Response(404, json={"msg": "not found"})

    def _matches(self, row: dict[str, Any], params: httpx.QueryParams) -> bool:
        for key, value in params.items():
            if key in ("select", "order"):
                continue
            if not value.startswith("eq.") or str(row.get(key)) != value[3:]:
                return False
        return True

    def _table(self, request: httpx.Request) -> httpx.Response:
        caller = self._caller(request)
        params = request.url.params
        visible = [
            row for row in self.rows.values()
            if row["user_id"] == caller and self._matches(row, params)
        ]

        if request.method == "GET":
            if params.get("order") == "created_at.desc":
                visible.sort(key=lambda r: datetime.fromisoformat(r["created_at"]), reverse=True)
            return httpx.Response(200, json=visible)

        if request.method == "POST":
            created = []
            for values in json.loads(request.content):
                if values.get("user_id") != caller:
                    return httpx.Response(403, json={
                        "code": "42501",
                        "message": f"new row violates row-level security policy for table \"{TABLE}\"",
                    })
                created.append(self.seed(
                    values["user_id"],
                    values["title"],
                    values.get("description", ""),
                    values.get("created_at"),
                ))
            return httpx.Response(201, json=created)

        if request.method == "PATCH":
            values = json.loads(request.content)
            for row in visible:
                row.update(values)
            return httpx.Response(200, json=[dict(r) for r in visible])

        if request.method == "DELETE":
            for row in visible:
                del self.rows[row["id"]]
            return httpx.Response(200, json=visible)

        return httpx.Response(405, json={"message": "method not allowed"})


# =============================================================================
# Client / service fixtures
# =============================================================================


@pytest.fixture
def fake_backend() -> FakeSupabase:
    """Fake Supabase with two users, u1 and u2."""
    backend = FakeSupabase()
    backend.add_user("u1", "u1@example.com")
    backend.add_user("u2", "u2@example.com")
    return backend


@pytest.fixture
async def supabase_client(fake_backend: FakeSupabase) -> AsyncGenerator[SupabaseClient, None]:
    """SupabaseClient routed to the fake backend."""
    client = SupabaseClient(
        base_url=BASE_URL,
        anon_key=ANON_KEY,
        timeout=5.0,
        transport=httpx.MockTransport(fake_backend.handle),
    )
    yield client
    await client.close()


@pytest.fixture
def note_repo(supabase_client: SupabaseClient) -> NoteRepository:
    return NoteRepository(supabase_client, table=TABLE)


@pytest.fixture
def note_service(supabase_client: SupabaseClient, note_repo: NoteRepository) -> NoteService:
    return NoteService(supabase_client, repo=note_repo)


@pytest.fixture
def session_u1() -> Session:
    return Session(access_token="token-u1", principal=Principal(id="u1", email="u1@example.com"))


@pytest.fixture
def session_u2() -> Session:
    return Session(access_token="token-u2", principal=Principal(id="u2", email="u2@example.com"))


@pytest.fixture
def anonymous_session() -> Session:
    return Session.anonymous()


# =============================================================================
# Project tree fixtures
# =============================================================================


CONFIG_FILES = {
    "application.yaml": 'name: "NoteKeeper"\nversion: "0.1.0"\nenvironment: "test"\n',
    "supabase.yaml": f'url: "{BASE_URL}/"\nnotes_table: "{TABLE}"\ntimeout_seconds: 3\n',
    "feedback.yaml": 'presenter: "log"\nalert_title: "Oops"\n',
    "logging.yaml": (
        'level: "DEBUG"\n'
        'format: "json"\n'
        "handlers:\n"
        "  console:\n"
        "    enabled: true\n"
        "  file:\n"
        "    enabled: false\n"
        '    path: "logs/system.jsonl"\n'
        "    max_bytes: 1048576\n"
        "    backup_count: 2\n"
    ),
}


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """
    Build a throwaway project tree and run the test from inside it.

    Contains the .project_root marker, every config/settings YAML file and
    a config/.env with a test anon key. Config caches are cleared on both
    sides of the test.
    """
    (tmp_path / ".project_root").touch()
    settings_dir = tmp_path / "config" / "settings"
    settings_dir.mkdir(parents=True)
    for name, content in CONFIG_FILES.items():
        (settings_dir / name).write_text(content)
    (tmp_path / "config" / ".env").write_text(
        f"SUPABASE_ANON_KEY={ANON_KEY}\nSUPABASE_EMAIL=u1@example.com\n"
    )

    for var in ("SUPABASE_ANON_KEY", "SUPABASE_EMAIL", "SUPABASE_PASSWORD"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
    get_app_config.cache_clear()
