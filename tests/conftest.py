"""Pytest configuration and fixtures."""

import copy
import os
from collections.abc import Callable, Generator
from contextlib import ExitStack
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_SIGNING_KEY_JWK", "test-signing-key-jwk")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("EMAIL_FROM_ADDRESS", "JAZBAA <noreply@jazbaa.test>")
os.environ.setdefault("CONTACT_INBOX_ADDRESS", "team@jazbaa.test")
os.environ.setdefault("FRONTEND_URL", "https://jazbaa.test")

# Modules that bind get_supabase_client at import time
SUPABASE_CLIENT_TARGETS = (
    "src.core.supabase.get_supabase_client",
    "src.services.invite_service.get_supabase_client",
    "src.services.asset_service.get_supabase_client",
    "src.services.profile_publish_service.get_supabase_client",
    "src.services.startup_service.get_supabase_client",
    "src.services.comment_service.get_supabase_client",
    "src.services.like_service.get_supabase_client",
    "src.services.user_service.get_supabase_client",
)


class FakeResponse:
    """Mimics the APIResponse returned by postgrest execute()."""

    def __init__(self, data: Any) -> None:
        self.data = data


class FakeQuery:
    """In-memory stand-in for a postgrest query builder."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table = table
        self.operation = "select"
        self.payload: Any = None
        self.filters: list[tuple[str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.row_limit: int | None = None
        self.single = False
        self.on_conflict = "id"
        self.ignore_duplicates = False

    def select(self, *columns: str, **kwargs: Any) -> "FakeQuery":
        self.operation = "select"
        return self

    def insert(self, data: Any) -> "FakeQuery":
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, data: dict[str, Any]) -> "FakeQuery":
        self.operation = "update"
        self.payload = data
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    def upsert(self, data: Any, on_conflict: str = "id", ignore_duplicates: bool = False) -> "FakeQuery":
        self.operation = "upsert"
        self.payload = data
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.row_limit = count
        return self

    def maybe_single(self) -> "FakeQuery":
        self.single = True
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> FakeResponse | None:
        self.db.calls.append((self.table, self.operation))
        if self.operation != "select" and self.table in self.db.failing_tables:
            raise RuntimeError(f"write to {self.table} failed")

        rows = self.db.tables.setdefault(self.table, [])

        if self.operation == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in items:
                row = {"id": str(uuid4()), **copy.deepcopy(item)}
                rows.append(row)
                created.append(copy.deepcopy(row))
            return FakeResponse(created)

        if self.operation == "upsert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            written = []
            for item in items:
                existing = next(
                    (row for row in rows if row.get(self.on_conflict) == item.get(self.on_conflict)),
                    None,
                )
                if existing is not None:
                    if self.ignore_duplicates:
                        continue
                    existing.clear()
                    existing.update(copy.deepcopy(item))
                    written.append(copy.deepcopy(existing))
                else:
                    rows.append(copy.deepcopy(item))
                    written.append(copy.deepcopy(item))
            return FakeResponse(written)

        matched = [row for row in rows if self._matches(row)]

        if self.operation == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([copy.deepcopy(row) for row in matched])

        if self.operation == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse([copy.deepcopy(row) for row in matched])

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self.row_limit is not None:
            matched = matched[: self.row_limit]

        if self.single:
            # Newer supabase clients return None instead of an empty response
            return FakeResponse(copy.deepcopy(matched[0])) if matched else None

        return FakeResponse([copy.deepcopy(row) for row in matched])


class FakeRpc:
    """Runs the Postgres functions the backend calls through client.rpc()."""

    def __init__(self, db: "FakeSupabase", name: str, params: dict[str, Any]) -> None:
        self.db = db
        self.name = name
        self.params = params

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.name, "rpc"))
        params = self.params

        if self.name in ("startup_array_add", "startup_array_remove"):
            for row in self.db.tables.get("startups", []):
                if row.get("slug") != params["p_slug"]:
                    continue
                values = list(row.get(params["p_column"]) or [])
                if self.name == "startup_array_add" and params["p_value"] not in values:
                    values.append(params["p_value"])
                if self.name == "startup_array_remove":
                    values = [value for value in values if value != params["p_value"]]
                row[params["p_column"]] = values
            return FakeResponse(None)

        if self.name == "increment_startup_likes":
            rows = self.db.tables.setdefault("startup_likes", [])
            row = next((row for row in rows if row["slug"] == params["p_slug"]), None)
            if row is None:
                row = {"slug": params["p_slug"], "likes": 0}
                rows.append(row)
            row["likes"] = max(row["likes"] + params["p_delta"], 0)
            return FakeResponse(row["likes"])

        raise RuntimeError(f"unknown function {self.name}")


class FakeBucket:
    """In-memory storage bucket."""

    def __init__(self, db: "FakeSupabase", bucket: str) -> None:
        self.db = db
        self.bucket = bucket

    def upload(self, path: str, file: bytes, file_options: dict[str, str] | None = None) -> Any:
        if self.db.storage_fails:
            raise RuntimeError("storage unavailable")
        self.db.files[path] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"https://test-project.supabase.co/storage/v1/object/public/{self.bucket}/{path}"


class FakeSupabase:
    """In-memory Supabase client covering the calls the backend makes."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.files: dict[str, bytes] = {}
        self.failing_tables: set[str] = set()
        self.storage_fails = False
        self.calls: list[tuple[str, str]] = []
        self.storage = SimpleNamespace(from_=lambda bucket: FakeBucket(self, bucket))
        self.auth = SimpleNamespace(
            admin=SimpleNamespace(
                create_user=self._create_auth_user,
                delete_user=MagicMock(),
            )
        )

    def _create_auth_user(self, attributes: dict[str, Any]) -> Any:
        return SimpleNamespace(user=SimpleNamespace(id=uuid4(), email=attributes["email"]))

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict[str, Any]) -> FakeRpc:
        return FakeRpc(self, name, params)

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.get(table, [])


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def fake_supabase() -> Generator[FakeSupabase, None, None]:
    """Provide an in-memory Supabase client patched into every service.

    Yields:
        FakeSupabase: The shared fake client.
    """
    fake = FakeSupabase()
    with ExitStack() as stack:
        for target in SUPABASE_CLIENT_TARGETS:
            stack.enter_context(patch(target, return_value=fake))
        yield fake


@pytest.fixture
def mock_resend() -> Generator[MagicMock, None, None]:
    """Patch Resend so no email leaves the test run.

    Yields:
        MagicMock: The patched resend.Emails.send.
    """
    with patch("resend.Emails.send", return_value={"id": "email-test-id"}) as mock_send:
        yield mock_send


@pytest.fixture
def client(fake_supabase: FakeSupabase, mock_resend: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client backed by the in-memory Supabase fake.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def login_as(fake_supabase: FakeSupabase) -> Callable[..., Any]:
    """Authenticate requests as a freshly created platform user.

    Returns a function taking the role name that seeds the users table
    and overrides the JWT dependency.
    """
    from src.api.deps import get_current_user
    from src.main import app
    from src.schemas.auth import UserContext

    def _login(role: str, display_name: str | None = None) -> UserContext:
        uid = uuid4()
        row = {
            "uid": str(uid),
            "email": f"{role}-{uid.hex[:6]}@jazbaa.test",
            "role": role,
            "display_name": display_name or f"Test {role.title()}",
            "college_id": "college-1" if role == "college" else None,
            "investor_id": f"inv-{uid.hex[:8]}" if role == "investor" else None,
        }
        fake_supabase.tables.setdefault("users", []).append(row)

        user = UserContext(user_id=uid, email=row["email"])
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login
