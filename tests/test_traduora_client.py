"""Tests for the Traduora client and the remote snapshot loader."""

import asyncio
import json

import httpx
import pytest

from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.loaders.remote import fetch_remote
from traduora_sync.sync.records import RemoteRecord
from traduora_sync.traduora.client import (
    TraduoraAuthError,
    TraduoraClient,
    TraduoraNotFoundError,
)

PROJECT = "proj-1"


class FakeTraduora:
    """Minimal in-memory Traduora API served through httpx.MockTransport."""

    def __init__(self):
        self.terms = [{"id": "t1", "value": "menu.open"}, {"id": "t2", "value": "menu.save"}]
        self.translations = [
            {"termId": "t1", "value": "Open"},
            {"termId": "gone", "value": "Orphan"},
        ]
        self.requests: list[httpx.Request] = []
        self.valid_tokens: set[str] = set()
        self.logins = 0
        self.reject_login = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/v1/auth/token":
            if self.reject_login:
                return httpx.Response(401)
            self.logins += 1
            token = f"token-{self.logins}"
            self.valid_tokens.add(token)
            return httpx.Response(200, json={"access_token": token})

        if request.headers.get("Authorization") not in {f"Bearer {t}" for t in self.valid_tokens}:
            return httpx.Response(401)

        if path == f"/api/v1/projects/{PROJECT}/terms" and request.method == "GET":
            return httpx.Response(200, json={"data": self.terms})
        if path == f"/api/v1/projects/{PROJECT}/terms" and request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(201, json={"data": {"id": "t9", "value": body["value"]}})
        if path == f"/api/v1/projects/{PROJECT}/translations/en" and request.method == "GET":
            return httpx.Response(200, json={"data": self.translations})
        if path == f"/api/v1/projects/{PROJECT}/translations/en" and request.method == "PATCH":
            return httpx.Response(200, json={"data": json.loads(request.content)})
        if path.startswith(f"/api/v1/projects/{PROJECT}/terms/") and request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(404)

    def client(self) -> TraduoraClient:
        return TraduoraClient(
            "http://traduora.test", "user", "pwd", transport=httpx.MockTransport(self.handler)
        )


def test_fetch_remote_joins_terms_and_translations():
    fake = FakeTraduora()

    async def run():
        client = fake.client()
        try:
            return await fetch_remote(client, PROJECT, "en")
        finally:
            await client.close()

    records = asyncio.run(run())
    assert records == [
        RemoteRecord(key="menu.open", remote_id="t1", text="Open"),
        RemoteRecord(key="menu.save", remote_id="t2", text=""),
    ]


def test_login_once_and_send_bearer_token():
    fake = FakeTraduora()

    async def run():
        client = fake.client()
        try:
            await client.list_terms(PROJECT)
            await client.list_terms(PROJECT)
        finally:
            await client.close()

    asyncio.run(run())
    logins = [r for r in fake.requests if r.url.path == "/api/v1/auth/token"]
    assert len(logins) == 1
    assert fake.requests[-1].headers["Authorization"] == "Bearer token-1"


def test_relogin_after_expired_token():
    fake = FakeTraduora()

    async def run():
        client = fake.client()
        try:
            await client.list_terms(PROJECT)
            fake.valid_tokens.clear()  # expire token-1
            return await client.list_terms(PROJECT)
        finally:
            await client.close()

    terms = asyncio.run(run())
    assert [t.id for t in terms] == ["t1", "t2"]
    assert fake.logins == 2
    assert fake.requests[-1].headers["Authorization"] == "Bearer token-2"


def test_rejected_login():
    fake = FakeTraduora()
    fake.reject_login = True

    async def run():
        client = fake.client()
        try:
            await client.list_terms(PROJECT)
        finally:
            await client.close()

    with pytest.raises(TraduoraAuthError):
        asyncio.run(run())


def test_not_found():
    fake = FakeTraduora()

    async def run():
        client = fake.client()
        try:
            await client.list_terms("other-project")
        finally:
            await client.close()

    with pytest.raises(TraduoraNotFoundError):
        asyncio.run(run())


def test_fetch_remote_wraps_errors():
    fake = FakeTraduora()
    fake.reject_login = True

    async def run():
        client = fake.client()
        try:
            await fetch_remote(client, PROJECT, "en")
        finally:
            await client.close()

    with pytest.raises(SnapshotError, match=PROJECT):
        asyncio.run(run())


def test_mutations():
    fake = FakeTraduora()

    async def run():
        client = fake.client()
        try:
            term = await client.create_term(PROJECT, "menu.new")
            await client.edit_translation(PROJECT, "en", term.id, "New")
            await client.delete_term(PROJECT, "t2")
            return term
        finally:
            await client.close()

    term = asyncio.run(run())
    assert term.id == "t9"
    assert term.value == "menu.new"
    methods = [(r.method, r.url.path) for r in fake.requests if r.url.path != "/api/v1/auth/token"]
    assert methods == [
        ("POST", f"/api/v1/projects/{PROJECT}/terms"),
        ("PATCH", f"/api/v1/projects/{PROJECT}/translations/en"),
        ("DELETE", f"/api/v1/projects/{PROJECT}/terms/t2"),
    ]
    patch = next(r for r in fake.requests if r.method == "PATCH")
    assert json.loads(patch.content) == {"termId": "t9", "value": "New"}


def test_retry_after_rate_limit():
    fake = FakeTraduora()
    original = fake.handler
    limited = []

    def handler(request):
        if request.url.path.endswith("/terms") and not limited:
            limited.append(request)
            return httpx.Response(429, headers={"Retry-After": "0"})
        return original(request)

    async def run():
        client = TraduoraClient(
            "http://traduora.test", "user", "pwd", transport=httpx.MockTransport(handler)
        )
        try:
            return await client.list_terms(PROJECT)
        finally:
            await client.close()

    terms = asyncio.run(run())
    assert [t.value for t in terms] == ["menu.open", "menu.save"]
    assert len(limited) == 1
    term_requests = [r for r in fake.requests if r.url.path.endswith("/terms")]
    assert len(term_requests) == 1
