import asyncio
import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class TraduoraAuthError(Exception):
    """Raised when Traduora rejects the configured credentials."""


class TraduoraNotFoundError(Exception):
    """Raised when a project, term or locale is not found (404)."""


@dataclass
class TraduoraTerm:
    id: str
    value: str


@dataclass
class TraduoraTranslation:
    term_id: str
    value: str


class TraduoraClient:
    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._username = username
        self._password = password
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            timeout=30.0,
            transport=transport,
        )
        self._token: str | None = None

    async def close(self) -> None:
        await self._client.aclose()

    async def _login(self) -> str:
        """Obtain a bearer token with the password grant."""
        resp = await self._client.post(
            f"{API_PREFIX}/auth/token",
            json={
                "grant_type": "password",
                "username": self._username,
                "password": self._password,
            },
        )
        if resp.status_code in (400, 401, 403):
            raise TraduoraAuthError(
                f"Login failed for Traduora instance {self._client.base_url} (user: {self._username})"
            )
        resp.raise_for_status()
        logger.info("Logged in to Traduora as %s", self._username)
        return resp.json()["access_token"]

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Make an authenticated request with token refresh and rate-limit handling."""
        if self._token is None:
            self._token = await self._login()

        resp = await self._send(method, url, **kwargs)

        if resp.status_code == 401:
            logger.info("Traduora token expired, logging in again")
            self._token = await self._login()
            resp = await self._send(method, url, **kwargs)

        if resp.status_code == 429:
            retry_after = int(resp.headers.get("Retry-After", "5"))
            logger.warning("Traduora rate limited, retrying after %d seconds", retry_after)
            await asyncio.sleep(retry_after)
            resp = await self._send(method, url, **kwargs)

        if resp.status_code == 404:
            raise TraduoraNotFoundError(f"Not found: {method} {url}")
        resp.raise_for_status()
        return resp

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._token}"}
        return await self._client.request(method, url, headers=headers, **kwargs)

    async def list_terms(self, project_id: str) -> list[TraduoraTerm]:
        resp = await self._request("GET", f"{API_PREFIX}/projects/{project_id}/terms")
        return [TraduoraTerm(id=t["id"], value=t["value"]) for t in resp.json()["data"]]

    async def list_translations(
        self, project_id: str, locale: str
    ) -> list[TraduoraTranslation]:
        resp = await self._request(
            "GET", f"{API_PREFIX}/projects/{project_id}/translations/{locale}"
        )
        return [
            TraduoraTranslation(term_id=t["termId"], value=t["value"])
            for t in resp.json()["data"]
        ]

    async def create_term(self, project_id: str, value: str) -> TraduoraTerm:
        """Create a term and return it with its new id."""
        resp = await self._request(
            "POST", f"{API_PREFIX}/projects/{project_id}/terms", json={"value": value}
        )
        data = resp.json()["data"]
        return TraduoraTerm(id=data["id"], value=data["value"])

    async def delete_term(self, project_id: str, term_id: str) -> None:
        await self._request("DELETE", f"{API_PREFIX}/projects/{project_id}/terms/{term_id}")

    async def edit_translation(
        self, project_id: str, locale: str, term_id: str, value: str
    ) -> None:
        await self._request(
            "PATCH",
            f"{API_PREFIX}/projects/{project_id}/translations/{locale}",
            json={"termId": term_id, "value": value},
        )
