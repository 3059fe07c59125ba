# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Async HTTP client for the Prisma Cloud Compute Console API."""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from pathlib import Path

import httpx

from prisma_scan import __version__
from prisma_scan.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ToolDownloadError,
    VersionError,
)

logger = logging.getLogger("prisma_scan.console.client")

AUTHENTICATE_ENDPOINT = "/api/v1/authenticate"
VERSION_ENDPOINT = "/api/v1/version"
TWISTCLI_ENDPOINT = "/api/v1/util/twistcli"

_TIMEOUT = 60.0
_USER_AGENT = f"prisma-scan/{__version__}"
_CHUNK_SIZE = 64 * 1024


def join_url_path(*parts: str) -> str:
    """Join URL path segments with single slashes.

    SaaS Consoles are served under a path prefix, so endpoints are appended
    to the Console URL's path rather than replacing it. A bare ``/`` part is
    dropped to avoid ``//api/v1/...``.
    """
    return "/" + "/".join(part.strip("/") for part in parts if part != "/")


def parse_console_url(url: str) -> httpx.URL:
    """Validate the Console address and return it as an ``httpx.URL``."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid Console address: {url}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError(f"Invalid Console address: {url}")
    return parsed


def _make_executable(path: Path) -> None:
    mode = os.stat(path).st_mode
    os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _error_message(context: str, exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"{context}: HTTP {exc.response.status_code}"
    return f"{context}: {exc}"


class ConsoleClient:
    """Async client for the Console REST API.

    Parameters
    ----------
    console_url:
        Console address, including any path prefix.
    timeout:
        HTTP timeout in seconds.
    proxy:
        Optional proxy URL for all requests.
    """

    def __init__(
        self,
        console_url: str,
        timeout: float = _TIMEOUT,
        proxy: str | None = None,
    ) -> None:
        self.console_url = parse_console_url(console_url)
        self.timeout = timeout
        self.proxy = proxy

    def endpoint(self, path: str) -> str:
        """Return the absolute URL for an API path under the Console URL."""
        return str(self.console_url.copy_with(path=join_url_path(self.console_url.path, path)))

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": _USER_AGENT},
            proxy=self.proxy,
            follow_redirects=True,
        )

    async def authenticate(self, username: str, password: str) -> str:
        """Exchange Console credentials for a bearer token."""
        context = "Failed getting authentication token"
        try:
            async with self._client() as client:
                resp = await client.post(
                    self.endpoint(AUTHENTICATE_ENDPOINT),
                    json={"username": username, "password": password},
                )
            resp.raise_for_status()
            token = resp.json()["token"]
        except httpx.HTTPStatusError as exc:
            raise AuthenticationError(
                _error_message(context, exc), status_code=exc.response.status_code
            ) from exc
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            raise AuthenticationError(_error_message(context, exc)) from exc

        logger.info("Authenticated to Console as %s", username)
        return token

    async def get_version(self, token: str) -> str:
        """Return the Console version as reported, usually a quoted string."""
        context = "Failed getting version"
        try:
            async with self._client() as client:
                resp = await client.get(
                    self.endpoint(VERSION_ENDPOINT),
                    headers={"Authorization": f"Bearer {token}"},
                )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise VersionError(
                _error_message(context, exc), status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            raise VersionError(_error_message(context, exc)) from exc
        return resp.text

    async def download_twistcli(self, token: str, dest: Path) -> Path:
        """Download twistcli to *dest* and mark it executable."""
        context = "Failed downloading twistcli"
        try:
            await asyncio.to_thread(dest.parent.mkdir, parents=True, exist_ok=True)
            async with self._client() as client:
                async with client.stream(
                    "GET",
                    self.endpoint(TWISTCLI_ENDPOINT),
                    headers={"Authorization": f"Bearer {token}"},
                ) as resp:
                    resp.raise_for_status()
                    f = await asyncio.to_thread(open, dest, "wb")
                    try:
                        async for chunk in resp.aiter_bytes(_CHUNK_SIZE):
                            await asyncio.to_thread(f.write, chunk)
                    finally:
                        await asyncio.to_thread(f.close)
            await asyncio.to_thread(_make_executable, dest)
        except httpx.HTTPStatusError as exc:
            raise ToolDownloadError(
                _error_message(context, exc), status_code=exc.response.status_code
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            raise ToolDownloadError(_error_message(context, exc)) from exc

        logger.info("Downloaded twistcli to %s", dest)
        return dest
