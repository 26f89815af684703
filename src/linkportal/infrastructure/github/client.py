"""Async GitHub REST client with named operations and response caching."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from linkportal.core.config import get_settings
from linkportal.core.logging import get_logger
from linkportal.infrastructure.github.cache import CacheOptions, ResponseCache
from linkportal.infrastructure.github.exceptions import (
    GitHubApiError,
    GitHubConfigurationError,
    GitHubRateLimitError,
    GitHubTransportError,
)

logger = get_logger(__name__)

API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}

# operation name -> (HTTP method, path template)
OPERATIONS: Dict[str, tuple[str, str]] = {
    "users.getById": ("GET", "/user/{id}"),
    "users.getByUsername": ("GET", "/users/{username}"),
    "orgs.getMembershipForUser": ("GET", "/orgs/{org}/memberships/{username}"),
    "orgs.removeMembershipForUser": ("DELETE", "/orgs/{org}/memberships/{username}"),
}

DEFAULT_MAX_AGE_SECONDS = 60


class GitHubClient:
    """Token-authenticated GitHub REST client.

    Calls are addressed by operation name (``users.getById``) with a dict of
    path parameters. GET operations may be served from the response cache
    according to the CacheOptions passed with the call.
    """

    def __init__(
        self,
        api_url: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        cache: ResponseCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_url = (api_url or settings.github_api_url).rstrip("/")
        self._cache = cache if cache is not None else ResponseCache()
        self._refreshing: dict[str, asyncio.Task] = {}
        self._http = httpx.AsyncClient(
            base_url=self._api_url,
            timeout=timeout if timeout is not None else settings.github_timeout_seconds,
            transport=transport
            or httpx.AsyncHTTPTransport(
                retries=retries if retries is not None else settings.github_retries
            ),
        )

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def call(
        self,
        token: str | None,
        operation_name: str,
        params: Optional[Dict[str, Any]] = None,
        cache_options: CacheOptions | None = None,
    ) -> Any:
        """Invoke a named GitHub operation.

        Args:
            token: Token to authenticate with.
            operation_name: Key of OPERATIONS.
            params: Path parameters for the operation.
            cache_options: Cache policy; None bypasses the cache.

        Returns:
            Decoded JSON body, or None for empty responses.

        Raises:
            GitHubConfigurationError: Missing token or unknown operation.
            GitHubRateLimitError: The API rate limit was hit.
            GitHubApiError: The API answered with an error status.
            GitHubTransportError: The request did not complete.
        """
        if not token:
            raise GitHubConfigurationError("GitHub token is required to call the API")
        params = params or {}
        method, path = self._resolve(operation_name, params)

        if method != "GET" or cache_options is None:
            body, _ = await self._request(token, method, path)
            return body

        key = self._cache_key(operation_name, params)
        entry = self._cache.get(key)
        max_age = (
            cache_options.max_age_seconds
            if cache_options.max_age_seconds is not None
            else DEFAULT_MAX_AGE_SECONDS
        )

        if entry is not None:
            if self._cache.age(entry) <= max_age:
                return entry.value
            if cache_options.background_refresh:
                self._schedule_refresh(key, token, path)
                return entry.value

        return await self._fetch_into_cache(key, token, path)

    def invalidate(self, operation_name: str, params: Optional[Dict[str, Any]] = None) -> bool:
        """Drop the cached response of a GET operation.

        Returns:
            True if an entry was removed.
        """
        return self._cache.invalidate(self._cache_key(operation_name, params or {}))

    async def _fetch_into_cache(self, key: str, token: str, path: str) -> Any:
        entry = self._cache.get(key)
        headers = {"If-None-Match": entry.etag} if entry is not None and entry.etag else None
        body, response = await self._request(token, "GET", path, headers=headers)

        if response.status_code == 304 and entry is not None:
            self._cache.touch(key)
            return entry.value

        if body is not None:
            self._cache.set(key, body, etag=response.headers.get("ETag"))
        return body

    def _schedule_refresh(self, key: str, token: str, path: str) -> None:
        if key in self._refreshing:
            return

        async def refresh() -> None:
            try:
                await self._fetch_into_cache(key, token, path)
            except Exception as e:
                logger.warning("Background cache refresh failed", cache_key=key, error=str(e))
            finally:
                self._refreshing.pop(key, None)

        self._refreshing[key] = asyncio.create_task(refresh())

    async def _request(
        self,
        token: str,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> tuple[Any, httpx.Response]:
        request_headers = {"Authorization": f"Bearer {token}", **API_HEADERS}
        if headers:
            request_headers.update(headers)

        try:
            response = await self._http.request(method, path, headers=request_headers)
        except httpx.HTTPError as exc:
            raise GitHubTransportError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 304:
            return None, response

        self._raise_for_status(method, path, response)

        if response.status_code == 204 or not response.content:
            return None, response
        return response.json(), response

    def _raise_for_status(self, method: str, path: str, response: httpx.Response) -> None:
        if response.status_code < 400:
            return

        message = response.reason_phrase
        try:
            payload = response.json()
            if isinstance(payload, dict) and payload.get("message"):
                message = payload["message"]
        except (json.JSONDecodeError, ValueError):
            pass

        if response.status_code in (403, 429) and (
            response.headers.get("X-RateLimit-Remaining") == "0"
            or "rate limit" in message.lower()
        ):
            raise GitHubRateLimitError(
                "GitHub rate limit reached",
                retry_after=self._retry_after(response),
            )

        raise GitHubApiError(
            f"{method} {path} returned {response.status_code}: {message}",
            status_code=response.status_code,
        )

    @staticmethod
    def _retry_after(response: httpx.Response) -> float:
        retry_after_header = response.headers.get("Retry-After")
        reset_header = response.headers.get("X-RateLimit-Reset")
        if retry_after_header:
            try:
                return float(retry_after_header)
            except ValueError:
                pass
        if reset_header:
            try:
                now_epoch = datetime.now(timezone.utc).timestamp()
                return max(float(reset_header) - now_epoch, 1.0)
            except ValueError:
                pass
        return 60.0

    @staticmethod
    def _resolve(operation_name: str, params: Dict[str, Any]) -> tuple[str, str]:
        try:
            method, template = OPERATIONS[operation_name]
        except KeyError:
            raise GitHubConfigurationError(f"Unknown GitHub operation: {operation_name}")
        try:
            path = template.format(
                **{name: quote(str(value), safe="") for name, value in params.items()}
            )
        except KeyError as e:
            raise GitHubConfigurationError(
                f"Missing parameter {e} for GitHub operation {operation_name}"
            )
        return method, path

    @staticmethod
    def _cache_key(operation_name: str, params: Dict[str, Any]) -> str:
        ordered = ",".join(f"{k}={params[k]}" for k in sorted(params))
        return f"{operation_name}:{ordered}"

    async def aclose(self) -> None:
        """Cancel pending refreshes and close the HTTP client."""
        for task in list(self._refreshing.values()):
            task.cancel()
        self._refreshing.clear()
        await self._http.aclose()
