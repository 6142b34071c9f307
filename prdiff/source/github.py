"""Async GitHub REST API content source."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator
from urllib.parse import quote

import httpx

from prdiff.changes.types import FileEntry
from prdiff.config.schema import GitHubConfig
from prdiff.core.errors import ContentSourceError, GitHubAPIError

logger = logging.getLogger(__name__)

_JSON_MEDIA_TYPE = "application/vnd.github+json"
_RAW_MEDIA_TYPE = "application/vnd.github.raw+json"


class GitHubContentSource:
    """
    Content source backed by the GitHub REST API.

    Features:
    - Async-native with httpx, client created lazily
    - Retry with exponential backoff on rate limits, 5xx and timeouts
    - Pagination of pull request files
    """

    API_VERSION = "2022-11-28"
    MAX_PER_PAGE = 100

    def __init__(self, config: GitHubConfig, repository: str | None = None):
        repo = repository or config.repository
        if not repo:
            raise ContentSourceError("No GitHub repository configured (expected 'owner/name')")

        self._config = config
        self._repository = repo
        self._base_url = config.api_url.rstrip("/")
        self._http: httpx.AsyncClient | None = None

    @property
    def repository(self) -> str:
        return self._repository

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Lazily create HTTP client."""
        if self._http is None or self._http.is_closed:
            headers = {
                "Accept": _JSON_MEDIA_TYPE,
                "User-Agent": "prdiff",
                "X-GitHub-Api-Version": self.API_VERSION,
            }
            token = self._config.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
            else:
                logger.debug("No GitHub token configured; using unauthenticated requests")

            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout),
                headers=headers,
                follow_redirects=False,
            )
        return self._http

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http and not self._http.is_closed:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "GitHubContentSource":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _repo_path(self, suffix: str) -> str:
        return f"/repos/{self._repository}{suffix}"

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        accept: str | None = None,
        retry: int = 0,
    ) -> httpx.Response:
        """
        Send a request with retry logic.

        Returns the successful response.
        Raises GitHubAPIError on failure.
        """
        client = await self._ensure_client()
        url = f"{self._base_url}{path}"
        headers = {"Accept": accept} if accept else None
        max_retries = self._config.max_retries
        backoff = self._config.retry_backoff

        logger.debug("%s %s params=%s (attempt %d)", method, url, params, retry + 1)

        try:
            response = await client.request(method, url, params=params, headers=headers)
        except httpx.TimeoutException:
            if retry < max_retries:
                await asyncio.sleep(backoff ** retry)
                return await self._send(method, path, params, accept, retry + 1)
            raise GitHubAPIError(0, "Request timeout")
        except httpx.RequestError as e:
            raise GitHubAPIError(0, f"Request failed: {e}") from e

        # Rate limiting (GitHub uses 429, and 403 with remaining=0)
        rate_limited = response.status_code == 429 or (
            response.status_code == 403
            and response.headers.get("X-RateLimit-Remaining") == "0"
        )
        if rate_limited:
            if retry < max_retries:
                retry_after = int(response.headers.get("Retry-After", 5))
                logger.warning("GitHub rate limit hit, retrying in %ds", min(retry_after, 60))
                await asyncio.sleep(min(retry_after, 60))
                return await self._send(method, path, params, accept, retry + 1)
            raise GitHubAPIError(response.status_code, "Rate limit exceeded")

        if response.status_code >= 500 and retry < max_retries:
            await asyncio.sleep(backoff ** retry)
            return await self._send(method, path, params, accept, retry + 1)

        if response.status_code >= 400:
            try:
                body = response.json()
                message = body.get("message", str(body)) if isinstance(body, dict) else str(body)
            except ValueError:
                body = None
                message = response.text
            raise GitHubAPIError(response.status_code, message, body)

        return response

    async def get(self, path: str, **params: Any) -> Any:
        """GET request returning parsed JSON."""
        response = await self._send("GET", path, params=params or None)
        return response.json()

    async def paginate(self, path: str, limit: int, **params: Any) -> AsyncIterator[dict[str, Any]]:
        """
        Auto-paginate through list results.

        Yields individual items up to `limit` total.
        """
        per_page = min(limit, self.MAX_PER_PAGE)
        page = 1
        count = 0

        while count < limit:
            params["page"] = page
            params["per_page"] = per_page

            results = await self.get(path, **params)
            if not results:
                break

            for item in results:
                yield item
                count += 1
                if count >= limit:
                    break

            if len(results) < per_page:
                break

            page += 1

    # =========================================================================
    # ContentSource protocol
    # =========================================================================

    async def file_exists(self, commit: str, path: str) -> bool:
        """Check whether path existed at commit (404 means no)."""
        try:
            await self._send(
                "GET",
                self._repo_path(f"/contents/{quote(path)}"),
                params={"ref": commit},
            )
        except GitHubAPIError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    async def get_file_content(self, commit: str, path: str) -> str:
        """Fetch the raw text of path at commit."""
        response = await self._send(
            "GET",
            self._repo_path(f"/contents/{quote(path)}"),
            params={"ref": commit},
            accept=_RAW_MEDIA_TYPE,
        )
        return response.text

    async def list_pull_request_files(self, number: int) -> list[FileEntry]:
        """List changed files of a pull request."""
        return [
            FileEntry.model_validate(item)
            async for item in self.paginate(
                self._repo_path(f"/pulls/{number}/files"), limit=self._config.max_files
            )
        ]

    async def get_pull_request(self, number: int) -> dict[str, Any]:
        """Get pull request metadata (used for its base commit)."""
        return await self.get(self._repo_path(f"/pulls/{number}"))
