"""GitHub repository listing client."""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError

logger = structlog.get_logger()


class GitHubClient:
    """Fetches a user's most recent public repositories from the GitHub API."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        timeout: float = settings.github_timeout_seconds,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (client_id, client_secret) if client_id and client_secret else None
        self._timeout = timeout
        self._transport = transport

    async def list_repositories(self, username: str, limit: int = 5) -> list[dict[str, Any]]:
        """
        List a user's repositories, oldest-created first.

        Raises:
            GitHubProfileNotFoundError: GitHub could not be reached, or did not
                answer 200 with a list of repositories
        """
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params = {"per_page": limit, "sort": "created:asc"}
        headers = {
            "User-Agent": settings.app_name,
            "Accept": "application/vnd.github+json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    url, params=params, headers=headers, auth=self._auth
                )
        except httpx.HTTPError as e:
            logger.warning("github_request_failed", username=username, error=str(e))
            raise GitHubProfileNotFoundError(username) from e

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                status_code=response.status_code,
            )
            raise GitHubProfileNotFoundError(username)

        try:
            repos = response.json()
        except ValueError:
            repos = None
        if not isinstance(repos, list):
            logger.warning("github_unexpected_payload", username=username)
            raise GitHubProfileNotFoundError(username)
        return repos
