"""GitHub repository lookup used by profile pages."""

from typing import Any
from urllib.parse import quote

import httpx

from devconnector.config import Settings, get_settings
from devconnector.errors import InternalError, NotFound
from devconnector.logging import get_logger

logger = get_logger("github")

# Fixed listing parameters: five repositories, oldest first
REPOS_PER_PAGE = 5
REPOS_SORT = "created:asc"
USER_AGENT = "DevConnector/1.0"


class GitHubRepoLookup:
    """
    Relays a user's public repository listing from the GitHub REST API.

    The upstream body is returned untouched. A non-200 answer becomes
    ``NotFound`` and a transport failure becomes ``InternalError``; nothing
    is cached or retried.

    Usage:
        lookup = GitHubRepoLookup()
        repos = lookup.get_user_repos("octocat")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"per_page": REPOS_PER_PAGE, "sort": REPOS_SORT}
        if self.settings.github_client_id and self.settings.github_client_secret:
            params["client_id"] = self.settings.github_client_id
            params["client_secret"] = self.settings.github_client_secret
        return params

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }

    def get_user_repos(self, username: str) -> Any:
        """Fetch the repository listing for ``username``."""
        url = f"{self.settings.github_api_base.rstrip('/')}/users/{quote(username, safe='')}/repos"

        try:
            with httpx.Client(
                timeout=self.settings.github_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.get(url, params=self._params(), headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("github_lookup_failed", username=username, error=str(e))
            raise InternalError() from e

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                status=response.status_code,
            )
            raise NotFound("No Github profile found", status_code=404)

        try:
            return response.json()
        except ValueError as e:
            logger.error("github_invalid_body", username=username, error=str(e))
            raise InternalError() from e


__all__ = ["GitHubRepoLookup", "REPOS_PER_PAGE", "REPOS_SORT"]
