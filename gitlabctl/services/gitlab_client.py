"""
GitLab Client
=============
Thin synchronous wrapper over the GitLab REST API (v4).

Resources used:
    GET    /groups                     search groups (single page)
    GET    /groups/:id/runners         runners owned by a group, by status
    GET    /runners/:id                runner detail (tag_list)
    DELETE /runners/:id                remove a runner
    GET    /runners/:id/jobs           jobs run by a runner, by status

Every call blocks until it returns. Any non-2xx response or transport
failure is raised as GitLabAPIError; nothing is retried.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from gitlabctl.core.constants import AUTH_HEADER, PAGE, PER_PAGE, USER_AGENT
from gitlabctl.core.exceptions import GitLabAPIError

logger = logging.getLogger(__name__)


class GitLabClient:
    """
    Authenticated client for the groups, runners and jobs resources.
    """

    def __init__(
        self,
        api_url: str,
        token: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.headers = {
            AUTH_HEADER: token,
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        client_kwargs: Dict[str, Any] = {
            "base_url": self.api_url,
            "headers": self.headers,
            "follow_redirects": True,
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._http = httpx.Client(**client_kwargs)

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.BaseTransport] = None) -> "GitLabClient":
        return cls(settings.api_url, settings.token, timeout=settings.timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitLabClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue one request and decode the JSON body.

        Returns None for empty bodies (e.g. 204 on DELETE).

        Raises
        ------
        GitLabAPIError
            On HTTP status errors, transport errors and undecodable JSON.
        """
        url = f"{self.api_url}{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self._http.request(method, path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as http_err:
            status_code = http_err.response.status_code
            logger.debug("%s %s failed with HTTP %d", method, url, status_code)
            raise GitLabAPIError(method, url, http_err.response.text.strip() or str(http_err), status_code) from http_err
        except httpx.RequestError as req_err:
            raise GitLabAPIError(method, url, str(req_err) or type(req_err).__name__) from req_err

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GitLabAPIError(method, url, f"Invalid JSON response: {e}", response.status_code) from e

    def _get_list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"per_page": PER_PAGE, "page": PAGE}
        if params:
            query.update(params)
        data = self._request("GET", path, params=query)
        if data is None:
            return []
        if not isinstance(data, list):
            raise GitLabAPIError("GET", f"{self.api_url}{path}", "Expected a JSON array in response")
        return data

    # -- Groups -----------------------------------------------------------

    def search_groups(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """List groups visible to the token, optionally by name substring."""
        params = {"search": search} if search else None
        return self._get_list("/groups", params)

    # -- Runners ----------------------------------------------------------

    def list_group_runners(self, group_id: str, status: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"status": status} if status else None
        return self._get_list(f"/groups/{group_id}/runners", params)

    def get_runner(self, runner_id: int) -> Dict[str, Any]:
        data = self._request("GET", f"/runners/{runner_id}")
        return data or {}

    def delete_runner(self, runner_id: int) -> None:
        self._request("DELETE", f"/runners/{runner_id}")

    # -- Jobs -------------------------------------------------------------

    def list_runner_jobs(self, runner_id: int, status: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"status": status} if status else None
        return self._get_list(f"/runners/{runner_id}/jobs", params)
