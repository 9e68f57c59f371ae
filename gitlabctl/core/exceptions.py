"""
Exceptions
==========
Every failure in gitlabctl is terminal for the current invocation. Each
exception carries the process exit code the CLI returns for it.

    ConfigError      — missing token, config file, API URL or group ids (1)
    ValidationError  — bad operator input such as a non-numeric id (1)
    AbortedError     — operator declined a confirmation prompt (1)
    GitLabAPIError   — HTTP or transport failure talking to the API (10)
"""
from typing import Optional

from gitlabctl.core.constants import EXIT_CONFIG_ERROR, EXIT_TRANSPORT_ERROR


class GitLabCtlError(Exception):
    exit_code = EXIT_CONFIG_ERROR


class ConfigError(GitLabCtlError):
    pass


class ValidationError(GitLabCtlError):
    pass


class AbortedError(GitLabCtlError):
    pass


class GitLabAPIError(GitLabCtlError):
    """Raised when a request to the GitLab API fails."""

    exit_code = EXIT_TRANSPORT_ERROR

    def __init__(self, method: str, url: str, detail: str, status_code: Optional[int] = None):
        self.method = method
        self.url = url
        self.detail = detail
        self.status_code = status_code
        prefix = f"HTTP {status_code}" if status_code is not None else "request failed"
        super().__init__(f"{method} {url} {prefix}: {detail}")
