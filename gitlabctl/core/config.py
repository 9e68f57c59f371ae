"""
Configuration
=============
Loads environment variables from .env file using python-dotenv, then reads
the config file that lists the API URL and the groups to operate over.

Environment Variables:
    GITLAB_TOKEN         — Personal access token, sent on every request (required)
    GITLABCTL_CONFIG     — Path to the config file (default: config.json)
    GITLAB_API_URL       — Overrides gitlab_api_url from the config file
    GITLAB_GROUP_IDS     — Comma-separated group ids, overrides gitlab_group_ids
    GITLAB_API_TIMEOUT   — Request timeout in seconds (default: httpx default)
    LOG_LEVEL            — Console log level (default: INFO)
    GITLABCTL_LOG_DIR    — When set, logs are also written to a file there

Config File:
    JSON or YAML, for example

        {
          "gitlab_api_url": "https://gitlab.com/api/v4",
          "gitlab_group_ids": [{"id": 111, "name": "team-a"}, {"id": 222}]
        }
"""
import os
import logging
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from gitlabctl.core.exceptions import ConfigError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("GITLABCTL_LOG_DIR")


class Settings(BaseModel):
    api_url: str
    token: str
    group_ids: List[str]
    timeout: Optional[float] = None

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")


def _read_config_file(path: str) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"'{path}' must contain a mapping at the top level")
    return data


def _parse_group_ids(entries) -> List[str]:
    """Accept either [{"id": 1, ...}, ...] or a plain list of ids."""
    if not isinstance(entries, list):
        raise ConfigError("'gitlab_group_ids' must be a list")

    group_ids = []
    for entry in entries:
        value = entry.get("id") if isinstance(entry, dict) else entry
        if value is None or str(value).strip() == "":
            continue
        group_ids.append(str(value).strip())
    return group_ids


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment and the config file.

    Raises ConfigError before any network call when the token, the config
    file, the API URL or the group list is missing.
    """
    token = os.getenv("GITLAB_TOKEN", "").strip()
    if not token:
        raise ConfigError("Missing personal GitLab token as env variable [GITLAB_TOKEN]!!")

    env_api_url = os.getenv("GITLAB_API_URL", "").strip()
    env_group_ids = os.getenv("GITLAB_GROUP_IDS", "").strip()

    path = config_path or os.getenv("GITLABCTL_CONFIG") or DEFAULT_CONFIG_FILE
    data: dict = {}
    if os.path.isfile(path):
        logger.debug("Reading config file %s", os.path.abspath(path))
        data = _read_config_file(path)
    elif config_path or not (env_api_url and env_group_ids):
        raise ConfigError(f"Missing '{path}' file!")

    api_url = env_api_url or str(data.get("gitlab_api_url") or "").strip()
    if not api_url:
        raise ConfigError(
            "Missing GitLab API URL as 'gitlab_api_url' in config or env variable "
            "[GITLAB_API_URL]!! E.g. 'https://gitlab.com/api/v4'"
        )

    if env_group_ids:
        group_ids = [g.strip() for g in env_group_ids.split(",") if g.strip()]
    else:
        group_ids = _parse_group_ids(data.get("gitlab_group_ids") or [])
    if not group_ids:
        raise ConfigError(
            "Missing GitLab group IDs as 'gitlab_group_ids' in config or env variable "
            "[GITLAB_GROUP_IDS]!! E.g. '111,222'"
        )

    timeout_raw = os.getenv("GITLAB_API_TIMEOUT", "").strip()
    timeout = None
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ConfigError(f"Invalid GITLAB_API_TIMEOUT: {timeout_raw}") from e

    return Settings(api_url=api_url, token=token, group_ids=group_ids, timeout=timeout)
