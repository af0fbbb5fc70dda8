"""
Settings read from the environment, with `.env` support.
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_OPENAI_MODEL = "gpt-4-0125-preview"
DEFAULT_JIRA_HOST = "block.atlassian.net"

# field name -> environment variables, first non-empty wins
ENV_VARS = {
    "openai_api_key": ("OPENAI_API_KEY",),
    "openai_model": ("OPENAI_MODEL",),
    "github_token": ("GITHUB_TOKEN", "GH_TOKEN"),
    "github_username": ("GITHUB_USERNAME",),
    "jira_username": ("JIRA_USERNAME",),
    "jira_api_key": ("JIRA_API_KEY",),
    "jira_host": ("JIRA_HOST",),
}


class ConfigError(RuntimeError):
    """A setting needed by the current command is missing."""


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    github_token: Optional[str] = None
    github_username: Optional[str] = None
    jira_username: Optional[str] = None
    jira_api_key: Optional[str] = None
    jira_host: str = DEFAULT_JIRA_HOST

    def require(self, *names: str) -> None:
        """Raise ConfigError listing every named setting that is unset."""
        missing = [ENV_VARS[name][0] for name in names if not getattr(self, name)]
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set them in .env or as environment variables."
            )


def _lookup(environ: Mapping[str, str], names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return None


def load_settings(environ: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> Settings:
    """Build Settings from `environ`, or from os.environ after loading `.env`."""
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    values = {}
    for field in fields(Settings):
        value = _lookup(environ, ENV_VARS[field.name])
        if value is not None:
            values[field.name] = value
    return Settings(**values)
