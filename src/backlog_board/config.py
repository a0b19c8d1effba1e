"""backlog-board configuration.

Settings are read once from the environment (optionally seeded from a
``.env`` file) and passed explicitly to the client; nothing else in the
package looks at ``os.environ``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from backlog_board.errors import ConfigError


# Environment variable names
ENV_SPACE_ID = "BACKLOG_SPACE_ID"
ENV_API_KEY = "BACKLOG_API_KEY"
ENV_PROJECT_ID = "BACKLOG_PROJECT_ID"
ENV_STATUS_ID_LIST = "BACKLOG_STATUS_ID_LIST"
ENV_DOMAIN = "BACKLOG_DOMAIN"

# Default configuration values
DEFAULT_DOMAIN = "backlog.com"
DEFAULT_TIMEOUT = 30.0
MAX_PAGE_SIZE = 100  # Backlog rejects count > 100


def parse_status_ids(raw: str) -> tuple[str, ...]:
    """Split a comma-separated status id list, dropping blank entries."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class BacklogConfig:
    """Connection and filter settings for one Backlog project."""

    space_id: str
    api_key: str = field(repr=False)
    project_id: str
    status_ids: tuple[str, ...]
    domain: str = DEFAULT_DOMAIN
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        """Web root of the space, e.g. https://example.backlog.com"""
        return f"https://{self.space_id}.{self.domain}"

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/api/v2"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> "BacklogConfig":
        """Build the configuration from environment variables.

        When ``environ`` is omitted the process environment is used, after
        loading ``dotenv_path`` (``.env`` in the working directory by default)
        without overriding variables that are already set.

        Raises:
            ConfigError: If a required variable is missing or blank.
        """
        if environ is None:
            load_dotenv(dotenv_path=dotenv_path or Path(".env"), override=False)
            environ = os.environ

        def required(name: str) -> str:
            value = (environ.get(name) or "").strip()
            if not value:
                raise ConfigError(f"{name} is not set")
            return value

        status_ids = parse_status_ids(required(ENV_STATUS_ID_LIST))
        if not status_ids:
            raise ConfigError(f"{ENV_STATUS_ID_LIST} contains no status ids")

        return cls(
            space_id=required(ENV_SPACE_ID),
            api_key=required(ENV_API_KEY),
            project_id=required(ENV_PROJECT_ID),
            status_ids=status_ids,
            domain=(environ.get(ENV_DOMAIN) or "").strip() or DEFAULT_DOMAIN,
        )
