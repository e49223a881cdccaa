"""Configuration for MCP jj Server.

Values come from, in increasing precedence: defaults, environment variables
(optionally loaded from ``.env`` files), and command-line options.

Environment variable binding:
    ```bash
    export MCP_JJ_REPOSITORY=/path/to/workspace
    export MCP_JJ_BINARY=/opt/jj/bin/jj
    export MCP_JJ_TIMEOUT=60
    export LOG_LEVEL=DEBUG
    ```
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "MCP_JJ_"


class ServerConfig(BaseModel):
    """Immutable server configuration, built once at startup."""

    model_config = ConfigDict(frozen=True)

    repository: Optional[Path] = Field(
        default=None,
        description="Default working directory for tool calls without cwd/repoPath",
    )
    jj_binary: str = Field(default="jj", min_length=1, description="jj executable")
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-call timeout for jj; None waits indefinitely",
    )
    log_level: str = Field(default="WARNING", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> "ServerConfig":
        """Build configuration from the environment; non-None overrides win."""
        values: Dict[str, Any] = {}
        env_map = {
            "repository": f"{ENV_PREFIX}REPOSITORY",
            "jj_binary": f"{ENV_PREFIX}BINARY",
            "timeout_seconds": f"{ENV_PREFIX}TIMEOUT",
            "log_level": "LOG_LEVEL",
        }
        for field, var in env_map.items():
            raw = os.getenv(var)
            if raw is not None and raw.strip():
                values[field] = raw.strip()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


def load_environment_variables(repository_path: Path | None = None) -> list[str]:
    """Load environment variables from .env files without overriding existing ones.

    Order of precedence:
    1. System environment variables
    2. Project .env file (current working directory)
    3. Repository .env file (if repository path provided)

    Returns:
        The .env files that were loaded
    """
    candidates = [Path.cwd() / ".env"]
    if repository_path:
        candidates.append(Path(repository_path) / ".env")

    loaded_files = []
    for env_file in candidates:
        if not env_file.exists() or str(env_file) in loaded_files:
            continue
        try:
            load_dotenv(env_file, override=False)
            loaded_files.append(str(env_file))
            logger.info(f"Loaded environment variables from {env_file}")
        except OSError as e:
            logger.warning(f"Failed to load .env file {env_file}: {e}")

    if not loaded_files:
        logger.info("No .env files found, using system environment variables only")
    return loaded_files


def is_jj_workspace(path: Path) -> bool:
    return (Path(path) / ".jj").is_dir()
