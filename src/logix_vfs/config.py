"""
Configuration for building a filesystem backend.

``VfsConfig`` validates the settings needed to construct either backend and
``create_vfs`` turns it into a ready ``LogixVfs``. Settings can come from
keyword arguments, a YAML file, or environment variables:

- ``LOGIX_VFS_ROOT``: root directory of the real backend
- ``LOGIX_VFS_LOG_LEVEL``: log level name
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import LogixVfs
from .mem_fs import MemFs
from .rel_fs import RelFs

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "LOGIX_VFS_ROOT"
LOG_LEVEL_ENV_VAR = "LOGIX_VFS_LOG_LEVEL"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class VfsConfig(BaseModel):
    """
    Pydantic schema for validating filesystem backend configurations.

    Reads the root and log level from environment variables when not
    provided directly.
    """

    backend: Literal["real", "memory"] = Field(
        "real", description="Backend type: 'real' for a directory tree, 'memory' for an in-memory tree"
    )
    root: Optional[Path] = Field(
        None, description="Confinement root for the real backend (reads LOGIX_VFS_ROOT if None)"
    )
    cwd: Optional[str] = Field(
        None, description="Initial current directory, relative to the root (real backend only)"
    )
    log_level: str = Field(
        "WARNING", description="Log level name (reads LOGIX_VFS_LOG_LEVEL if not set)"
    )
    seed: Dict[str, str] = Field(
        default_factory=dict, description="Text files to seed into a memory backend, keyed by path"
    )

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _read_env_defaults(cls, data: Any) -> Any:
        """Fills root and log_level from the environment when absent."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if data.get("root") is None and os.getenv(ROOT_ENV_VAR):
            data["root"] = os.environ[ROOT_ENV_VAR]
            logger.debug(f"Read root from env var '{ROOT_ENV_VAR}'.")
        if data.get("log_level") is None and os.getenv(LOG_LEVEL_ENV_VAR):
            data["log_level"] = os.environ[LOG_LEVEL_ENV_VAR]
        elif data.get("log_level") is None:
            data.pop("log_level", None)
        return data

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'. Expected one of {', '.join(_LOG_LEVELS)}.")
        return level

    @field_validator("root")
    @classmethod
    def _absolute_root(cls, v: Optional[Path]) -> Optional[Path]:
        if v is None:
            return v
        return v.expanduser().absolute()

    @model_validator(mode="after")
    def _check_backend_settings(self) -> "VfsConfig":
        """Ensures each backend gets the settings it needs."""
        if self.backend == "real":
            if self.root is None:
                raise ValueError(
                    f"The real backend needs a root. Set 'root' or the '{ROOT_ENV_VAR}' environment variable."
                )
            if self.seed:
                raise ValueError("'seed' is only supported by the memory backend.")
        elif self.cwd is not None:
            raise ValueError("'cwd' is only supported by the real backend.")
        return self

    @classmethod
    def from_yaml(cls, path: Union[str, Path], **overrides: Any) -> "VfsConfig":
        """
        Load a configuration from a YAML mapping.

        Args:
            path: YAML file to read
            **overrides: Values that take precedence over the file (None is ignored)

        Returns:
            Validated VfsConfig
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)


def create_vfs(config: VfsConfig) -> LogixVfs:
    """
    Construct the backend described by ``config``.

    Args:
        config: Validated configuration

    Returns:
        A RelFs or MemFs instance
    """
    if config.backend == "memory":
        fs: LogixVfs = MemFs.from_files(
            {path: content.encode("utf-8") for path, content in config.seed.items()}
        )
        logger.info(f"Created in-memory filesystem with {len(config.seed)} seeded files")
        return fs

    fs = RelFs(config.root, cur_dir=config.cwd)
    logger.info(f"Created filesystem rooted at {config.root}")
    return fs
