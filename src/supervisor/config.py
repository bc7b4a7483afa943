"""Settings for the supervised server, read from the environment and ``.env``."""

import logging
import os
import shlex
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.supervisor.env import load_env_file
from src.supervisor.errors import ConfigError

# environment variable -> SupervisorConfig field
ENV_FIELDS = {
    "SERVER_LOG_DIR": "log_dir_name",
    "SERVER_RUN_COMMAND": "run_command",
    "SERVER_BINARY": "binary_path",
    "SERVER_BUILD_COMMAND": "build_command",
    "SERVER_GIT_REMOTE": "git_remote",
    "SERVER_GIT_BRANCH": "git_branch",
    "SERVER_STOP_TIMEOUT": "stop_timeout",
    "SERVER_KILL_AFTER_TIMEOUT": "kill_after_timeout",
    "SERVER_HEALTH_URL": "health_url",
    "SERVER_HEALTH_ATTEMPTS": "health_attempts",
    "SERVER_REQUIRED_ENV": "required_env",
    "SERVER_STRICT": "strict",
    "SERVER_LOG_LEVEL": "log_level",
    "CARGO_HOME": "cargo_home",
}


class SupervisorConfig(BaseModel):
    """Where the server lives and how to build, launch and stop it."""

    project_dir: Path
    log_dir_name: str = "logs"
    log_file_name: str = "server.log"
    pid_file_name: str = "server.pid"
    env_file_name: str = ".env"
    run_command: list[str] = Field(
        default_factory=lambda: ["cargo", "run", "--release"]
    )
    binary_path: str = "target/release/server-side-api"
    build_command: list[str] = Field(
        default_factory=lambda: ["cargo", "build", "--release"]
    )
    git_remote: str = "origin"
    git_branch: str = "master"
    stop_timeout: float = 2.0
    kill_after_timeout: bool = True
    health_url: str | None = None
    health_attempts: int = 30
    required_env: list[str] = Field(default_factory=list)
    strict: bool = False
    log_level: str = "INFO"
    cargo_home: Path = Field(default_factory=lambda: Path.home() / ".cargo")

    @field_validator("run_command", "build_command", mode="before")
    @classmethod
    def split_command(cls, v: object) -> object:
        if isinstance(v, str):
            v = shlex.split(v)
        if not v:
            msg = "command must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("required_env", mode="before")
    @classmethod
    def split_names(cls, v: object) -> object:
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @field_validator("health_url", mode="before")
    @classmethod
    def blank_url_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("stop_timeout")
    @classmethod
    def timeout_not_negative(cls, v: float) -> float:
        if v < 0:
            msg = "stop_timeout must be >= 0"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            msg = f"unknown log level: {v!r}"
            raise ValueError(msg)
        return name

    @field_validator("health_attempts")
    @classmethod
    def attempts_positive(cls, v: int) -> int:
        if v < 1:
            msg = "health_attempts must be >= 1"
            raise ValueError(msg)
        return v

    @property
    def log_dir(self) -> Path:
        return self.project_dir / self.log_dir_name

    @property
    def log_file(self) -> Path:
        return self.log_dir / self.log_file_name

    @property
    def pid_file(self) -> Path:
        return self.log_dir / self.pid_file_name

    @property
    def env_file(self) -> Path:
        return self.project_dir / self.env_file_name

    @property
    def binary(self) -> Path:
        return self.project_dir / self.binary_path

    @classmethod
    def from_env(cls, project_dir: Path | str | None = None) -> "SupervisorConfig":
        """Build a config for ``project_dir`` (default: the working directory).

        The project's ``.env`` is loaded first so it may carry ``SERVER_*``
        settings of its own.
        """
        root = Path(
            project_dir or os.environ.get("SERVER_PROJECT_DIR") or Path.cwd()
        ).resolve()
        env_file_name = os.environ.get("SERVER_ENV_FILE", ".env")
        load_env_file(root / env_file_name)

        values: dict[str, object] = {
            "project_dir": root,
            "env_file_name": env_file_name,
        }
        for key, field in ENV_FIELDS.items():
            raw = os.environ.get(key)
            if raw is not None:
                values[field] = raw
        try:
            return cls(**values)
        except ValidationError as e:
            msg = f"Invalid server configuration: {e}"
            raise ConfigError(msg) from e
