"""Start, stop and update the server using the PID-file convention.

``logs/server.pid`` holds the PID of the most recently started server and
``logs/server.log`` collects its combined output. Nothing else is shared
between invocations, so two launchers running at once can still race.
"""

import os
from collections import deque

from src.model.models import ServerState
from src.supervisor.build import cargo_build, git_pull
from src.supervisor.config import SupervisorConfig
from src.supervisor.env import load_env_file, prepend_cargo_bin, require_env
from src.supervisor.errors import (
    AlreadyRunningError,
    LaunchError,
    StopError,
    UpdateError,
)
from src.supervisor.health import wait_ready
from src.supervisor.logger import logger
from src.supervisor.pidfile import read_pid, remove_pid, write_pid
from src.supervisor.process import is_alive, spawn_detached, terminate


def prepare_environment(config: SupervisorConfig) -> dict[str, str]:
    """Load ``.env``, put cargo on PATH and return the child environment."""
    load_env_file(config.env_file)
    prepend_cargo_bin(config.cargo_home)
    require_env(config.required_env)
    return os.environ.copy()


def start_server(
    config: SupervisorConfig,
    command: list[str] | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Launch the server detached and record its PID.

    ``env`` is the already prepared child environment; when omitted it is
    built with :func:`prepare_environment`.
    """
    if env is None:
        env = prepare_environment(config)

    pid = read_pid(config.pid_file)
    if is_alive(pid):
        raise AlreadyRunningError(pid)
    if config.pid_file.exists():
        logger.debug(f"Removing stale PID file {config.pid_file}")
        remove_pid(config.pid_file)

    proc = spawn_detached(
        command or config.run_command,
        config.log_file,
        config.project_dir,
        env,
    )
    write_pid(config.pid_file, proc.pid)

    logger.info("🚀 Server started in background")
    logger.info(f"PID: {proc.pid}")
    logger.info(f"Logs: {config.log_file}")

    if config.health_url:
        if wait_ready(config.health_url, proc.pid, attempts=config.health_attempts):
            logger.info(f"Server answering at {config.health_url}")
        else:
            logger.warning(
                f"Server did not respond at {config.health_url}; check {config.log_file}"
            )
    return proc.pid


def stop_server(config: SupervisorConfig) -> bool:
    """Stop the recorded server. Returns False when nothing was running."""
    pid = read_pid(config.pid_file)
    if pid is None or not is_alive(pid):
        remove_pid(config.pid_file)
        return False

    logger.info(f"🛑 Stopping server with PID {pid}...")
    if not terminate(pid, config.stop_timeout, kill_after=config.kill_after_timeout):
        raise StopError(pid)
    remove_pid(config.pid_file)
    return True


def _start_binary(
    config: SupervisorConfig, env: dict[str, str] | None = None
) -> int:
    if not config.binary.is_file():
        msg = f"Server binary not found: {config.binary}"
        raise LaunchError(msg)
    return start_server(config, [str(config.binary)], env)


def restart_server(config: SupervisorConfig) -> int:
    """Stop and start the already built release binary."""
    stop_server(config)
    return _start_binary(config)


def update_and_restart(config: SupervisorConfig) -> int:
    env = prepare_environment(config)
    config.log_dir.mkdir(parents=True, exist_ok=True)

    stop_server(config)

    for step in (git_pull, cargo_build):
        result = step(config)
        if not result.ok and config.strict:
            msg = f"{' '.join(result.command)} exited with {result.returncode}"
            raise UpdateError(msg)

    logger.info("🚀 Starting the server...")
    pid = _start_binary(config, env)
    logger.info("✅ Server restarted successfully")
    return pid


def server_status(config: SupervisorConfig) -> ServerState:
    pid = read_pid(config.pid_file)
    running = is_alive(pid)
    return {
        "pid": pid,
        "running": running,
        "stale": config.pid_file.exists() and not running,
        "pid_file": str(config.pid_file),
        "log_file": str(config.log_file),
    }


def tail_log(config: SupervisorConfig, lines: int = 20) -> list[str]:
    if lines <= 0 or not config.log_file.is_file():
        return []
    with config.log_file.open(encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=lines)]
