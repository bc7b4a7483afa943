"""Detached launch and PID-based control of the server process."""

import platform
import subprocess
from pathlib import Path

import psutil

from src.supervisor.errors import LaunchError
from src.supervisor.logger import logger

CREATE_NEW_PROCESS_GROUP = 0x00000200
DETACHED_PROCESS = 0x00000008


def is_alive(pid: int | None) -> bool:
    """Same question as ``ps -p $PID``, except zombies count as dead."""
    if pid is None or pid <= 0:
        return False
    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        # exists but belongs to someone else
        return True


def spawn_detached(
    cmd: list[str],
    log_path: Path,
    cwd: Path,
    env: dict[str, str] | None = None,
) -> subprocess.Popen[bytes]:
    """Start ``cmd`` in its own session with stdout and stderr appended to ``log_path``.

    The log is never truncated. The caller may exit afterwards; the child
    keeps running.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)
    creationflags = 0
    start_new_session = False
    if platform.system() == "Windows":
        creationflags = CREATE_NEW_PROCESS_GROUP | DETACHED_PROCESS
    else:
        start_new_session = True

    with log_path.open("ab", buffering=0) as log_f:
        try:
            return subprocess.Popen(  # noqa: S603
                cmd,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=log_f,
                stderr=subprocess.STDOUT,
                env=env,
                creationflags=creationflags,
                start_new_session=start_new_session,
            )
        except OSError as e:
            msg = f"Could not launch {cmd[0]}: {e}"
            raise LaunchError(msg) from e


def terminate(pid: int, timeout: float = 2.0, *, kill_after: bool = True) -> bool:
    """Send SIGTERM and wait up to ``timeout`` seconds for ``pid`` to exit.

    Escalates to SIGKILL when ``kill_after`` is set. Returns True once the
    process is gone.
    """
    try:
        proc = psutil.Process(pid)
        proc.terminate()
    except psutil.NoSuchProcess:
        return True
    except psutil.AccessDenied:
        # PID reused by a process we may not signal
        logger.warning(f"Not permitted to signal PID {pid}")
        return False

    _, alive = psutil.wait_procs([proc], timeout=timeout)
    if alive and kill_after:
        logger.warning(f"PID {pid} ignored SIGTERM for {timeout}s, killing")
        for p in alive:
            try:
                p.kill()
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Not permitted to kill PID {pid}")
                return False
        _, alive = psutil.wait_procs(alive, timeout=max(timeout, 1.0))
    return not alive
