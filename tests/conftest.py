import logging
import os
import stat
import sys
import textwrap
import time
from pathlib import Path

import psutil
import pytest

from src.supervisor.config import ENV_FIELDS, SupervisorConfig
from src.supervisor.logger import logger
from src.supervisor.pidfile import read_pid

# Prints one line, then idles until signalled.
SERVER_SOURCE = textwrap.dedent(
    """
    import sys, time
    print("server up", flush=True)
    while True:
        time.sleep(0.1)
    """
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep SERVER_* settings, PATH and CARGO_HOME changes inside the test."""
    for key in [*ENV_FIELDS, "SERVER_PROJECT_DIR", "SERVER_ENV_FILE"]:
        # setenv first so undo also removes keys a test loads from .env
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    monkeypatch.setenv("CARGO_HOME", str(tmp_path / "cargo-home"))
    yield
    logger.setLevel(logging.INFO)


@pytest.fixture
def project_dir(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def server_binary(project_dir):
    """A stand-in for target/release/server-side-api."""
    binary = project_dir / "target" / "release" / "server-side-api"
    binary.parent.mkdir(parents=True)
    binary.write_text(f"#!{sys.executable}\n{SERVER_SOURCE}", encoding="utf-8")
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return binary


@pytest.fixture
def server_command():
    return [sys.executable, "-c", SERVER_SOURCE]


@pytest.fixture
def config(project_dir, server_command):
    cfg = SupervisorConfig(
        project_dir=project_dir,
        run_command=server_command,
        build_command=["cargo", "build", "--release"],
        stop_timeout=5.0,
    )
    yield cfg
    _kill_recorded(cfg.pid_file)


def _kill_recorded(pid_file: Path) -> None:
    pid = read_pid(pid_file)
    if pid is None:
        return
    try:
        proc = psutil.Process(pid)
        if proc.ppid() != os.getpid():
            return
        proc.kill()
        proc.wait(timeout=5)
    except (psutil.NoSuchProcess, psutil.TimeoutExpired):
        pass


def _wait_for(predicate, timeout: float = 5.0, interval: float = 0.05) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def wait_for():
    """Poll a predicate until it holds or the timeout passes."""
    return _wait_for
