"""``servectl``: one entry point for every lifecycle command."""

from pathlib import Path

import typer

from scripts.boot.stop_server import stop
from scripts.boot.utils import (
    EXIT_FAILURE,
    EXIT_NOT_RUNNING,
    load_config,
    run_action,
)
from src.supervisor.errors import ConfigError
from src.supervisor.lifecycle import (
    restart_server,
    server_status,
    start_server,
    tail_log,
    update_and_restart,
)
from src.supervisor.logger import logger

app = typer.Typer(help="Manage the server in the current directory")

ProjectDir = typer.Option(
    None, "--project-dir", "-C", help="Project directory (default: cwd)"
)


def _finish(code: int) -> None:
    if code:
        raise typer.Exit(code)


@app.command("start")
def start_cmd(project_dir: Path | None = ProjectDir):
    """Build and run the server in the background."""
    _finish(run_action(start_server, project_dir))


@app.command("stop")
def stop_cmd(project_dir: Path | None = ProjectDir):
    """Stop the server recorded in the PID file."""
    _finish(run_action(stop, project_dir))


@app.command("restart")
def restart_cmd(project_dir: Path | None = ProjectDir):
    """Restart the release binary without pulling or building."""
    _finish(run_action(restart_server, project_dir))


@app.command("update")
def update_cmd(project_dir: Path | None = ProjectDir):
    """Stop, git pull, cargo build and start again."""
    _finish(run_action(update_and_restart, project_dir))


@app.command("status")
def status_cmd(
    project_dir: Path | None = ProjectDir,
    lines: int = typer.Option(10, "--lines", "-n", help="Log lines to show"),
):
    """Show whether the server is running and the end of its log."""
    try:
        config = load_config(project_dir)
    except ConfigError as e:
        logger.error(f"❌ {e}")
        raise typer.Exit(EXIT_FAILURE) from e

    state = server_status(config)
    if state["running"]:
        print(f"Server: 🟢 running (PID {state['pid']})")
    elif state["stale"]:
        print(f"Server: 🔴 stopped (stale PID file {state['pid_file']})")
    else:
        print("Server: 🔴 stopped")
    print(f"Logs: {state['log_file']}")

    tail = tail_log(config, lines)
    if tail:
        print()
        print("\n".join(tail))

    if not state["running"]:
        raise typer.Exit(EXIT_NOT_RUNNING)


if __name__ == "__main__":
    app()
