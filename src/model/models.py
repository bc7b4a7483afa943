__all__ = ["CommandResult", "ServerState"]


from dataclasses import dataclass
from typing import TypedDict


class ServerState(TypedDict):
    """Snapshot of the supervised server as seen through its PID file."""

    pid: int | None
    running: bool
    stale: bool  # PID file present but the process is gone
    pid_file: str
    log_file: str


@dataclass
class CommandResult:
    """Outcome of a synchronous helper command (git, cargo)."""

    command: list[str]
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0
