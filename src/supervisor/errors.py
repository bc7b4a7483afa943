"""Exceptions raised by the supervisor package."""

__all__ = [
    "AlreadyRunningError",
    "ConfigError",
    "LaunchError",
    "MissingEnvError",
    "StopError",
    "SupervisorError",
    "UpdateError",
]


class SupervisorError(Exception):
    """Base class; launchers turn these into exit code 1."""


class ConfigError(SupervisorError):
    pass


class MissingEnvError(SupervisorError):
    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(f"Missing required env vars: {', '.join(keys)}")


class AlreadyRunningError(SupervisorError):
    def __init__(self, pid: int) -> None:
        self.pid = pid
        super().__init__(f"Server is already running (PID {pid})")


class LaunchError(SupervisorError):
    pass


class UpdateError(SupervisorError):
    pass


class StopError(SupervisorError):
    def __init__(self, pid: int) -> None:
        self.pid = pid
        super().__init__(f"Server (PID {pid}) is still running after stop")
