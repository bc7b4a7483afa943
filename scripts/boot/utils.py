from collections.abc import Callable
from pathlib import Path

from src.supervisor.config import SupervisorConfig
from src.supervisor.errors import SupervisorError
from src.supervisor.logger import logger, set_level

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOT_RUNNING = 3  # LSB "program is not running"


def load_config(project_dir: Path | None = None) -> SupervisorConfig:
    """Read settings (``.env`` included) and apply the configured log level."""
    config = SupervisorConfig.from_env(project_dir)
    set_level(config.log_level)
    return config


def run_action(
    action: Callable[[SupervisorConfig], object], project_dir: Path | None = None
) -> int:
    """Build the config for the working directory and run ``action`` on it."""
    try:
        action(load_config(project_dir))
    except SupervisorError as e:
        logger.error(f"❌ {e}")
        return EXIT_FAILURE
    return EXIT_OK
