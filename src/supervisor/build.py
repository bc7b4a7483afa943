import subprocess
from pathlib import Path

from src.model.models import CommandResult
from src.supervisor.config import SupervisorConfig
from src.supervisor.logger import logger

COMMAND_NOT_FOUND = 127


def run_command(command: list[str], cwd: Path) -> CommandResult:
    """Run ``command`` to completion with output going to the terminal."""
    try:
        completed = subprocess.run(command, cwd=str(cwd), check=False)  # noqa: S603
    except FileNotFoundError:
        logger.warning(f"{command[0]} not found")
        return CommandResult(command=command, returncode=COMMAND_NOT_FOUND)
    result = CommandResult(command=command, returncode=completed.returncode)
    if not result.ok:
        logger.warning(
            f"Command failed with exit code {result.returncode}: {' '.join(command)}"
        )
    return result


def git_pull(config: SupervisorConfig) -> CommandResult:
    logger.info("⬇️ Pulling latest changes from Git...")
    return run_command(
        ["git", "pull", config.git_remote, config.git_branch], config.project_dir
    )


def cargo_build(config: SupervisorConfig) -> CommandResult:
    logger.info("🛠 Building the project...")
    return run_command(config.build_command, config.project_dir)
