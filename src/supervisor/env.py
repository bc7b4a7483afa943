import os
from pathlib import Path

from dotenv import load_dotenv

from src.supervisor.errors import MissingEnvError
from src.supervisor.logger import logger


def load_env_file(path: Path) -> bool:
    """Load ``path`` into ``os.environ`` the way ``source .env`` would.

    A missing file is not an error; ``False`` is returned and nothing changes.
    """
    if not path.is_file():
        logger.debug(f"No env file at {path}")
        return False
    load_dotenv(dotenv_path=path, override=True)
    logger.debug(f"Loaded {path}")
    return True


def prepend_cargo_bin(cargo_home: Path) -> str:
    cargo_bin = str(cargo_home / "bin")
    entries = [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]
    if not entries or entries[0] != cargo_bin:
        entries = [cargo_bin, *(p for p in entries if p != cargo_bin)]
        os.environ["PATH"] = os.pathsep.join(entries)
    return os.environ["PATH"]


def require_env(keys: list[str]) -> None:
    missing = [k for k in keys if not os.environ.get(k)]
    if missing:
        raise MissingEnvError(missing)
