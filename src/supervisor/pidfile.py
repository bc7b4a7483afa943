import contextlib
from pathlib import Path


def read_pid(path: Path) -> int | None:
    """Return the recorded PID, or None if the file is missing or unusable."""
    try:
        raw = path.read_text(encoding="ascii").strip()
    except (OSError, UnicodeDecodeError):
        return None
    try:
        pid = int(raw)
    except ValueError:
        return None
    return pid if pid > 0 else None


def write_pid(path: Path, pid: int) -> None:
    if pid <= 0:
        msg = f"invalid pid: {pid}"
        raise ValueError(msg)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{pid}\n", encoding="ascii")


def remove_pid(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.unlink(missing_ok=True)
