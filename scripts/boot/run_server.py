#!/usr/bin/env python3
"""Build and run the server in the background from the current directory."""

from scripts.boot.utils import run_action
from src.supervisor.lifecycle import start_server


def main() -> int:
    return run_action(start_server)


if __name__ == "__main__":
    raise SystemExit(main())
