#!/usr/bin/env python3
"""Stop the server, pull and rebuild it, then start the release binary."""

from scripts.boot.utils import run_action
from src.supervisor.lifecycle import update_and_restart


def main() -> int:
    return run_action(update_and_restart)


if __name__ == "__main__":
    raise SystemExit(main())
