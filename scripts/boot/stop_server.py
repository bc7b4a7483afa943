#!/usr/bin/env python3
from scripts.boot.utils import run_action
from src.supervisor.config import SupervisorConfig
from src.supervisor.lifecycle import stop_server
from src.supervisor.logger import logger


def stop(config: SupervisorConfig) -> None:
    if stop_server(config):
        logger.info("✅ Server stopped")
    else:
        logger.info("Server is not running")


def main() -> int:
    return run_action(stop)


if __name__ == "__main__":
    raise SystemExit(main())
