"""Readiness probe for a freshly launched server."""

import time

import requests

from src.supervisor.logger import logger
from src.supervisor.process import is_alive

HEALTHY_STATUSES = range(200, 400)


def http_ok(url: str, timeout: float = 2.5) -> bool:
    if not url.lower().startswith(("http://", "https://")):
        return False
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException:
        return False
    return resp.status_code in HEALTHY_STATUSES


def wait_ready(
    url: str, pid: int | None = None, attempts: int = 30, interval: float = 1.0
) -> bool:
    """Poll ``url`` until it answers; give up early if ``pid`` has died."""
    for attempt in range(1, attempts + 1):
        if http_ok(url):
            return True
        if pid is not None and not is_alive(pid):
            logger.warning(f"Server process {pid} exited before becoming ready")
            return False
        logger.debug(f"{url} not ready ({attempt}/{attempts})")
        if attempt < attempts:
            time.sleep(interval)
    return False
