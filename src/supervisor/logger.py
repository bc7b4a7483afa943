import logging

__all__ = ["logger", "set_level"]

logger = logging.getLogger("servectl")
if not logger.handlers:
    logger.setLevel(logging.INFO)
    _sh = logging.StreamHandler()
    _sh.setFormatter(logging.Formatter(fmt="%(message)s"))
    logger.addHandler(_sh)


def set_level(name: str) -> None:
    """Apply a level name such as ``DEBUG``; the name must already be valid."""
    logger.setLevel(name.upper())
