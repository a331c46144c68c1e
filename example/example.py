"""
Simple example showing how a stackable error travels up a call chain.

An error is wrapped where it happens, picks up context in its callers and
is printed once at the top together with the stack of the failure site.

Prerequisites:
1. Install the stackerrPy package: pip install stackerrPy

Usage:
    python example.py
"""

import json
import logging

from stackerrPy import get_logger, log_error, same_error, setup_logging, wrap, wrap_prefix

ErrNotFound = FileNotFoundError("config file not found")

setup_logging(level=logging.INFO)
logger = get_logger("example")


def read_config(path: str) -> str:
    """Pretend to read a file; every path is missing."""
    raise wrap(ErrNotFound)


def load_config(path: str) -> dict:
    try:
        return json.loads(read_config(path))
    except Exception as e:
        raise wrap_prefix(e, f"loading config {path}")


def start() -> None:
    try:
        load_config("/etc/example/config.json")
    except Exception as e:
        raise wrap_prefix(e, "starting service")


def main() -> None:
    try:
        start()
    except Exception as e:
        if same_error(e, ErrNotFound):
            logger.info("No config file, falling back to defaults")
        log_error(logger, "Example failed", e)


if __name__ == "__main__":
    main()
