"""Local filesystem helpers: existence checks, directory bootstrap, cache I/O.

Failures are logged and reported through the return value; none of these
helpers raise for an ordinary ``OSError``.
"""

import logging
import os

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755


def file_exists(path: str) -> bool:
    """Return True when *path* exists and is a regular file (not a directory)."""
    return os.path.isfile(path)


def directory_exists(path: str) -> bool:
    return os.path.isdir(path)


def ensure_directory(path: str, mode: int = DIRECTORY_MODE) -> bool:
    """Create *path* (and missing parents) when absent.

    Returns False when the directory could not be created.  Callers carry on
    regardless; later writes into the directory will fail on their own.
    """
    if directory_exists(path):
        return True
    try:
        os.makedirs(path, mode=mode, exist_ok=True)
    except OSError as exc:
        logger.error("Could not create directory %s: %s", path, exc)
        return False
    logger.info("Created directory %s", path)
    return True


def read_text(path: str) -> str:
    """Return the contents of *path*, or an empty string if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            return fh.read()
    except OSError as exc:
        logger.error("Could not read %s: %s", path, exc)
        return ""


def write_cache(path: str, content: str) -> bool:
    """Overwrite the page cache at *path* with *content*."""
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(content + "\n")
    except OSError as exc:
        logger.error("Could not write cache file %s: %s", path, exc)
        return False
    return True
