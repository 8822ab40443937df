"""
Configuration for locating the dpkg status file.

The path comes from, in order: an explicit argument (the CLI option),
the STATUS_EXPLORER_STATUS_FILE environment variable, and the system
default.
"""

import os
from pathlib import Path

DEFAULT_STATUS_FILE = Path("/var/lib/dpkg/status")
STATUS_FILE_ENV = "STATUS_EXPLORER_STATUS_FILE"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_status_file(path: str | Path | None = None) -> Path:
    """Return the status file to read."""
    if path:
        return Path(path)
    return Path(os.environ.get(STATUS_FILE_ENV) or DEFAULT_STATUS_FILE)
