"""File operations for template import/export."""

import os
import structlog
from pathlib import Path

logger = structlog.get_logger()


def atomic_write(path: Path, content: str) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    The content is written to a temporary file in the same directory,
    fsynced, then renamed over the target so readers never see a
    half-written template.

    Args:
        path: Target file path
        content: Content to write

    Raises:
        OSError: On file I/O errors
        PermissionError: On permission errors
    """
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        # On POSIX systems, this is atomic even if target exists
        temp_path.replace(path)

        logger.debug("atomic_write_success", path=str(path), size=len(content))

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise
