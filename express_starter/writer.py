"""
writer.py

Responsibility: Own the generated project's directory on disk.

- The project root and its fixed subdirectories are created only when the root
  does not exist yet. An existing root is left untouched, even if some of its
  subdirectories have been removed.
- Files are always overwritten without warning.
- Missing parent directories are never created for files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

PROJECT_SUBDIRS: tuple[str, ...] = ("routes", "controllers", "utils", "middlewares", "lib", "tests")


class WriteError(RuntimeError):
    pass


def ensure_project_dirs(project_dir: str | Path) -> bool:
    """
    Create the project root and its subdirectories if the root is missing.

    Returns True when directories were created, False when the root already existed.
    """
    root = Path(project_dir)
    try:
        if root.exists():
            logger.info("Project directory %s already exists; leaving its layout as is", root)
            return False
        root.mkdir()
        for name in PROJECT_SUBDIRS:
            (root / name).mkdir()
    except (OSError, ValueError) as e:
        raise WriteError(f"Could not create project directory {root}: {e}") from e
    logger.info("Created project directory %s", root)
    return True


def write_files(project_dir: str | Path, files: Mapping[str, str]) -> list[Path]:
    root = Path(project_dir)
    written: list[Path] = []
    for rel, content in files.items():
        path = root / rel
        try:
            path.write_text(content, encoding="utf-8", newline="\n")
        except (OSError, ValueError) as e:
            raise WriteError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %s", path)
        written.append(path)
    return written
