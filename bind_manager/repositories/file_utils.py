"""File utilities for atomic writes and JSON operations."""
import json
import os
import shutil
from typing import Optional

from bind_manager.core.constants import SHADOW_SUFFIX
from bind_manager.core.logger import logger


def shadow_path(file_path: str) -> str:
    """Sibling path a staged write goes to before it is renamed into place."""
    return file_path + SHADOW_SUFFIX


def copy_ownership(src: str, dst: str) -> None:
    """Give ``dst`` the permission bits and, where allowed, the owner of ``src``."""
    st = os.stat(src)
    try:
        os.chown(dst, st.st_uid, st.st_gid)
    except PermissionError as e:
        logger.debug(f"Could not copy owner of {src} to {dst}: {e}")
    shutil.copymode(src, dst)


def write_file(file_path: str, content: str, like: Optional[str] = None) -> None:
    """Write and fsync a file. Errors propagate.

    If ``like`` names an existing file, its mode and owner are copied onto
    the new file so that a later rename over ``like`` keeps them.
    """
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)
        f.flush()
        os.fsync(f.fileno())
    if like is not None and os.path.exists(like):
        copy_ownership(like, file_path)


def remove_quietly(file_path: str) -> None:
    """Remove a leftover file, logging instead of raising."""
    try:
        if os.path.exists(file_path):
            os.remove(file_path)
    except OSError as e:
        logger.warning(f"Could not remove {file_path}: {e}")


def atomic_write(file_path: str, content: str) -> None:
    """
    Atomically write to a file to prevent corruption.
    Uses a temporary file and rename operation.
    """
    temp_path = shadow_path(file_path)
    try:
        write_file(temp_path, content, like=file_path)
        os.replace(temp_path, file_path)
    except OSError as e:
        logger.error(f"Failed to write file {file_path}: {e}")
        remove_quietly(temp_path)
        raise


def atomic_write_json(file_path: str, data) -> None:
    """Atomically write JSON data to a file."""
    atomic_write(file_path, json.dumps(data, indent=2))


def load_json_file(file_path: str, default=None):
    """Load JSON from file.

    Returns ``default`` when the file does not exist. Decode errors
    (``ValueError``) and I/O errors propagate to the caller.
    """
    if not os.path.exists(file_path):
        return default
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)
