"""
Helpers for preparing a working directory for the file tools.
"""

import logging
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Union

from agent_file_tools.paths import resolve_path

logger = logging.getLogger(__name__)


def create_temp_dir(seed: str) -> Path:
    """Create a temporary directory whose name starts with ``seed``."""
    temp_dir = Path(tempfile.mkdtemp(prefix=seed))
    logger.info(f"Created temporary directory at {temp_dir}")
    return temp_dir


def extract_zip_file(
    zip_file: Union[str, Path],
    target_dir: Union[str, Path],
    delete: bool = False,
) -> Path:
    """
    Extract a zip archive below a directory.

    Entries that would land outside ``target_dir`` are rejected.

    Args:
        zip_file: Archive to extract
        target_dir: Directory to extract into
        delete: Delete the archive after extraction

    Returns:
        ``target_dir / <archive name without extension>``, where archives of a
        single project usually keep their content

    Raises:
        PathTraversalError: If an entry escapes target_dir
        zipfile.BadZipFile: If the archive is corrupt
    """
    zip_file = Path(zip_file)
    target_dir = Path(target_dir)

    with zipfile.ZipFile(zip_file) as archive:
        for entry in archive.infolist():
            destination = resolve_path(target_dir, entry.filename)
            if entry.is_dir():
                destination.mkdir(parents=True, exist_ok=True)
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(entry) as source, open(destination, "wb") as out:
                shutil.copyfileobj(source, out)

    logger.info(f"Extracted zip file {zip_file} to {target_dir.absolute()}")

    if delete:
        zip_file.unlink()

    return target_dir / zip_file.stem
