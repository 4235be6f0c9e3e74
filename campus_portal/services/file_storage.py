"""
Local storage for uploaded file bytes.

Uploads are written under the upload directory as ``<epoch-ms>-<original name>``
and served statically under ``UPLOAD_URL_PREFIX``.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os
from fastapi import UploadFile
from fastapi.requests import HTTPConnection

from campus_portal.core.config import settings
from campus_portal.core.exceptions import StorageError
from campus_portal.core.logging_config import logger

CHUNK_SIZE = 1024 * 1024


@dataclass
class StoredUpload:
    """Where an upload landed and how big it was"""
    path: Path
    original_name: str
    size: int

    @property
    def stored_name(self) -> str:
        return self.path.name


def clean_filename(name: Optional[str]) -> str:
    """Strip any directory part a client smuggled into the filename"""
    base = (name or "").replace("\\", "/").split("/")[-1].strip()
    return base or "upload"


class LocalFileStorage:
    """Writes uploads to a directory on local disk"""

    def __init__(self, root: Union[str, Path], url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    def _target_for(self, original_name: str) -> Path:
        stamp = int(time.time() * 1000)
        target = self.root / f"{stamp}-{original_name}"
        # Same name within the same millisecond
        counter = 1
        while target.exists():
            target = self.root / f"{stamp}-{counter}-{original_name}"
            counter += 1
        return target

    async def save(self, upload: UploadFile) -> StoredUpload:
        """Write the upload to disk, counting bytes as they are written"""
        original_name = clean_filename(upload.filename)
        target = self._target_for(original_name)

        size = 0
        try:
            async with aiofiles.open(target, "wb") as f:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    await f.write(chunk)
                    size += len(chunk)
        except OSError as e:
            logger.error(f"Failed to store upload {original_name}: {e}")
            raise StorageError(str(e))

        logger.debug(f"Stored upload {original_name} at {target} ({size} bytes)")
        return StoredUpload(path=target, original_name=original_name, size=size)

    async def remove(self, file_path: Union[str, Path]) -> bool:
        """
        Best-effort removal of stored bytes.

        Returns False (and logs) when the blob is already gone or cannot be
        removed; never raises.
        """
        path = Path(file_path)
        try:
            await aiofiles.os.remove(path)
            return True
        except FileNotFoundError:
            logger.warning(f"Stored file already missing: {path}")
            return False
        except OSError as e:
            logger.warning(f"Failed to remove stored file {path}: {e}")
            return False

    def url_for(self, file_path: Union[str, Path]) -> str:
        """Public download URL of a stored file"""
        return f"{self.url_prefix}/{Path(file_path).name}"


def create_file_storage() -> LocalFileStorage:
    return LocalFileStorage(settings.upload_path, settings.UPLOAD_URL_PREFIX)


def get_file_storage(connection: HTTPConnection) -> LocalFileStorage:
    """FastAPI dependency: the application's upload storage"""
    return connection.app.state.file_storage
