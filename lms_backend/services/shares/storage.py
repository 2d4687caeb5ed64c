# lms_backend/services/shares/storage.py
import time
from functools import lru_cache
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from lms_backend.core.settings import settings

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})
ALLOWED_IMAGE_CONTENT_TYPES = frozenset(
    {"image/jpg", "image/jpeg", "image/png", "image/webp"}
)
CHUNK_SIZE = 1024 * 1024


class InvalidStoragePath(ValueError):
    pass


class LocalStorageService:
    """Entity files on local disk at {root}/{entity_id}/{kind}/{filename}."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root if root is not None else settings.STORAGE_DIR)

    @staticmethod
    def _check_component(value: str) -> str:
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise InvalidStoragePath(f"Invalid path component: {value!r}")
        return value

    def path_for(self, entity_id: str, kind: str, filename: str) -> Path:
        return (
            self.root
            / self._check_component(entity_id)
            / self._check_component(kind)
            / self._check_component(filename)
        )

    async def exists(self, entity_id: str, kind: str, filename: str) -> bool:
        try:
            path = self.path_for(entity_id, kind, filename)
        except InvalidStoragePath:
            return False
        return await aiofiles.os.path.isfile(path)

    async def remove(self, entity_id: str, kind: str, filename: str) -> None:
        """Raises FileNotFoundError when the file is already gone."""
        await aiofiles.os.remove(self.path_for(entity_id, kind, filename))

    async def save_image(self, entity_id: str, kind: str, file: UploadFile) -> str:
        """Write the upload as {kind}_{nanoseconds}{ext} and return the file name."""
        ext = Path(file.filename or "").suffix.lower()
        file_name = f"{kind}_{time.time_ns()}{ext}"
        path = self.path_for(entity_id, kind, file_name)
        await aiofiles.os.makedirs(path.parent, exist_ok=True)

        async with aiofiles.open(path, "wb") as f:
            while chunk := await file.read(CHUNK_SIZE):
                await f.write(chunk)
        return file_name


def is_allowed_image(filename: str | None, content_type: str | None) -> tuple[bool, str]:
    ext = Path(filename or "").suffix.lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return False, "image extension not allowed (jpg, jpeg, png, webp)"
    if (content_type or "").lower() not in ALLOWED_IMAGE_CONTENT_TYPES:
        return False, "Content Type is not allowed"
    return True, ""


def image_url(entity_id: str, kind: str, file_name: str) -> str:
    """Public URL of an entity image, or the bare name when no URL is configured."""
    if not settings.STORAGE_SERVICE_URL:
        return file_name
    return f"{settings.STORAGE_SERVICE_URL.rstrip('/')}/{entity_id}/{kind}/{file_name}"


@lru_cache(maxsize=1)
def get_storage_service() -> LocalStorageService:
    return LocalStorageService()
