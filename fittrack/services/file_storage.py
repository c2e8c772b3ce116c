"""
File storage service - stores and removes user avatars
"""
import io
import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from PIL import Image, UnidentifiedImageError

from fittrack.config import settings

logger = logging.getLogger(__name__)

AVATAR_SUBDIR = "avatars"
WEB_PREFIX = "/uploads"


class InvalidImageError(ValueError):
    """Uploaded bytes are not a readable image"""


class FileStorageService:
    """Local disk storage under UPLOAD_DIR"""

    def __init__(self, base_dir: str = None, avatar_size: int = None):
        """
        Args:
            base_dir: storage root, served as /uploads
            avatar_size: edge length of the square avatar in pixels
        """
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR)
        self.avatar_size = avatar_size or settings.AVATAR_SIZE
        self.avatar_dir = self.base_dir / AVATAR_SUBDIR
        self.avatar_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"File storage service initialized at: {self.base_dir}")

    def _square_thumbnail(self, content: bytes) -> bytes:
        """Center-crop to a square, resize and re-encode as JPEG"""
        try:
            with Image.open(io.BytesIO(content)) as img:
                if img.mode in ("RGBA", "LA", "P"):
                    img = img.convert("RGB")

                edge = min(img.size)
                left = (img.width - edge) // 2
                top = (img.height - edge) // 2
                square = img.crop((left, top, left + edge, top + edge))
                square = square.resize((self.avatar_size, self.avatar_size), Image.Resampling.LANCZOS)

                buffer = io.BytesIO()
                square.save(buffer, "JPEG", quality=85)
                return buffer.getvalue()
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageError(f"Unreadable image: {e}") from e

    async def save_avatar(self, user_id: uuid.UUID, content: bytes) -> str:
        """
        Store an avatar for a user

        Args:
            user_id: owner of the avatar
            content: raw uploaded image bytes

        Returns:
            Web path of the stored avatar, e.g. /uploads/avatars/<user>_<id>.jpg

        Raises:
            InvalidImageError: content is not an image Pillow can read
        """
        data = self._square_thumbnail(content)
        filename = f"{user_id}_{uuid.uuid4().hex[:8]}.jpg"
        path = self.avatar_dir / filename

        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

        logger.info(f"Saved avatar: {path}")
        return f"{WEB_PREFIX}/{AVATAR_SUBDIR}/{filename}"

    def get_absolute_path(self, web_path: str) -> Optional[Path]:
        """Map a /uploads/... web path back to disk, None for foreign URLs"""
        if not web_path or not web_path.startswith(f"{WEB_PREFIX}/"):
            return None
        relative = web_path[len(WEB_PREFIX) + 1:]
        path = (self.base_dir / relative).resolve()
        if self.base_dir.resolve() not in path.parents:
            return None
        return path

    def delete_file(self, web_path: Optional[str]) -> bool:
        """Remove a stored file; external URLs are left alone"""
        path = self.get_absolute_path(web_path)
        if path is None or not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}", exc_info=True)
            return False
        logger.info(f"Deleted file: {path}")
        return True


_file_storage_instance = None


def get_file_storage() -> FileStorageService:
    """Singleton file storage"""
    global _file_storage_instance
    if _file_storage_instance is None:
        _file_storage_instance = FileStorageService()
    return _file_storage_instance
