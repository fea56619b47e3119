import logging
import shutil
from pathlib import Path
from typing import Optional

from showdesk.core.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


class ShowAssetStorage:
    """
    File storage for show assets.

    Files live under ``<root>/<bucket>/<show_id>/<file_name>`` and are exposed
    at ``<base_url>/<bucket>/<show_id>/<file_name>``.
    """

    def __init__(self, root: str, base_url: str, bucket: str = "show-assets"):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket

    def _resolve(self, path: str) -> Path:
        target = (self.bucket_dir / path).resolve()
        if not target.is_relative_to(self.bucket_dir.resolve()):
            raise StorageError(f"Path escapes storage bucket: {path}")
        return target

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{self.bucket}/{path}"

    def path_from_url(self, url: Optional[str]) -> Optional[str]:
        """Storage path for one of our URLs, None for anything else."""
        if not url:
            return None
        parts = url.split(f"/{self.bucket}/", 1)
        if len(parts) < 2 or not parts[1]:
            return None
        return parts[1]

    def upload(self, path: str, data: bytes) -> str:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("Stored %s (%d bytes)", path, len(data))
        return self.public_url(path)

    def read(self, url: str) -> Optional[bytes]:
        path = self.path_from_url(url)
        if path is None:
            return None
        target = self._resolve(path)
        if not target.is_file():
            raise StorageError(f"File not found: {path}")
        return target.read_bytes()

    def remove(self, url: Optional[str]) -> bool:
        path = self.path_from_url(url)
        if path is None:
            return False
        target = self._resolve(path)
        if target.is_file():
            target.unlink()
            logger.info("Removed %s", path)
            return True
        return False

    def remove_prefix(self, prefix: str) -> None:
        target = self._resolve(prefix)
        if target.is_dir():
            shutil.rmtree(target)
            logger.info("Removed all files under %s", prefix)


def get_storage() -> ShowAssetStorage:
    return ShowAssetStorage(
        root=settings.MEDIA_ROOT,
        base_url=f"{settings.PUBLIC_BASE_URL.rstrip('/')}{settings.MEDIA_URL}",
        bucket=settings.STORAGE_BUCKET,
    )
