"""
Storage for signed lease documents.

Files are written under SIGNED_DOCS_DIR and exposed under SIGNED_DOCS_BASE_URL.
"""
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional
from app.core.config import settings

logger = logging.getLogger(__name__)


class FileStorageError(Exception):
    """Base exception for file storage errors"""
    pass


class LocalFileStorage:
    """Service for storing signed documents on the local filesystem"""

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None):
        self.root = Path(root or settings.SIGNED_DOCS_DIR)
        self.base_url = (base_url or settings.SIGNED_DOCS_BASE_URL).rstrip("/")

    def generate_unique_filename(self, stem: str, ext: str, prefix: str = "") -> str:
        """
        Generate a unique relative path: prefix/YYYY-MM-DD/stem-uuid_timestamp.ext
        """
        date_prefix = datetime.utcnow().strftime("%Y-%m-%d")
        unique_id = str(uuid.uuid4())[:8]
        timestamp = datetime.utcnow().strftime("%H%M%S")

        filename = f"{stem}-{unique_id}_{timestamp}.{ext.lstrip('.')}"

        if prefix:
            return f"{prefix.strip('/')}/{date_prefix}/{filename}"
        return f"{date_prefix}/{filename}"

    def save_bytes(self, content: bytes, stem: str, ext: str, prefix: str = "") -> str:
        """
        Write `content` and return its public URL.

        Raises:
            FileStorageError: If the file cannot be written
        """
        relative_path = self.generate_unique_filename(stem, ext, prefix)
        target = self.root / relative_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise FileStorageError(f"Failed to store {relative_path}: {e}")

        logger.info(f"Stored {relative_path} ({len(content)} bytes)")
        return f"{self.base_url}/{relative_path}"


file_storage = LocalFileStorage()
