"""
File storage for store content (logos, images)
"""
import io
import logging
import os
import shutil
from typing import Optional

from PIL import Image, UnidentifiedImageError

from merchant_store.core.config import settings
from merchant_store.core.exceptions import InvalidRequestException
from merchant_store.schemas.content import FileContentType, InputContentFile

logger = logging.getLogger(__name__)


class ContentService:
    """Stores uploaded files under <root>/<store code>/<content type>/"""

    STATIC_URL = "/static"

    def __init__(self, root: Optional[str] = None):
        self.root = root or settings.UPLOAD_FOLDER
        self.allowed_extensions = {ext.lower() for ext in settings.ALLOWED_EXTENSIONS}
        self.max_file_size = settings.MAX_UPLOAD_SIZE

    def _directory(self, store_code: str, file_content_type: FileContentType) -> str:
        return os.path.join(self.root, store_code, file_content_type.value)

    def _validate_file(self, content_file: InputContentFile, content: bytes) -> None:
        """Checks name, size and that the payload is a readable image"""
        file_name = os.path.basename(content_file.file_name or "")
        if not file_name or file_name != content_file.file_name:
            raise InvalidRequestException("Invalid file name")

        extension = file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else ''
        if extension not in self.allowed_extensions:
            raise InvalidRequestException(
                f"File extension not allowed. Use: {', '.join(sorted(self.allowed_extensions))}"
            )

        if len(content) > self.max_file_size:
            raise InvalidRequestException(
                f"File too large. Maximum: {self.max_file_size / (1024 * 1024)}MB"
            )

        try:
            with Image.open(io.BytesIO(content)) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidRequestException(f"Invalid image: {str(e)}")

    def add_file(self, store_code: str, content_file: InputContentFile) -> str:
        """
        Writes a file for a store

        Returns:
            the stored file name
        """
        content = content_file.file.read()
        self._validate_file(content_file, content)

        directory = self._directory(store_code, content_file.file_content_type)
        os.makedirs(directory, exist_ok=True)
        filepath = os.path.join(directory, content_file.file_name)

        with open(filepath, 'wb') as f:
            f.write(content)

        logger.info(f"[Content] Stored {content_file.file_content_type.value} {filepath} ({len(content)} bytes)")
        return content_file.file_name

    def remove_file(self, store_code: str, file_content_type: FileContentType, file_name: str) -> bool:
        """Removes one file, returns False when it did not exist"""
        filepath = os.path.join(self._directory(store_code, file_content_type), file_name)
        if not os.path.exists(filepath):
            return False
        os.remove(filepath)
        logger.info(f"[Content] Removed {filepath}")
        return True

    def remove_files(self, store_code: str) -> None:
        """Removes every file stored for a store"""
        directory = os.path.join(self.root, store_code)
        if os.path.isdir(directory):
            shutil.rmtree(directory)
            logger.info(f"[Content] Removed content of store {store_code}")

    def public_path(self, store_code: str, file_content_type: FileContentType, file_name: str) -> str:
        return f"{self.STATIC_URL}/{store_code}/{file_content_type.value}/{file_name}"
