# merchant_store/schemas/content.py
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO


class FileContentType(str, Enum):
    LOGO = "LOGO"
    IMAGE = "IMAGE"
    STATIC_FILE = "STATIC_FILE"


@dataclass
class InputContentFile:
    """Binary payload handed to the content storage"""
    file_name: str
    mime_type: str
    file_content_type: FileContentType
    file: BinaryIO
