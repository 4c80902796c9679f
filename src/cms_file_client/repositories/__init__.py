from .api_connection import ApiConnection
from .image_probe import ImageProbe
from .file_repository import FileRepository

__all__ = [
    "ApiConnection",
    "ImageProbe",
    "FileRepository",
]
