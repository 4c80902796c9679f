import logging
from io import BytesIO
from typing import Optional

import httpx
from PIL import Image

from cms_file_client.models.image import ImageDimensions

logger = logging.getLogger(__name__)


class ImageProbe:
    """
    Определяет размеры изображения, скачивая сам ассет и читая заголовок через Pillow.

    Любая ошибка (битый URL, сеть, 404, не картинка) не пробрасывается: probe() возвращает None.
    """

    def __init__(self, timeout: float = 30.0, transport: httpx.BaseTransport | None = None):
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    def close(self):
        self._client.close()

    def probe(self, url: str) -> Optional[ImageDimensions]:
        try:
            response = self._client.get(url)
            response.raise_for_status()
            with Image.open(BytesIO(response.content)) as img:
                width, height = img.size
                return ImageDimensions(width, height, Image.MIME.get(img.format))
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"Could not resolve image dimensions for {url}: {e}")
            return None
