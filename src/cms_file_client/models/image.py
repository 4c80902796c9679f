from typing import NamedTuple, Optional


class ImageDimensions(NamedTuple):
    """Результат пробы ассета: [ширина, высота, mime]."""
    width: int
    height: int
    mime_type: Optional[str] = None
