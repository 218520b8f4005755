from typing import ClassVar, Optional, Tuple

from pydantic import Field

from .base import PartialUpdate, RequestModel
from .page import URL_PATTERN


class MediaCreate(RequestModel):
    site_id: str = Field(min_length=1)
    filename: str = Field(min_length=1, max_length=255)
    original_name: str = Field(min_length=1, max_length=255)
    mime_type: str = Field(min_length=1, max_length=255)
    size: int = Field(gt=0)
    url: str = Field(pattern=URL_PATTERN)
    alt: Optional[str] = Field(default=None, max_length=500)


class MediaUpdate(PartialUpdate):
    NOT_NULLABLE: ClassVar[Tuple[str, ...]] = ("filename",)

    filename: Optional[str] = Field(default=None, min_length=1, max_length=255)
    alt: Optional[str] = Field(default=None, max_length=500)
