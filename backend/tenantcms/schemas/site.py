from typing import ClassVar, List, Optional, Tuple

from pydantic import Field, StrictBool

from .base import PartialUpdate, RequestModel


class SeoSettings(RequestModel):
    default_title: Optional[str] = None
    default_description: Optional[str] = None
    keywords: Optional[List[str]] = None

    def to_storage(self) -> dict:
        """Stored form: snake_case keys, unset and null entries dropped."""
        return self.model_dump(exclude_none=True)


class SiteCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    domain: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    theme: str = Field(default="default", min_length=1, max_length=100)
    seo_settings: Optional[SeoSettings] = None


class SiteUpdate(PartialUpdate):
    NOT_NULLABLE: ClassVar[Tuple[str, ...]] = ("name", "theme")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    domain: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    theme: Optional[str] = Field(default=None, min_length=1, max_length=100)
    seo_settings: Optional[SeoSettings] = None


class SitePublish(RequestModel):
    is_published: StrictBool
