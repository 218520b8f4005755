from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import Field, StrictBool

from tenantcms.domain.lifecycle.page import SLUG_PATTERN
from tenantcms.domain.status import PageStatus
from .base import PartialUpdate, RequestModel

URL_PATTERN = r"^https?://\S+$"


class PageCreate(RequestModel):
    site_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=200)
    slug: str = Field(min_length=1, max_length=200, pattern=SLUG_PATTERN.pattern)
    content: Optional[Dict[str, Any]] = None
    excerpt: Optional[str] = None
    status: Optional[PageStatus] = None
    is_home_page: Optional[StrictBool] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    featured_image: Optional[str] = Field(default=None, pattern=URL_PATTERN)


class PageUpdate(PartialUpdate):
    NOT_NULLABLE: ClassVar[Tuple[str, ...]] = ("title", "slug", "status", "is_home_page", "content")

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN.pattern)
    content: Optional[Dict[str, Any]] = None
    excerpt: Optional[str] = None
    status: Optional[PageStatus] = None
    is_home_page: Optional[StrictBool] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    featured_image: Optional[str] = Field(default=None, pattern=URL_PATTERN)


class PageStatusChange(RequestModel):
    status: PageStatus
