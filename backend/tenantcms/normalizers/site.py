from typing import Any, Dict

from pydantic.alias_generators import to_camel

from tenantcms.models import Site
from .media import normalize_media
from .page import normalize_page_summary
from .timestamps import iso

RECENT_MEDIA = 10


def _base(site: Site) -> Dict[str, Any]:
    return {
        "id": site.id,
        "tenantId": site.tenant_id,
        "name": site.name,
        "domain": site.domain,
        "description": site.description,
        "theme": site.theme,
        "seoSettings": {to_camel(key): value for key, value in (site.seo_settings or {}).items()},
        "isPublished": site.is_published,
        "createdAt": iso(site.created_at),
        "updatedAt": iso(site.updated_at),
    }


def normalize_site(site: Site, *, page_count: int = 0, media_count: int = 0) -> Dict[str, Any]:
    """List representation: page summaries plus counts."""
    data = _base(site)
    data["pages"] = [normalize_page_summary(page) for page in site.pages]
    data["pageCount"] = page_count
    data["mediaCount"] = media_count
    return data


def normalize_site_detail(site: Site) -> Dict[str, Any]:
    data = _base(site)
    # Relationships are already ordered newest first
    data["pages"] = [normalize_page_summary(page) for page in site.pages]
    data["media"] = [normalize_media(media) for media in site.media[:RECENT_MEDIA]]
    return data
