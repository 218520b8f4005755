from typing import Any, Dict, Iterable, List

from tenantcms.domain.status import MediaKind, media_kind_of
from tenantcms.models import Media
from .timestamps import iso

GROUPS = tuple(kind.value for kind in MediaKind) + ("other",)


def normalize_media(media: Media) -> Dict[str, Any]:
    return {
        "id": media.id,
        "siteId": media.site_id,
        "filename": media.filename,
        "originalName": media.original_name,
        "mimeType": media.mime_type,
        "size": media.size,
        "url": media.url,
        "alt": media.alt,
        "createdAt": iso(media.created_at),
        "updatedAt": iso(media.updated_at),
    }


def normalize_media_listing(items: Iterable[Media]) -> Dict[str, Any]:
    """Flat list plus the same items grouped by kind."""
    media: List[Dict[str, Any]] = []
    grouped: Dict[str, List[Dict[str, Any]]] = {group: [] for group in GROUPS}

    for item in items:
        data = normalize_media(item)
        media.append(data)
        grouped[media_kind_of(item.mime_type)].append(data)

    return {"media": media, "grouped": grouped, "total": len(media)}
