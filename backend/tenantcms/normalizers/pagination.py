from typing import Any, Callable, Dict, List

from tenantcms.utils.pagination import CursorMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    cursor: CursorMeta,
) -> Dict[str, Any]:
    """Cursor-paginated envelope shared by list endpoints."""
    return {
        "items": [normalize_fn(item) for item in items],
        "pagination": {
            "hasMore": cursor["has_more"],
            "nextCursor": cursor["next_cursor"],
        },
    }
