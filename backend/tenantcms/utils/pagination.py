from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple, TypedDict, Type, Any

from sqlalchemy.sql import Select, or_, and_

from tenantcms.domain.errors import ValidationError

MAX_LIMIT = 100


class CursorMeta(TypedDict):
    """
    Strongly-typed cursor pagination metadata.

    Explicit keys prevent contract drift across list endpoints.
    """
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """
    Encode a cursor using a stable, deterministic sort key.

    Format: ISO8601|<id>
    """
    if not isinstance(created_at, datetime) or row_id is None:
        raise ValueError("created_at and row_id are required to encode cursor")

    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    """
    Decode a cursor into (created_at, id).

    Raises:
    - ValidationError if cursor format or timestamp is invalid
    """
    if not cursor or "|" not in cursor:
        raise ValidationError("Invalid cursor format")

    ts_str, row_id = cursor.split("|", 1)
    try:
        return datetime.fromisoformat(ts_str), row_id
    except ValueError as exc:
        raise ValidationError("Invalid cursor format") from exc


def parse_limit(raw: Optional[str], default: int = 20) -> int:
    if raw is None or raw == "":
        return default
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError("Limit must be an integer") from None
    if limit <= 0:
        raise ValidationError("Limit must be greater than zero")
    return min(limit, MAX_LIMIT)


def paginate_cursor(
    session,
    stmt: Select,
    *,
    model: Type[Any],
    cursor: Optional[str],
    limit: int,
) -> tuple[list[Any], CursorMeta]:
    """
    Execute a cursor-paginated query, newest first.

    Ordering contract: ORDER BY created_at DESC, id DESC. Fetches limit + 1
    rows to detect continuation.
    """
    if cursor:
        cursor_ts, cursor_id = decode_cursor(cursor)
        stmt = stmt.where(
            or_(
                model.created_at < cursor_ts,
                and_(
                    model.created_at == cursor_ts,
                    model.id < cursor_id,
                ),
            )
        )

    stmt = stmt.order_by(model.created_at.desc(), model.id.desc()).limit(limit + 1)
    rows = list(session.execute(stmt).scalars())

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor: Optional[str] = None
    if items and has_more:
        last = items[-1]
        next_cursor = encode_cursor(last.created_at, last.id)

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
    }
