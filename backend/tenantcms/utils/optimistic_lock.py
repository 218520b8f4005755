from datetime import timezone
from typing import Optional

from dateutil.parser import parse, ParserError

from tenantcms.domain.errors import ConflictError, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity, if_unmodified_since: Optional[str]) -> None:
    """
    Enforces optimistic locking using the If-Unmodified-Since header value.
    Raises ConflictError if the entity has been modified since.
    """
    if not if_unmodified_since:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(if_unmodified_since))
    except (ParserError, OverflowError, ValueError):
        raise ValidationError("Invalid If-Unmodified-Since header") from None

    server_ts = normalize_ts(entity.updated_at)

    # HTTP dates carry whole seconds; ISO echoes of updatedAt keep microseconds
    if client_ts.microsecond == 0:
        server_ts = server_ts.replace(microsecond=0)

    if server_ts > client_ts:
        raise ConflictError(
            "Conflict detected. Resource has been modified.",
            scope="precondition",
            key=entity.id,
        )
