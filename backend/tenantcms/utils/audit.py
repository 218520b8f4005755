from typing import Optional
from tenantcms.domain.identity import Identity
from tenantcms.models import AuditLog


def log_action(
    session,
    *,
    identity: Identity,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
) -> AuditLog:
    """Append an audit entry to the caller's open transaction."""
    log = AuditLog()

    log.actor_id = identity.user_id
    log.tenant_id = identity.tenant_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    session.add(log)
    return log
