from typing import Any, Dict

from tenantcms.models import AuditLog
from .timestamps import iso


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """
    Normalizes an AuditLog model into API-safe JSON.

    Notes:
    - entity_id names the row the action targeted
    - payload is assumed to be JSON-serializable
    """
    return {
        "id": log.id,
        "tenantId": log.tenant_id,
        "actorId": log.actor_id,
        "action": log.action,
        "entityType": log.entity_type,
        "entityId": log.entity_id,
        "payload": log.payload or {},
        "createdAt": iso(log.created_at),
    }
