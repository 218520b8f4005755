from typing import Any, Dict

from tenantcms.models import Tenant, User
from .timestamps import iso


def normalize_user(user: User) -> Dict[str, Any]:
    # password_hash is never serialized
    return {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": user.role.value,
        "isActive": user.is_active,
        "tenantId": user.tenant_id,
        "createdAt": iso(user.created_at),
        "updatedAt": iso(user.updated_at),
    }


def normalize_tenant(tenant: Tenant) -> Dict[str, Any]:
    return {
        "id": tenant.id,
        "name": tenant.name,
        "domain": tenant.domain,
        "settings": tenant.settings or {},
        "createdAt": iso(tenant.created_at),
    }


def normalize_session(user: User, tokens: Dict[str, Any]) -> Dict[str, Any]:
    """Body returned by register and login."""
    return {
        "user": normalize_user(user),
        "tenant": normalize_tenant(user.tenant),
        "tokens": tokens,
    }
