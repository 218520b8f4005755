"""
Authorization decisions.

Every capability is declared once in ``CAPABILITIES``; routes and use cases
ask ``can_perform`` / ``authorize`` instead of comparing role strings.
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from .errors import AuthenticationError, AuthorizationError, NotFoundError
from .identity import Identity
from .roles import Action, DenyReason, Role


def roles_from(minimum: Role) -> FrozenSet[Role]:
    """Every role ranked at or above ``minimum``."""
    return frozenset(role for role in Role if role.at_least(minimum))


EVERYONE: FrozenSet[Role] = roles_from(Role.VIEWER)
ADMINS: FrozenSet[Role] = roles_from(Role.ADMIN)
EDITORS: FrozenSet[Role] = roles_from(Role.EDITOR)

CAPABILITIES: Dict[Action, FrozenSet[Role]] = {
    Action.SITE_READ: EVERYONE,
    Action.SITE_CREATE: ADMINS,
    Action.SITE_UPDATE: ADMINS,
    Action.SITE_PUBLISH: ADMINS,
    Action.SITE_DELETE: ADMINS,

    Action.PAGE_READ: EVERYONE,
    Action.PAGE_CREATE: EDITORS,
    Action.PAGE_UPDATE: EDITORS,
    Action.PAGE_PUBLISH: EDITORS,
    Action.PAGE_DELETE: EDITORS,

    Action.MEDIA_READ: EVERYONE,
    Action.MEDIA_CREATE: EDITORS,
    Action.MEDIA_UPDATE: EDITORS,
    Action.MEDIA_DELETE: EDITORS,

    Action.USER_LIST: ADMINS,
    Action.AUDIT_READ: ADMINS,
}

# Actions where roles outside OWNER_EXEMPT may only touch their own pages
OWNERSHIP_CHECKED: FrozenSet[Action] = frozenset({
    Action.PAGE_UPDATE,
    Action.PAGE_PUBLISH,
    Action.PAGE_DELETE,
})
OWNER_EXEMPT: FrozenSet[Role] = ADMINS


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


def resource_tenant_id(resource: Any) -> Optional[str]:
    """Tenant owning ``resource``; Pages and Media resolve through their Site."""
    tenant_id = getattr(resource, "tenant_id", None)
    if tenant_id is not None:
        return tenant_id

    site = getattr(resource, "site", None)
    if site is not None:
        return site.tenant_id
    return None


def can_perform(identity: Optional[Identity], action: Action, resource: Any = None) -> Decision:
    if identity is None:
        return Decision(False, DenyReason.NOT_AUTHENTICATED)

    # Out-of-tenant resources are reported before anything that would reveal them
    if resource is not None and resource_tenant_id(resource) != identity.tenant_id:
        return Decision(False, DenyReason.OUT_OF_SCOPE)

    if identity.role not in CAPABILITIES[action]:
        return Decision(False, DenyReason.ROLE_INSUFFICIENT)

    if (
        resource is not None
        and action in OWNERSHIP_CHECKED
        and identity.role not in OWNER_EXEMPT
        and getattr(resource, "author_id", None) != identity.user_id
    ):
        return Decision(False, DenyReason.NOT_OWNER)

    return ALLOW


def authorize(
    identity: Optional[Identity],
    action: Action,
    resource: Any = None,
    *,
    resource_name: str = "Resource",
) -> None:
    """Raise the error matching ``can_perform``'s deny reason."""
    decision = can_perform(identity, action, resource)
    if decision:
        return

    if decision.reason is DenyReason.NOT_AUTHENTICATED:
        raise AuthenticationError()
    if decision.reason is DenyReason.OUT_OF_SCOPE:
        raise NotFoundError(resource_name)
    if decision.reason is DenyReason.NOT_OWNER:
        raise AuthorizationError(
            "You can only modify your own pages",
            reason=DenyReason.NOT_OWNER,
        )

    allowed = sorted(role.value for role in CAPABILITIES[action])
    raise AuthorizationError(
        f"Required role: {' or '.join(allowed)}, your role: {identity.role.value}",
        reason=DenyReason.ROLE_INSUFFICIENT,
    )
