from typing import Tuple

from flask import current_app

from tenantcms.domain.identity import Identity
from tenantcms.domain.roles import Role
from tenantcms.domain.uniqueness import TENANT_DOMAIN, USER_EMAIL, guard, reserve
from tenantcms.models import Tenant, User
from tenantcms.schemas.auth import RegisterRequest
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def register_tenant(session, *, payload: RegisterRequest) -> Tuple[Tenant, User]:
    """
    Create a tenant together with its first ADMIN user.

    Both rows commit together or not at all; a taken email or domain is a
    ConflictError.
    """
    with transactional(session):
        reservations = (
            reserve(session, USER_EMAIL, payload.email),
            reserve(session, TENANT_DOMAIN, payload.tenant_domain),
        )

        with guard(session, *reservations):
            tenant = Tenant()
            tenant.name = payload.tenant_name
            tenant.domain = payload.tenant_domain

            user = User()
            user.tenant = tenant
            user.email = payload.email
            user.first_name = payload.first_name
            user.last_name = payload.last_name
            user.role = Role.ADMIN  # first user of a tenant is always its admin
            user.is_active = True
            user.set_password(payload.password)

            session.add_all([tenant, user])

        log_action(
            session,
            identity=Identity.of(user),
            action="tenant.register",
            entity_type="tenant",
            entity_id=tenant.id,
            payload={"domain": tenant.domain, "admin_id": user.id},
        )

    current_app.logger.info("Registered tenant %s with admin %s", tenant.id, user.id)
    return tenant, user
