from typing import Optional

from tenantcms.domain.errors import ValidationError
from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.domain.uniqueness import SITE_DOMAIN, guard, reserve
from tenantcms.models import Site
from tenantcms.schemas.site import SiteUpdate
from tenantcms.utils.audit import log_action
from tenantcms.utils.optimistic_lock import enforce_optimistic_lock
from tenantcms.utils.transaction import transactional


def update_site(
    session,
    *,
    identity: Identity,
    site_id: str,
    payload: SiteUpdate,
    if_unmodified_since: Optional[str] = None,
) -> Site:
    """
    Update mutable fields on a site.

    Design rules:
    - A changed domain is re-checked for uniqueness
    - No silent no-op updates
    """
    authorize(identity, Action.SITE_UPDATE)

    changes = payload.changes()
    if not changes:
        raise ValidationError("No valid fields provided for update")

    with transactional(session):
        site = scoped_get(session, identity, Site, site_id, for_update=True)
        authorize(identity, Action.SITE_UPDATE, site, resource_name="Site")
        enforce_optimistic_lock(site, if_unmodified_since)

        if "seo_settings" in changes:
            seo = payload.seo_settings
            changes["seo_settings"] = seo.to_storage() if seo else {}

        reservations = []
        if changes.get("domain") and changes["domain"] != site.domain:
            reservations.append(
                reserve(session, SITE_DOMAIN, changes["domain"], exclude_id=site.id)
            )

        changed_fields: list[str] = []
        with guard(session, *reservations):
            for field, value in changes.items():
                if getattr(site, field) != value:
                    setattr(site, field, value)
                    changed_fields.append(field)

        if changed_fields:
            log_action(
                session,
                identity=identity,
                action="site.update",
                entity_type="site",
                entity_id=site.id,
                payload={"fields": sorted(changed_fields)},
            )

    return site
