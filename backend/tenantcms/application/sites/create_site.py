from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.uniqueness import SITE_DOMAIN, guard, reserve
from tenantcms.models import Site
from tenantcms.schemas.site import SiteCreate
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def create_site(session, *, identity: Identity, payload: SiteCreate) -> Site:
    authorize(identity, Action.SITE_CREATE)

    with transactional(session):
        reservations = []
        if payload.domain:
            reservations.append(reserve(session, SITE_DOMAIN, payload.domain))

        with guard(session, *reservations):
            site = Site()
            site.tenant_id = identity.tenant_id
            site.name = payload.name
            site.domain = payload.domain
            site.description = payload.description
            site.theme = payload.theme
            site.seo_settings = payload.seo_settings.to_storage() if payload.seo_settings else {}
            site.is_published = False
            session.add(site)

        log_action(
            session,
            identity=identity,
            action="site.create",
            entity_type="site",
            entity_id=site.id,
            payload={"name": site.name, "domain": site.domain},
        )

    return site
