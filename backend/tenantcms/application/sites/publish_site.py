from tenantcms.domain.identity import Identity
from tenantcms.domain.lifecycle.site import set_site_published
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.models import Site
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def publish_site(session, *, identity: Identity, site_id: str, is_published: bool) -> Site:
    authorize(identity, Action.SITE_PUBLISH)

    with transactional(session):
        site = scoped_get(session, identity, Site, site_id, for_update=True)
        authorize(identity, Action.SITE_PUBLISH, site, resource_name="Site")

        if set_site_published(site, is_published):
            log_action(
                session,
                identity=identity,
                action="site.publish" if is_published else "site.unpublish",
                entity_type="site",
                entity_id=site.id,
            )

    return site
