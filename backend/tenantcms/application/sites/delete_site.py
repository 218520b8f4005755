from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.models import Site
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def delete_site(session, *, identity: Identity, site_id: str) -> None:
    """
    Delete a site; its pages and media go with it.
    """
    authorize(identity, Action.SITE_DELETE)

    with transactional(session):
        site = scoped_get(session, identity, Site, site_id, for_update=True)
        authorize(identity, Action.SITE_DELETE, site, resource_name="Site")

        payload = {
            "name": site.name,
            "pages": len(site.pages),
            "media": len(site.media),
        }
        session.delete(site)

        log_action(
            session,
            identity=identity,
            action="site.delete",
            entity_type="site",
            entity_id=site_id,
            payload=payload,
        )
