from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.models import Page
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def delete_page(session, *, identity: Identity, page_id: str) -> None:
    authorize(identity, Action.PAGE_DELETE)

    with transactional(session):
        page = scoped_get(session, identity, Page, page_id, for_update=True)
        authorize(identity, Action.PAGE_DELETE, page, resource_name="Page")

        payload = {"site_id": page.site_id, "slug": page.slug}
        session.delete(page)

        log_action(
            session,
            identity=identity,
            action="page.delete",
            entity_type="page",
            entity_id=page_id,
            payload=payload,
        )
