from tenantcms.domain.identity import Identity
from tenantcms.domain.lifecycle.page import apply_status
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.domain.status import PageStatus
from tenantcms.models import Page
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional

STATUS_ACTIONS = {
    PageStatus.PUBLISHED: "page.publish",
    PageStatus.DRAFT: "page.unpublish",
    PageStatus.ARCHIVED: "page.archive",
}


def change_page_status(session, *, identity: Identity, page_id: str, status: PageStatus) -> Page:
    """
    Move a page through its publication lifecycle.

    Responsibilities:
    - row lock on the page
    - ownership enforcement
    - first-publication timestamp
    - audit logging
    """
    authorize(identity, Action.PAGE_PUBLISH)

    with transactional(session):
        page = scoped_get(session, identity, Page, page_id, for_update=True)
        authorize(identity, Action.PAGE_PUBLISH, page, resource_name="Page")

        previous = page.status
        if apply_status(page, status):
            log_action(
                session,
                identity=identity,
                action=STATUS_ACTIONS[page.status],
                entity_type="page",
                entity_id=page.id,
                payload={"from": previous.value, "to": page.status.value},
            )

    return page
