from tenantcms.domain.identity import Identity
from tenantcms.domain.lifecycle.page import apply_status, claim_home_page, validate_slug
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.domain.status import PageStatus
from tenantcms.domain.uniqueness import PAGE_SLUG, guard, home_page_reservation, reserve
from tenantcms.models import Page, Site
from tenantcms.schemas.page import PageCreate
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def create_page(session, *, identity: Identity, payload: PageCreate) -> Page:
    """
    Create a page inside one of the caller's sites.

    Edge cases handled:
    - Site of another tenant (reported as missing)
    - Duplicate slug within the site
    - Home-page flag taken over from a sibling in the same transaction
    """
    authorize(identity, Action.PAGE_CREATE)
    slug = validate_slug(payload.slug)

    with transactional(session):
        site = scoped_get(
            session, identity, Site, payload.site_id,
            for_update=bool(payload.is_home_page),
        )
        reservations = [reserve(session, PAGE_SLUG, slug, parent_id=site.id)]

        page = Page()
        page.site_id = site.id
        page.author_id = identity.user_id
        page.title = payload.title
        page.slug = slug
        page.content = payload.content or {}
        page.excerpt = payload.excerpt
        page.seo_title = payload.seo_title
        page.seo_description = payload.seo_description
        page.featured_image = payload.featured_image
        page.is_home_page = False
        apply_status(page, payload.status or PageStatus.DRAFT)

        with guard(session, *reservations, home_page_reservation(site.id)):
            # Siblings are demoted before the new row exists
            if payload.is_home_page:
                claim_home_page(session, page, site.id)
            session.add(page)

        log_action(
            session,
            identity=identity,
            action="page.create",
            entity_type="page",
            entity_id=page.id,
            payload={
                "site_id": site.id,
                "slug": page.slug,
                "status": page.status.value,
                "is_home_page": page.is_home_page,
            },
        )

    return page
