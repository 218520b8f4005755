from typing import Optional

from tenantcms.domain.errors import ValidationError
from tenantcms.domain.identity import Identity
from tenantcms.domain.lifecycle.page import apply_status, claim_home_page, validate_slug
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.domain.uniqueness import PAGE_SLUG, guard, home_page_reservation, reserve
from tenantcms.models import Page
from tenantcms.schemas.page import PageUpdate
from tenantcms.utils.audit import log_action
from tenantcms.utils.optimistic_lock import enforce_optimistic_lock
from tenantcms.utils.transaction import transactional

# Fields copied verbatim; slug, status and is_home_page have their own rules
PLAIN_FIELDS = (
    "title",
    "content",
    "excerpt",
    "seo_title",
    "seo_description",
    "featured_image",
)


def update_page(
    session,
    *,
    identity: Identity,
    page_id: str,
    payload: PageUpdate,
    if_unmodified_since: Optional[str] = None,
) -> Page:
    """
    Update mutable fields on a page.

    Design rules:
    - Ownership is checked against the stored author
    - Slug uniqueness is re-checked only when the slug changes
    - Setting the home-page flag demotes every sibling atomically
    - Any failure leaves siblings untouched
    """
    authorize(identity, Action.PAGE_UPDATE)

    changes = payload.changes()
    if not changes:
        raise ValidationError("No valid fields provided for update")

    with transactional(session):
        page = scoped_get(session, identity, Page, page_id, for_update=True)
        authorize(identity, Action.PAGE_UPDATE, page, resource_name="Page")
        enforce_optimistic_lock(page, if_unmodified_since)

        reservations = [home_page_reservation(page.site_id)]
        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != page.slug:
            validate_slug(new_slug)
            reservations.append(
                reserve(session, PAGE_SLUG, new_slug, parent_id=page.site_id, exclude_id=page.id)
            )

        changed_fields: list[str] = []
        with guard(session, *reservations):
            wants_home = changes.get("is_home_page")
            if wants_home and not page.is_home_page:
                claim_home_page(session, page, page.site_id)
                changed_fields.append("is_home_page")
            elif wants_home is False and page.is_home_page:
                page.is_home_page = False
                changed_fields.append("is_home_page")

            if new_slug is not None and new_slug != page.slug:
                page.slug = new_slug
                changed_fields.append("slug")

            for field in PLAIN_FIELDS:
                if field in changes and getattr(page, field) != changes[field]:
                    setattr(page, field, changes[field])
                    changed_fields.append(field)

            if "status" in changes and apply_status(page, changes["status"]):
                changed_fields.append("status")

        if changed_fields:
            log_action(
                session,
                identity=identity,
                action="page.update",
                entity_type="page",
                entity_id=page.id,
                payload={"fields": sorted(changed_fields)},
            )

    return page
