import re
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional

from sqlalchemy import select, update

from tenantcms.domain.errors import ValidationError
from tenantcms.domain.status import PageStatus
from tenantcms.models import Page, Site

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

# Explicit allowed state transitions; no state is terminal
ALLOWED_PAGE_TRANSITIONS: Dict[PageStatus, FrozenSet[PageStatus]] = {
    status: frozenset(PageStatus) - {status} for status in PageStatus
}


def assert_page_transition(*, from_status: Optional[PageStatus], to_status) -> PageStatus:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes.
    """
    try:
        to_status = PageStatus(to_status)
    except ValueError:
        raise ValidationError(f"Unknown page status: {to_status}") from None

    if from_status is None or from_status == to_status:
        return to_status

    if to_status not in ALLOWED_PAGE_TRANSITIONS[PageStatus(from_status)]:
        raise ValidationError(
            f"Illegal page transition: {from_status.value} → {to_status.value}"
        )
    return to_status


def validate_slug(slug: Optional[str]) -> str:
    if not slug or not SLUG_PATTERN.match(slug):
        raise ValidationError(
            "Slug must contain only lowercase letters, numbers, and hyphens"
        )
    return slug


def apply_status(page: Page, to_status, *, now: Optional[datetime] = None) -> bool:
    """
    Move ``page`` to ``to_status``; returns whether the status changed.

    ``published_at`` records the first publication and survives later
    archive/draft/republish cycles.
    """
    from_status = page.status
    to_status = assert_page_transition(from_status=from_status, to_status=to_status)

    entering_published = to_status == PageStatus.PUBLISHED and from_status != PageStatus.PUBLISHED
    if entering_published and page.published_at is None:
        page.published_at = now or datetime.now(timezone.utc)

    page.status = to_status
    return from_status != to_status


def claim_home_page(session, page: Page, site_id: str) -> int:
    """
    Make ``page`` the only home page of ``site_id``.

    Locks the site row so concurrent claims serialize, then clears the flag on
    every sibling before setting it here. Must run inside the caller's
    transaction; returns how many siblings were demoted.
    """
    with session.no_autoflush:
        session.execute(
            select(Site.id).where(Site.id == site_id).with_for_update()
        )

        stmt = (
            update(Page)
            .where(Page.site_id == site_id, Page.is_home_page.is_(True))
            .values(is_home_page=False)
        )
        if page.id is not None:
            stmt = stmt.where(Page.id != page.id)

        demoted = session.execute(stmt).rowcount

    page.is_home_page = True
    return demoted
