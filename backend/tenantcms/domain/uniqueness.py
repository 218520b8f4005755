"""
Uniqueness of human-facing identifiers.

The storage engine's unique constraints are authoritative. ``reserve`` is a
pre-flight lookup that produces a friendly conflict before the write;
``guard`` flushes the write and turns a constraint violation raised by a
concurrent writer into the same ``ConflictError``.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from tenantcms.models import Media, Page, Site, Tenant, User
from .errors import ConflictError


@dataclass(frozen=True)
class UniqueScope:
    name: str
    model: type
    column: str
    constraint: str
    parent: Optional[str] = None
    message: Optional[str] = None

    @property
    def columns(self) -> Tuple[str, ...]:
        if self.parent is None:
            return (self.column,)
        return (self.parent, self.column)

    @property
    def table(self) -> str:
        return self.model.__tablename__


TENANT_DOMAIN = UniqueScope(
    "tenant.domain", Tenant, "domain", "uq_tenant_domain",
    message="This domain is already registered",
)
SITE_DOMAIN = UniqueScope(
    "site.domain", Site, "domain", "uq_site_domain",
    message="A site with this domain already exists",
)
USER_EMAIL = UniqueScope(
    "user.email", User, "email", "uq_user_email",
    message="An account with this email already exists",
)
PAGE_SLUG = UniqueScope(
    "page.slug", Page, "slug", "uq_page_slug_per_site", parent="site_id",
    message="A page with this slug already exists in this site",
)
MEDIA_FILENAME = UniqueScope(
    "media.filename", Media, "filename", "uq_media_filename_per_site", parent="site_id",
    message="A media file with this filename already exists in this site",
)

# Partial index over (site_id) WHERE is_home_page; the key is the site id
HOME_PAGE = UniqueScope(
    "page.home", Page, "site_id", "uq_page_home_per_site",
    message="Another page of this site was made the home page concurrently",
)


@dataclass(frozen=True)
class Reservation:
    scope: UniqueScope
    key: str
    parent_id: Optional[str] = None


def reserve(
    session,
    scope: UniqueScope,
    key: str,
    *,
    parent_id: Optional[str] = None,
    exclude_id: Optional[str] = None,
) -> Reservation:
    """
    Pre-flight check that ``key`` is free in ``scope``.

    Must run inside the transaction that performs the write, and the write
    must go through ``guard`` so a concurrent winner is still detected.
    """
    model = scope.model
    stmt = select(model.id).where(getattr(model, scope.column) == key)
    if scope.parent is not None:
        stmt = stmt.where(getattr(model, scope.parent) == parent_id)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)

    if session.execute(stmt.limit(1)).first() is not None:
        raise ConflictError(scope.message, scope=scope.name, key=key)

    return Reservation(scope=scope, key=key, parent_id=parent_id)


def home_page_reservation(site_id: str) -> Reservation:
    return Reservation(scope=HOME_PAGE, key=site_id)


def _constraint_name(exc: IntegrityError) -> Optional[str]:
    # psycopg2 and psycopg expose the violated constraint on .diag
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _sqlite_columns(message: str) -> Optional[frozenset]:
    # "UNIQUE constraint failed: pages.site_id, pages.slug"
    marker = "UNIQUE constraint failed:"
    if marker not in message:
        return None
    columns = message.split(marker, 1)[1]
    return frozenset(part.strip() for part in columns.split(","))


def matching_reservation(exc: IntegrityError, reservations) -> Optional[Reservation]:
    constraint = _constraint_name(exc)
    message = str(exc.orig)
    sqlite_columns = _sqlite_columns(message)

    for reservation in reservations:
        scope = reservation.scope
        if constraint is not None and constraint == scope.constraint:
            return reservation
        if scope.constraint in message:
            return reservation
        expected = frozenset(f"{scope.table}.{column}" for column in scope.columns)
        if sqlite_columns is not None and sqlite_columns == expected:
            return reservation
    return None


@contextmanager
def guard(session, *reservations: Reservation) -> Iterator[None]:
    """Flush the enclosed writes, mapping unique violations to ``ConflictError``."""
    try:
        yield
        session.flush()
    except IntegrityError as exc:
        reservation = matching_reservation(exc, reservations)
        if reservation is None:
            raise
        current_app.logger.info(
            "Unique constraint %s rejected key %r",
            reservation.scope.constraint,
            reservation.key,
        )
        raise ConflictError(
            reservation.scope.message,
            scope=reservation.scope.name,
            key=reservation.key,
        ) from exc
