"""
Tenant scoping for every read and write.

``tenant_predicate`` is the mandatory clause; the ``*Filter`` builders add the
optional, known filter fields on top of it.
"""
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from sqlalchemy import or_, select
from sqlalchemy.sql import Select

from tenantcms.models import AuditLog, Media, Page, Site, Tenant, User
from .errors import NotFoundError, ValidationError
from .identity import Identity
from .status import DOCUMENT_MIME_TYPES, MediaKind, PageStatus

TENANT_OWNED = (Site, User, AuditLog)
SITE_OWNED = (Page, Media)


def tenant_predicate(identity: Identity, model: Any):
    if model in SITE_OWNED:
        tenant_sites = select(Site.id).where(Site.tenant_id == identity.tenant_id)
        return model.site_id.in_(tenant_sites)
    if model in TENANT_OWNED:
        return model.tenant_id == identity.tenant_id
    if model is Tenant:
        return Tenant.id == identity.tenant_id
    raise TypeError(f"{model!r} is not a tenant-scoped model")


def scoped_select(identity: Identity, model: Any, *criteria) -> Select:
    return select(model).where(tenant_predicate(identity, model), *criteria)


def scoped_get(session, identity: Identity, model: Any, entity_id: Optional[str], *, for_update: bool = False):
    """
    Load one row of ``model`` inside the caller's tenant.

    A row that exists in another tenant is indistinguishable from a missing one.
    """
    if not entity_id:
        raise NotFoundError(model.__name__)

    stmt = scoped_select(identity, model, model.id == entity_id)
    if for_update:
        stmt = stmt.with_for_update()

    entity = session.execute(stmt).scalar_one_or_none()
    if entity is None:
        raise NotFoundError(model.__name__)
    return entity


def _contains(column, needle: str):
    # % and _ in user input match literally
    return column.icontains(needle, autoescape=True)


@dataclass(frozen=True)
class PageFilter:
    site_id: Optional[str] = None
    status: Optional[PageStatus] = None
    search: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "PageFilter":
        status = args.get("status") or None
        if status is not None:
            try:
                status = PageStatus(status)
            except ValueError:
                raise ValidationError(
                    f"Unknown page status: {status}",
                    details={"allowed": [s.value for s in PageStatus]},
                ) from None
        return cls(
            site_id=args.get("siteId") or None,
            status=status,
            search=args.get("search") or None,
        )

    def predicates(self) -> List[Any]:
        clauses: List[Any] = []
        if self.site_id:
            clauses.append(Page.site_id == self.site_id)
        if self.status:
            clauses.append(Page.status == self.status)
        if self.search:
            clauses.append(or_(_contains(Page.title, self.search), _contains(Page.excerpt, self.search)))
        return clauses


@dataclass(frozen=True)
class MediaFilter:
    site_id: Optional[str] = None
    kind: Optional[MediaKind] = None
    search: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "MediaFilter":
        kind = args.get("type") or None
        if kind is not None:
            try:
                kind = MediaKind(kind)
            except ValueError:
                raise ValidationError(
                    f"Unknown media type: {kind}",
                    details={"allowed": [k.value for k in MediaKind]},
                ) from None
        return cls(
            site_id=args.get("siteId") or None,
            kind=kind,
            search=args.get("search") or None,
        )

    def predicates(self) -> List[Any]:
        clauses: List[Any] = []
        if self.site_id:
            clauses.append(Media.site_id == self.site_id)
        if self.kind is MediaKind.IMAGES:
            clauses.append(Media.mime_type.startswith("image/"))
        elif self.kind is MediaKind.VIDEOS:
            clauses.append(Media.mime_type.startswith("video/"))
        elif self.kind is MediaKind.DOCUMENTS:
            clauses.append(Media.mime_type.in_(DOCUMENT_MIME_TYPES))
        if self.search:
            clauses.append(or_(
                _contains(Media.original_name, self.search),
                _contains(Media.filename, self.search),
                _contains(Media.alt, self.search),
            ))
        return clauses
