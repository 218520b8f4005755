from tenantcms.domain.status import PageStatus
from tenantcms.extensions import db
from .base import BaseModel
from .tenant_mixin import SiteMixin


class Page(BaseModel, SiteMixin):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    content = db.Column(db.JSON, nullable=False, default=dict)
    excerpt = db.Column(db.Text, nullable=True)
    status = db.Column(
        db.Enum(PageStatus, name="page_status", native_enum=False, length=20),
        nullable=False,
        default=PageStatus.DRAFT,
        index=True,
    )
    is_home_page = db.Column(db.Boolean, nullable=False, default=False)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    seo_title = db.Column(db.String(255), nullable=True)
    seo_description = db.Column(db.Text, nullable=True)
    featured_image = db.Column(db.String(1024), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_page_slug_per_site"),
        # At most one home page per site, enforced by the storage engine
        db.Index(
            "uq_page_home_per_site",
            "site_id",
            unique=True,
            postgresql_where=db.text("is_home_page"),
            sqlite_where=db.text("is_home_page = 1"),
        ),
    )

    site = db.relationship("Site", back_populates="pages")
    author = db.relationship("User")
