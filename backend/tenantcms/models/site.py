from tenantcms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class Site(BaseModel, TenantMixin):
    __tablename__ = "sites"

    __table_args__ = (
        db.UniqueConstraint("domain", name="uq_site_domain"),
    )

    name = db.Column(db.String(255), nullable=False)
    domain = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    theme = db.Column(db.String(100), nullable=False, default="default")
    seo_settings = db.Column(db.JSON, nullable=False, default=dict)  # default_title, default_description, keywords
    is_published = db.Column(db.Boolean, nullable=False, default=False)

    tenant = db.relationship("Tenant", back_populates="sites")

    # Deleting a site takes its pages and media with it
    pages = db.relationship(
        "Page",
        back_populates="site",
        cascade="all, delete-orphan",
        order_by="Page.updated_at.desc()",
    )
    media = db.relationship(
        "Media",
        back_populates="site",
        cascade="all, delete-orphan",
        order_by="Media.created_at.desc()",
    )
