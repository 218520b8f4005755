from tenantcms.extensions import db


class TenantMixin:
    tenant_id = db.Column(
        db.String(36),
        db.ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )


class SiteMixin:
    """Ownership through a Site; the tenant is reached transitively."""

    site_id = db.Column(
        db.String(36),
        db.ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
