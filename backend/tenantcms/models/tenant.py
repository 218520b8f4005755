from tenantcms.extensions import db
from .base import BaseModel


def default_settings() -> dict:
    return {
        "allow_registration": False,  # only admins add users at first
        "default_role": "EDITOR",
    }


class Tenant(BaseModel):
    __tablename__ = "tenants"

    __table_args__ = (
        db.UniqueConstraint("domain", name="uq_tenant_domain"),
    )

    name = db.Column(db.String(255), nullable=False)
    domain = db.Column(db.String(255), nullable=True)

    # Opaque key/value settings
    settings = db.Column(db.JSON, nullable=False, default=default_settings)

    users = db.relationship("User", back_populates="tenant")
    sites = db.relationship("Site", back_populates="tenant")
