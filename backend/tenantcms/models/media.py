from tenantcms.extensions import db
from .base import BaseModel
from .tenant_mixin import SiteMixin


class Media(BaseModel, SiteMixin):
    __tablename__ = "media"

    __table_args__ = (
        db.UniqueConstraint("site_id", "filename", name="uq_media_filename_per_site"),
    )

    filename = db.Column(db.String(255), nullable=False)
    original_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(255), nullable=False, index=True)
    size = db.Column(db.BigInteger, nullable=False)
    url = db.Column(db.String(1024), nullable=False)  # bytes live in external storage
    alt = db.Column(db.String(500), nullable=True)

    site = db.relationship("Site", back_populates="media")
