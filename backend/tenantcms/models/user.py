from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash
from tenantcms.domain.roles import Role
from tenantcms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class User(BaseModel, TenantMixin):
    __tablename__ = "users"

    __table_args__ = (
        db.UniqueConstraint("email", name="uq_user_email"),
    )

    email = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120), nullable=False, default="")
    last_name = db.Column(db.String(120), nullable=False, default="")

    role = db.Column(
        db.Enum(Role, name="user_role", native_enum=False, length=20),
        nullable=False,
        default=Role.EDITOR,
    )
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    tenant = db.relationship("Tenant", back_populates="users")

    def set_password(self, password):
        method = current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")
        self.password_hash = generate_password_hash(password, method=method)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
