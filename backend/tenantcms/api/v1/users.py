from flask import jsonify, request
from flask_jwt_extended import jwt_required

from tenantcms.domain.errors import ValidationError
from tenantcms.domain.roles import Action, Role
from tenantcms.domain.scope import scoped_select
from tenantcms.extensions import db
from tenantcms.models import User
from tenantcms.normalizers.user import normalize_user
from tenantcms.utils.decorators import capability_required, current_identity
from . import v1_bp


@v1_bp.route("/users", methods=["GET"])
@jwt_required()
@capability_required(Action.USER_LIST)
def list_users():
    stmt = scoped_select(current_identity(), User)

    if role := request.args.get("role"):
        try:
            stmt = stmt.where(User.role == Role(role))
        except ValueError:
            raise ValidationError(f"Unknown role: {role}") from None

    if (is_active := request.args.get("isActive")) is not None:
        stmt = stmt.where(User.is_active.is_(is_active.lower() == "true"))

    users = db.session.execute(stmt.order_by(User.created_at.desc())).scalars().all()
    return jsonify({
        "users": [normalize_user(user) for user in users],
        "total": len(users),
    }), 200
