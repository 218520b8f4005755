from flask import current_app, jsonify
from flask_jwt_extended import get_current_user, jwt_required

from tenantcms.application.accounts.login import authenticate_user
from tenantcms.application.accounts.register import register_tenant
from tenantcms.auth.tokens import issue_tokens, verify_token
from tenantcms.extensions import db
from tenantcms.models import User
from tenantcms.normalizers.user import normalize_session, normalize_tenant, normalize_user
from tenantcms.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest
from tenantcms.utils.decorators import current_identity
from tenantcms.utils.validation import parse_body
from . import v1_bp


@v1_bp.route("/auth/register", methods=["POST"])
def register():
    payload = parse_body(RegisterRequest)
    _, user = register_tenant(db.session, payload=payload)

    body = normalize_session(user, issue_tokens(user))
    body["message"] = "Registration successful"
    return jsonify(body), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    payload = parse_body(LoginRequest)
    user = authenticate_user(db.session, email=payload.email, password=payload.password)

    body = normalize_session(user, issue_tokens(user))
    body["message"] = "Login successful"
    return jsonify(body), 200


@v1_bp.route("/auth/refresh", methods=["POST"])
def refresh():
    payload = parse_body(RefreshRequest)
    identity = verify_token(payload.refresh_token, session=db.session, expected_type="refresh")
    user = db.session.get(User, identity.user_id)

    return jsonify({"tokens": issue_tokens(user)}), 200


@v1_bp.route("/auth/logout", methods=["POST"])
@jwt_required()
def logout():
    # Tokens are stateless; the client discards them
    current_app.logger.info("User %s logged out", current_identity().user_id)
    return jsonify({"message": "Logout successful"}), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    user = get_current_user()
    return jsonify({
        "user": normalize_user(user),
        "tenant": normalize_tenant(user.tenant),
    }), 200
