from flask import jsonify, request
from flask_jwt_extended import jwt_required

from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_select
from tenantcms.extensions import db
from tenantcms.models import AuditLog
from tenantcms.normalizers.audit import normalize_audit_log
from tenantcms.normalizers.pagination import normalize_pagination
from tenantcms.utils.decorators import capability_required, current_identity
from tenantcms.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/audit", methods=["GET"])
@jwt_required()
@capability_required(Action.AUDIT_READ)
def list_audit_logs():
    stmt = scoped_select(current_identity(), AuditLog)

    # Optional filters
    if action := request.args.get("action"):
        stmt = stmt.where(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        stmt = stmt.where(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        stmt = stmt.where(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(
        db.session,
        stmt,
        model=AuditLog,
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit")),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=meta)), 200
