from flask import jsonify, request
from flask_jwt_extended import jwt_required

from tenantcms.application.cms.create_page import create_page
from tenantcms.application.cms.delete_page import delete_page
from tenantcms.application.cms.publish_page import change_page_status
from tenantcms.application.cms.update_page import update_page
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import PageFilter, scoped_get, scoped_select
from tenantcms.extensions import db
from tenantcms.models import Page
from tenantcms.normalizers.page import normalize_page
from tenantcms.schemas.page import PageCreate, PageStatusChange, PageUpdate
from tenantcms.utils.decorators import capability_required, current_identity
from tenantcms.utils.validation import parse_body
from . import v1_bp


@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@capability_required(Action.PAGE_READ)
def list_pages():
    filters = PageFilter.from_args(request.args)
    pages = db.session.execute(
        scoped_select(current_identity(), Page, *filters.predicates())
        .order_by(Page.updated_at.desc())
    ).scalars().all()

    return jsonify({
        "pages": [normalize_page(page) for page in pages],
        "total": len(pages),
    }), 200


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@capability_required(Action.PAGE_READ)
def get_page(page_id):
    page = scoped_get(db.session, current_identity(), Page, page_id)
    return jsonify({"page": normalize_page(page, detail=True)}), 200


@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@capability_required(Action.PAGE_CREATE)
def create_page_route():
    payload = parse_body(PageCreate)
    page = create_page(db.session, identity=current_identity(), payload=payload)
    return jsonify({
        "message": "Page created successfully",
        "page": normalize_page(page, detail=True),
    }), 201


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@capability_required(Action.PAGE_UPDATE)
def update_page_route(page_id):
    payload = parse_body(PageUpdate)
    page = update_page(
        db.session,
        identity=current_identity(),
        page_id=page_id,
        payload=payload,
        if_unmodified_since=request.headers.get("If-Unmodified-Since"),
    )
    return jsonify({
        "message": "Page updated successfully",
        "page": normalize_page(page, detail=True),
    }), 200


@v1_bp.route("/pages/<page_id>/publish", methods=["PATCH"])
@jwt_required()
@capability_required(Action.PAGE_PUBLISH)
def change_page_status_route(page_id):
    payload = parse_body(PageStatusChange)
    page = change_page_status(
        db.session,
        identity=current_identity(),
        page_id=page_id,
        status=payload.status,
    )
    return jsonify({
        "message": f"Page status set to {page.status.value}",
        "page": normalize_page(page, detail=True),
    }), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@capability_required(Action.PAGE_DELETE)
def delete_page_route(page_id):
    delete_page(db.session, identity=current_identity(), page_id=page_id)
    return jsonify({"message": "Page deleted successfully"}), 200
