from flask import jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import func, select

from tenantcms.application.sites.create_site import create_site
from tenantcms.application.sites.delete_site import delete_site
from tenantcms.application.sites.publish_site import publish_site
from tenantcms.application.sites.update_site import update_site
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get, scoped_select
from tenantcms.extensions import db
from tenantcms.models import Media, Page, Site
from tenantcms.normalizers.site import normalize_site, normalize_site_detail
from tenantcms.schemas.site import SiteCreate, SitePublish, SiteUpdate
from tenantcms.utils.decorators import capability_required, current_identity
from tenantcms.utils.validation import parse_body
from . import v1_bp


def _counts(model, site_ids):
    if not site_ids:
        return {}
    rows = db.session.execute(
        select(model.site_id, func.count(model.id))
        .where(model.site_id.in_(site_ids))
        .group_by(model.site_id)
    )
    return dict(rows.all())


@v1_bp.route("/sites", methods=["GET"])
@jwt_required()
@capability_required(Action.SITE_READ)
def list_sites():
    sites = db.session.execute(
        scoped_select(current_identity(), Site).order_by(Site.created_at.desc())
    ).scalars().all()

    site_ids = [site.id for site in sites]
    page_counts = _counts(Page, site_ids)
    media_counts = _counts(Media, site_ids)

    return jsonify({
        "sites": [
            normalize_site(
                site,
                page_count=page_counts.get(site.id, 0),
                media_count=media_counts.get(site.id, 0),
            )
            for site in sites
        ],
    }), 200


@v1_bp.route("/sites/<site_id>", methods=["GET"])
@jwt_required()
@capability_required(Action.SITE_READ)
def get_site(site_id):
    site = scoped_get(db.session, current_identity(), Site, site_id)
    return jsonify({"site": normalize_site_detail(site)}), 200


@v1_bp.route("/sites", methods=["POST"])
@jwt_required()
@capability_required(Action.SITE_CREATE)
def create_site_route():
    payload = parse_body(SiteCreate)
    site = create_site(db.session, identity=current_identity(), payload=payload)
    return jsonify({
        "message": "Site created successfully",
        "site": normalize_site_detail(site),
    }), 201


@v1_bp.route("/sites/<site_id>", methods=["PUT"])
@jwt_required()
@capability_required(Action.SITE_UPDATE)
def update_site_route(site_id):
    payload = parse_body(SiteUpdate)
    site = update_site(
        db.session,
        identity=current_identity(),
        site_id=site_id,
        payload=payload,
        if_unmodified_since=request.headers.get("If-Unmodified-Since"),
    )
    return jsonify({
        "message": "Site updated successfully",
        "site": normalize_site_detail(site),
    }), 200


@v1_bp.route("/sites/<site_id>/publish", methods=["PATCH"])
@jwt_required()
@capability_required(Action.SITE_PUBLISH)
def publish_site_route(site_id):
    payload = parse_body(SitePublish)
    site = publish_site(
        db.session,
        identity=current_identity(),
        site_id=site_id,
        is_published=payload.is_published,
    )
    state = "published" if site.is_published else "unpublished"
    return jsonify({
        "message": f"Site {state} successfully",
        "site": normalize_site_detail(site),
    }), 200


@v1_bp.route("/sites/<site_id>", methods=["DELETE"])
@jwt_required()
@capability_required(Action.SITE_DELETE)
def delete_site_route(site_id):
    delete_site(db.session, identity=current_identity(), site_id=site_id)
    return jsonify({"message": "Site deleted successfully"}), 200
