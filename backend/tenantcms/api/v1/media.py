from flask import jsonify, request
from flask_jwt_extended import jwt_required

from tenantcms.application.media.create_media import create_media
from tenantcms.application.media.delete_media import delete_media
from tenantcms.application.media.update_media import update_media
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import MediaFilter, scoped_get, scoped_select
from tenantcms.extensions import db
from tenantcms.models import Media
from tenantcms.normalizers.media import normalize_media, normalize_media_listing
from tenantcms.schemas.media import MediaCreate, MediaUpdate
from tenantcms.utils.decorators import capability_required, current_identity
from tenantcms.utils.validation import parse_body
from . import v1_bp


@v1_bp.route("/media", methods=["GET"])
@jwt_required()
@capability_required(Action.MEDIA_READ)
def list_media():
    filters = MediaFilter.from_args(request.args)
    items = db.session.execute(
        scoped_select(current_identity(), Media, *filters.predicates())
        .order_by(Media.created_at.desc())
    ).scalars().all()

    return jsonify(normalize_media_listing(items)), 200


@v1_bp.route("/media/<media_id>", methods=["GET"])
@jwt_required()
@capability_required(Action.MEDIA_READ)
def get_media(media_id):
    media = scoped_get(db.session, current_identity(), Media, media_id)
    return jsonify({"media": normalize_media(media)}), 200


@v1_bp.route("/media", methods=["POST"])
@jwt_required()
@capability_required(Action.MEDIA_CREATE)
def create_media_route():
    payload = parse_body(MediaCreate)
    media = create_media(db.session, identity=current_identity(), payload=payload)
    return jsonify({
        "message": "Media created successfully",
        "media": normalize_media(media),
    }), 201


@v1_bp.route("/media/<media_id>", methods=["PUT"])
@jwt_required()
@capability_required(Action.MEDIA_UPDATE)
def update_media_route(media_id):
    payload = parse_body(MediaUpdate)
    media = update_media(
        db.session,
        identity=current_identity(),
        media_id=media_id,
        payload=payload,
        if_unmodified_since=request.headers.get("If-Unmodified-Since"),
    )
    return jsonify({
        "message": "Media updated successfully",
        "media": normalize_media(media),
    }), 200


@v1_bp.route("/media/<media_id>", methods=["DELETE"])
@jwt_required()
@capability_required(Action.MEDIA_DELETE)
def delete_media_route(media_id):
    delete_media(db.session, identity=current_identity(), media_id=media_id)
    return jsonify({"message": "Media deleted successfully"}), 200
